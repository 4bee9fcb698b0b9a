import pytest

from statusblocks.errors import (
    BlockError,
    ErrorKind,
    config_error,
    format_error,
    other_error,
)


def test_default_message_is_error():
    assert str(BlockError()) == "Error"


def test_message_without_block():
    assert str(BlockError("something broke")) == "something broke"


def test_message_with_cause():
    err = other_error("something broke", ValueError("boom"))
    assert str(err) == "something broke. (Cause: boom)"
    assert err.kind is ErrorKind.OTHER
    assert err.__cause__ is err.cause


def test_config_error_in_block():
    err = BlockError("bad value", ErrorKind.CONFIG).in_block("sound", 3)
    assert str(err) == "Configuration error in sound: bad value"
    assert err.block == ("sound", 3)


def test_format_error_in_block_reads_as_configuration():
    err = format_error("bad format").in_block("time", 0)
    assert str(err).startswith("Configuration error in time")
    assert err.kind is ErrorKind.FORMAT


def test_other_error_in_block_without_message():
    err = BlockError(cause=OSError("gone")).in_block("uptime", 1)
    assert str(err) == "Error in uptime. (Cause: gone)"


def test_in_block_returns_same_object():
    err = other_error("x")
    assert err.in_block("vpn", 2) is err


def test_config_error_has_no_message():
    cause = KeyError("k")
    err = config_error(cause)
    assert err.kind is ErrorKind.CONFIG
    assert err.message is None
    assert err.cause is cause


def test_raises_as_exception():
    err = other_error("failed", ValueError("x"))
    assert err.message == "failed"
    assert str(err) == "failed. (Cause: x)"
    with pytest.raises(BlockError, match="failed") as info:
        raise err
    assert info.value is err