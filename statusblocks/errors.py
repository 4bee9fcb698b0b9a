"""Error type shared by the status blocks."""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """The broad category an error belongs to."""

    CONFIG = "config"
    FORMAT = "format"
    OTHER = "other"


class BlockError(Exception):
    """An error raised while configuring or running a block."""

    def __init__(
        self,
        message: str | None = None,
        kind: ErrorKind = ErrorKind.OTHER,
        cause: BaseException | object | None = None,
        block: tuple[str, int] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.cause = cause
        self.block = block
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def in_block(self, block: str, block_id: int) -> BlockError:
        """Attach the block name and id to this error and return it."""
        self.block = (block, block_id)
        return self

    def __str__(self) -> str:
        parts: list[str] = []
        if self.block is not None:
            if self.kind in (ErrorKind.CONFIG, ErrorKind.FORMAT):
                parts.append("Configuration error")
            else:
                parts.append("Error")
            parts.append(f" in {self.block[0]}")
            if self.message is not None:
                parts.append(f": {self.message}")
        else:
            parts.append(self.message if self.message is not None else "Error")
        if self.cause is not None:
            parts.append(f". (Cause: {self.cause})")
        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"BlockError(message={self.message!r}, kind={self.kind}, "
            f"cause={self.cause!r}, block={self.block!r})"
        )


def other_error(message: str, cause: BaseException | object | None = None) -> BlockError:
    """Build a general error with a message and an optional cause."""
    return BlockError(message, ErrorKind.OTHER, cause)


def config_error(cause: BaseException | object | None = None) -> BlockError:
    """Build a configuration error carrying only its cause."""
    return BlockError(None, ErrorKind.CONFIG, cause)


def format_error(message: str, cause: BaseException | object | None = None) -> BlockError:
    """Build a format error with a message and an optional cause."""
    return BlockError(message, ErrorKind.FORMAT, cause)