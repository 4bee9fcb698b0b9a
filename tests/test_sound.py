import subprocess
from unittest import mock

import pytest

from statusblocks.errors import BlockError
from statusblocks.sound import (
    AlsaDevice,
    DeviceKind,
    SoundDriver,
    apply_mapping,
    choose_icon,
    clamp_step_width,
    parse_amixer_output,
)

AMIXER_OUTPUT = """Simple mixer control 'Master',0
  Capabilities: pvolume pswitch pswitch-joined
  Playback channels: Front Left - Front Right
  Limits: Playback 0 - 65536
  Mono:
  Front Left: Playback 45875 [70%] [on]
  Front Right: Playback 45875 [70%] [off]
"""


def _completed(stdout=b""):
    return subprocess.CompletedProcess(args=["amixer"], returncode=0, stdout=stdout)


@pytest.mark.parametrize(
    "muted, kind, expected",
    [
        (False, DeviceKind.SINK, "volume"),
        (True, DeviceKind.SINK, "volume_muted"),
        (False, DeviceKind.SOURCE, "microphone"),
        (True, DeviceKind.SOURCE, "microphone_muted"),
    ],
)
def test_choose_icon_plain(muted, kind, expected):
    assert choose_icon(muted, kind, False, "headset", None) == expected


@pytest.mark.parametrize("form_factor", ["headset", "headphone", "hands-free", "portable"])
def test_choose_icon_headphone_form_factors(form_factor):
    assert choose_icon(True, DeviceKind.SINK, True, form_factor, None) == "headphones"


def test_choose_icon_other_form_factor_ignores_port():
    assert choose_icon(False, DeviceKind.SINK, True, "speaker", "analog-output-headphones") == "volume"


def test_choose_icon_falls_back_to_active_port():
    assert choose_icon(False, DeviceKind.SINK, True, None, "analog-output-headphones") == "headphones"
    assert choose_icon(False, DeviceKind.SINK, True, None, "analog-output-speaker") == "volume"
    assert choose_icon(False, DeviceKind.SINK, True, None, None) == "volume"


def test_choose_icon_source_ignores_headphones():
    assert choose_icon(False, DeviceKind.SOURCE, True, "headset", None) == "microphone"


def test_clamp_step_width():
    assert clamp_step_width(5) == 5
    assert clamp_step_width(100) == 50
    assert clamp_step_width(0) == 0


def test_apply_mapping():
    mappings = {"alsa_output.pci-analog-stereo": "Headset"}
    assert apply_mapping("alsa_output.pci-analog-stereo", mappings) == "Headset"
    assert apply_mapping("other", mappings) == "other"
    assert apply_mapping("other", None) == "other"


def test_sound_driver_values():
    assert SoundDriver("alsa") is SoundDriver.ALSA
    assert SoundDriver("auto") is SoundDriver.AUTO


def test_parse_amixer_output_reads_last_line():
    assert parse_amixer_output(AMIXER_OUTPUT) == (70, True)


def test_parse_amixer_output_skips_decibels():
    line = "  Mono: Playback 31 [70%] [-9.00dB] [on]\n"
    assert parse_amixer_output(line) == (70, False)


def test_parse_amixer_output_without_switch_is_unmuted():
    assert parse_amixer_output("Capture 10 [42%]") == (42, False)


@pytest.mark.parametrize("output", ["", "   \n", "no brackets here", "[abc] [on]"])
def test_parse_amixer_output_errors(output):
    with pytest.raises(BlockError):
        parse_amixer_output(output)


def test_amixer_args():
    plain = AlsaDevice("Master", "default", False)
    natural = AlsaDevice("Master", "hw:0", True)
    assert plain.amixer_args("get", "Master") == ["-D", "default", "get", "Master"]
    assert natural.amixer_args("set", "Master", "toggle") == [
        "-M", "-D", "hw:0", "set", "Master", "toggle",
    ]


def test_device_describes_itself():
    device = AlsaDevice("Master", "default", False)
    assert device.output_name == "Master"
    assert device.output_description is None
    assert device.active_port is None
    assert device.form_factor is None


def test_get_info_runs_amixer():
    device = AlsaDevice("Master", "default", True)
    with mock.patch("subprocess.run", return_value=_completed(AMIXER_OUTPUT.encode())) as run:
        device.get_info()
    assert run.call_args.args[0] == ["amixer", "-M", "-D", "default", "get", "Master"]
    assert (device.volume, device.muted) == (70, True)


def test_get_info_failure_to_start():
    device = AlsaDevice("Master", "default", False)
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("amixer")):
        with pytest.raises(BlockError) as info:
            device.get_info()
    assert info.value.message == "could not run amixer to get sound info"


def test_set_volume_caps_and_floors():
    device = AlsaDevice("Master", "default", False)
    device.volume = 98
    with mock.patch("subprocess.run", return_value=_completed()) as run:
        device.set_volume(5, 100)
        assert device.volume == 100
        assert run.call_args.args[0] == ["amixer", "-D", "default", "set", "Master", "100%"]
        device.set_volume(-500, None)
        assert device.volume == 0


def test_set_volume_without_cap_goes_above_hundred():
    device = AlsaDevice("Master", "default", False)
    device.volume = 100
    with mock.patch("subprocess.run", return_value=_completed()):
        device.set_volume(5, None)
    assert device.volume == 105


def test_toggle_flips_mute():
    device = AlsaDevice("PCM", "hw:1", False)
    with mock.patch("subprocess.run", return_value=_completed()) as run:
        device.toggle()
        assert device.muted is True
        device.toggle()
    assert device.muted is False
    assert run.call_args.args[0] == ["amixer", "-D", "hw:1", "set", "PCM", "toggle"]


def test_wait_for_update_start_failure():
    device = AlsaDevice("Master", "default", False)
    with mock.patch("subprocess.Popen", side_effect=FileNotFoundError("alsactl")):
        with pytest.raises(BlockError) as info:
            device.wait_for_update()
    assert info.value.message == "Failed to start alsactl monitor"