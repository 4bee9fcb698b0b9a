# statusblocks

Building blocks for a text status bar. Each module holds the logic behind one
block. It gathers data from the system or from a command-line tool
(`amixer`, `xrandr`, `nordvpn`, `task`, `speedtest-cli`, a shell), turns that
data into display values, and decides the block's state. The package needs
only the standard library.

## Modules

| Module | What it does |
|--------|--------------|
| `statusblocks.errors` | `BlockError` and `ErrorKind`; the helpers `other_error`, `config_error` and `format_error` |
| `statusblocks.escape` | `pango_escape(text)` escapes `&`, `<`, `>` and `'` for Pango markup |
| `statusblocks.click` | `MouseButton`, `parse_mouse_button`, `parse_click_entry` and `ClickHandler`, which runs the command configured for a button and returns `PostActions` |
| `statusblocks.formatting` | `Fragment` and `Metadata`: text pieces wrapped in `<i>` and `<u>` tags by `Fragment.formatted_text()` |
| `statusblocks.sound` | `AlsaDevice` reads and sets volume and mute through `amixer`; `choose_icon`, `clamp_step_width`, `apply_mapping`, `parse_amixer_output` |
| `statusblocks.temperature` | `TemperatureScale`, `temperature_thresholds`, `temperature_state`, `filter_readings` and `summarize`; also the `State` enum used by other blocks |
| `statusblocks.weather` | `convert_wind_direction`, `australian_apparent_temp`, `WeatherResult` and IP location via `find_ip_location` |
| `statusblocks.met_no` | `MetNoService`, `parse_forecast`, `translate` and `weather_to_icon` for the met.no forecast service |
| `statusblocks.watson` | `parse_state` for the Watson state file, `WatsonActivity`, `format_delta_past`, `format_delta_after`, `default_state_path` |
| `statusblocks.vpn` | `parse_nordvpn_status`, `Status` and `NordVpnDriver`, which queries and toggles the connection |
| `statusblocks.uptime` | `read_uptime`, `parse_uptime` and `format_uptime` |
| `statusblocks.xrandr` | `get_monitors`, `parse_monitors`, `Monitor.set_brightness`, `brightness_up`, `brightness_down` |
| `statusblocks.taskwarrior` | `get_number_of_tasks`, `parse_task_count`, `task_state`, `cycle_filters` and `TaskFilter` |
| `statusblocks.tea_timer` | `TeaTimer`, a countdown timer that takes `increment`, `decrement` and `reset` actions |
| `statusblocks.toggle` | `Toggle`, which runs shell commands to read, switch on and switch off a state |
| `statusblocks.speedtest` | `run_speedtest` runs `speedtest-cli --json`; `parse_speedtest_output` reads its result |
| `statusblocks.clock` | `parse_timezones` and `TimezoneCycle`, which steps through configured time zones |

## Examples

```python
from statusblocks.escape import pango_escape
from statusblocks.uptime import format_uptime
from statusblocks.weather import convert_wind_direction

pango_escape("&my 'text' <>")   # '&amp;my &#39;text&#39; &lt;&gt;'
format_uptime(90061)           # '1d 1h'
convert_wind_direction(45.0)   # 'NE'
```

A tea timer:

```python
from datetime import datetime, timezone
from statusblocks.tea_timer import TeaTimer

timer = TeaTimer(increment=30)
now = datetime.now(timezone.utc)
timer.handle_action("increment", now)
timer.values(now)   # {'icon': 'tea', 'hours': '00', 'minutes': '00', 'seconds': '30'}
```

Errors are raised as `BlockError`. Its text says what failed and, once
`in_block` has been called, in which block.

## What it does not do

- There is no bar program: nothing reads a configuration file, schedules the
  blocks, or writes the bar protocol to standard output.
- Format strings such as `" $icon $volume "` are not parsed or rendered; the
  modules return plain placeholder values and icon names.
- Sound is read only through ALSA's `amixer`; there is no PulseAudio driver.
- Temperature readings are not collected from hardware sensors; the module
  filters, converts and summarizes readings it is given.
- Files are not watched for changes; callers poll.

## Tests

```
pip install .[test]
pytest
```