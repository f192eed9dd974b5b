# deskkit

Small tools for a minimal Linux desktop:

- **Status line**: a line built from components (CPU usage, date and time,
  memory, swap, disks, battery, network speeds, Wi-Fi, volume and more),
  refreshed once a second and written either to the name of the X root
  window or to standard output.
- **Fetch**: a centred system summary for the terminal (kernel, host name,
  window manager, shell, uptime, CPU, RAM, GPU, disk, OS and a colour strip).
- **Box drawing**: the rectangles that make up U+2500–U+259F line, block,
  quadrant and shade characters, and braille patterns, for a given cell size.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Status line

```
deskkit-status -s
```

With `-s` one status line is printed to standard output every second until
the program receives SIGINT or SIGTERM. Without `-s` the line is stored as
the name (`WM_NAME`) of the root window of the display in `$DISPLAY`, which
is where many tiling window managers read their bar text; the name is
cleared again on exit. Any other option or argument prints the usage line
and exits with status 1.

The line shows the components returned by
`deskkit.statusbar.default_components()`: CPU usage and the date and time.
A field whose value cannot be read is shown as `n/a`.

From Python, build a line from your own components:

```python
from deskkit.statusbar import Component, render_status
from deskkit.components.memory import ram_perc
from deskkit.components.system import datetime_str

line = render_status(
    [Component(ram_perc, "RAM %s%% "), Component(datetime_str, "%s", "%F %T")],
    "n/a",
    2048,
)
print(line)
```

`Component(func, fmt, arg)` calls `func(arg)` (or `func()` when `arg` is
`None`) and substitutes the result into the `%`-style `fmt`.
`render_status` stops before the first component that would make the line
reach `maxlen` bytes.

Every component returns a string, or `None` when the value is not available:

- `deskkit.components.cpu`: `cpu_freq`, `cpu_perc`, and the `CpuUsage`
  class behind `cpu_perc` (usage between two samples, so the first call
  returns `None`).
- `deskkit.components.memory`: `ram_free`, `ram_perc`, `ram_total`,
  `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used`
  (from `/proc/meminfo`).
- `deskkit.components.files`: `disk_free`, `disk_perc`, `disk_total`,
  `disk_used`, `num_files`, `temp`, `run_command`.
- `deskkit.components.system`: `datetime_str`, `entropy`, `hostname`,
  `kernel_release`, `load_avg`, `uptime`, `gid`, `uid`, `username`.
- `deskkit.components.battery`: `battery_perc`, `battery_state`,
  `battery_remaining`.
- `deskkit.components.ip`: `ipv4`, `ipv6`.
- `deskkit.components.netspeeds`: `netspeed_rx`, `netspeed_tx`, and the
  `ByteCounter` class behind them.
- `deskkit.components.wifi`: `wifi_perc`, `wifi_essid`.
- `deskkit.components.volume`: `vol_perc` (OSS mixer device).

Sizes are formatted by `deskkit.util.fmt_human`, which uses decimal
(`k`, `M`, …) or binary (`Ki`, `Mi`, …) prefixes.

## Fetch

```
deskkit-fetch
```

With no options it shows kernel, host name, window manager, shell, uptime
and the colour strip. Choose fields with any of:

```
deskkit-fetch --cpu --ram --gpu --disk --host --kernel --os --shell --uptime --colors --wm --user
```

`deskkit-fetch --help` prints the usage banner. Output is drawn on the
terminal's alternate screen, which is left again once a key followed by
Enter is read from standard input. The GPU name comes from `lspci`.

The data functions are also available on their own in `deskkit.fetch.info`:
`get_cpu_info`, `get_memory_usage`, `get_memory_total`, `get_system_info`,
`get_disk_info`, `get_gpu_model`, `get_uptime` and `get_current_username`.

## Box drawing

```python
from deskkit.boxdraw import box_index, draw_box

shape = box_index(0x253C, False, False, False)   # light cross
for rect in draw_box(0, 0, 10, 20, shape):
    print(rect)
```

`is_boxdraw` tells whether a code point is drawn this way, and
`shade_color` blends foreground and background for the shade characters
(a `Rect` with a non-zero `shade` stands for such a blended fill).

## What it does not do

- The status command has no configuration file or option to choose its
  components; other lines are built from Python as shown above.
- There are no keyboard-indicator or keyboard-layout components.
- Most components read Linux `/proc` and `/sys` files and return `None`
  on other systems.
- The box-drawing module only computes rectangles; it draws nothing and
  is not a terminal.