# layaway

Calculates the physical screen layout for Sway from a short, relative description.

Rather than working out pixel positions by hand, you list your screens and say where
each one goes relative to everything placed so far:

```text
dp + edp/bottom,center + vga/top,center
```

## Installation

```sh
pip install .
```

This installs the `layaway` command.

## Usage

Apply a layout directly to the running Sway session:

```sh
layaway "hdmi + edp"
```

Print the `output` commands instead of applying them:

```sh
layaway --no-apply "dp2 @ 1440p : 1.5 + edp/bottom,center"
```

`-n` is the short form of `--no-apply`. Each printed line is one Sway command, such as
`output DP-2 position 0 0 scale 1.5 transform normal resolution 2560x1440`.

With no description given, `layaway` looks up the layout for this machine's hostname
in its config file (`~/.config/layaway/config.toml` on most Linux systems):

```toml
[machines]
my-laptop = "edp + hdmi/left"
my-desktop = "dp1 + dp2 + dp3"
```

On failure the command prints a message starting with `Error:` to standard error
and exits with status 1.

## The description format

Screens are joined with `+`. Each screen is a connector name with an optional index
(default `1`), followed by optional parts in this order:

| Part          | Syntax              | Example               |
|---------------|---------------------|-----------------------|
| resolution    | `@ name` or `@ WxH` | `@ 4k`, `@ 1920x1200` |
| scale         | `: float`           | `: 1.25`              |
| transform     | `# [flip] angle`    | `# flip 90`           |
| position      | `/ edge[,align]`    | `/ left,center`       |

Connectors include `edp`, `dp`, `hdmi` (same as `hdmia`), `hdmib`, `vga`, `dvid`,
`usb`, `virtual` and `headless`. Named resolutions include `720p`, `1080p`, `1440p`,
`4k`, `5k` and `8k`. The transform angle is one of `0`, `90`, `180` or `270`
(clockwise); `flip` alone means flipped without rotation.

The position names the edge of the bounding box of all earlier screens that the new
screen sits against (`left`, `right`, `top`, `bottom`; default `right`), then how it
is aligned along that edge. For `left`/`right` the alignment is `top` (default),
`center` or `bottom`; for `top`/`bottom` it is `left`, `center` (default) or `right`.

A scale not given is taken from what Sway currently reports, or `1` if the screen is
not connected. A resolution not given is taken from Sway; screens that are neither
connected nor given a resolution are left out. Positions account for scale, and the
finished layout is moved so its upper left corner is at `0 0`.

## Library use

```python
from layaway.comms import SwayComms, layout_to_sway_commands
from layaway.dsl import parse_layout

relative = parse_layout("dp + edp/bottom,center")
with SwayComms() as comms:
    layout = relative.to_absolute(comms)
for command in layout_to_sway_commands(layout):
    print(command)
```

- `layaway.dsl.parse_layout` parses a description into a `layaway.relative.Layout`;
  invalid input raises `layaway.dsl.ParseError`.
- `layaway.relative.Layout.to_absolute` resolves it into a `layaway.absolute.Layout`
  using any `layaway.comms.Comms` implementation.
- `layaway.comms.establish` connects to Sway through `SWAYSOCK`, raising
  `NoWmRunningError` if it is not set.
- `layaway.config.Config.load` reads the config file; `Config.machine_layout` looks up
  a description by hostname.

## Limitations

Only Sway is supported, through its IPC socket. Other window managers and X11 setups
are not handled.