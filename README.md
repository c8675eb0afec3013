# waybargraphs

Small, long-running commands for the custom modules of the Waybar status bar. The graph and
update commands print one JSON object per line, with the fields `text`, `tooltip`, `class`,
`alt` and, for the graphs, `percentage`. Waybar reads these lines and shows them.

The graph commands draw a short history as a row of Pango `<span>` elements. The characters
`0`, `b`…`j` (and `k`…`t` for the lower row of the network graph) are meant to be shown in a
bar-graph font. Each character has a colour that runs from cool to hot.

## Install

```
pip install .
```

## Commands

| Command | Shows |
|---|---|
| `waybar-cpugraph` | CPU load history, read from `/proc/stat`, with the usage of each core in `alt` |
| `waybar-memgraph` | RAM usage history, with used, average and total MB in `alt` |
| `waybar-netgraph` | Upload (upper row) and download (lower row) in KB/s |
| `waybar-tempgraph` | Temperature history from the hardware sensors that psutil reports |
| `waybar-archupdates` | Pending pacman and AUR updates, from `checkupdates` and `checkupdates-with-aur` |
| `waybar-stocks` | Fetches a web page and prints every match of a regular expression |

### Options

The graph commands accept:

- `--interval <seconds>`: time between readings (default 2)
- `--history <number>`: how many readings the graph shows (default 15; 10 for temperature)
- `--help`: print the usage. The command then keeps running with the options it was given.

`waybar-netgraph` also accepts `--interface <name>`. The default is `total`, which adds up
the traffic of every interface.

`waybar-tempgraph` also accepts `--item <name>`:

- `max` (the default) shows the highest sensor reading.
- `avg` shows an average taken over the running totals of the sensor readings.
- Any other value is taken as a sensor label, such as `coretemp Package id 0`. If no sensor
  has that label, the command reports `-1`.

`waybar-archupdates` accepts `--interval <seconds>`. This is the number of seconds between
syncs of the package database (default 300). The local update count is refreshed every
second. Its `--help` prints the usage and exits.

`--interval` and `--history` must be whole numbers greater than 0. A bad value prints an
error and the command exits with status 1.

`waybar-stocks` takes an optional URL and an optional regular expression as positional
arguments. By default it fetches a quote page and looks for `(MSFT)`. It prints `response:`
followed by the list of matches, and then exits. If the page cannot be fetched, it logs the
error and prints an empty list.

## Waybar configuration

```json
"custom/cpugraph": {
    "exec": "waybar-cpugraph --interval 2 --history 15",
    "return-type": "json",
    "format": "{}"
},
"custom/netgraph": {
    "exec": "waybar-netgraph --interface wlan0",
    "return-type": "json"
},
"custom/updates": {
    "exec": "waybar-archupdates --interval 900",
    "return-type": "json"
}
```

## Library use

Each module also exposes its parts for reuse. For example:

- `cpugraph.single_chart` and `tempgraph.rounded_chart` build charts from lists of readings.
- `netgraph.scale_limit` picks the range of the graph.
- `archupdates.render` builds the update tooltip from `checkupdates` output.
- `stocks.find_matches` applies a pattern to text that has already been fetched.

## What it does not do

- `waybar-stocks` does not produce Waybar JSON and does not parse prices. It only prints the
  raw matches of the pattern.
- `waybar-archupdates` needs `checkupdates` and `checkupdates-with-aur` on the `PATH`. It
  does not install or apply updates.

## Tests

```
pip install .[test]
pytest
```