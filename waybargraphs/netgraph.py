"""Waybar module drawing a network upload/download history graph."""

from __future__ import annotations

import re
import sys
import time
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

import psutil

COLORS_UP = (
    "#f299b9", "#f288a9", "#f29988", "#f38877", "#f37777",
    "#f36677", "#f35577", "#f35566", "#f74433", "#f70011",
)
COLORS_DOWN = (
    "#97f0cd", "#87f0bd", "#77f0ad", "#87f0ad", "#67f09d",
    "#47f08d", "#37f08d", "#27f08d", "#17f08d", "#07f08d",
)
CHARS_UP = ("0", "b", "c", "d", "e", "f", "g", "h", "i", "j")
CHARS_DOWN = ("k", "l", "m", "n", "o", "p", "q", "r", "s", "t")

SCALE_LIMITS = (15, 30, 60, 120, 300, 500, 750, 1000)
TOTAL = "total"

HELP_OPTIONS = """Options:
  --interval <seconds>        Set the interval between updates (default: 2)
  --history <number>          Set the number of reading to show in the graph (default: 15)
  --interface <net_interface> Set the network interface to monitor (default: total)
                              or 'total' to monitor all interfaces.
"""

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_USIZE_MAX = 2**64 - 1


@dataclass
class NetOptions:
    """Command-line settings of the network graph."""

    interval: int = 2
    history: int = 15
    interface: str = TOTAL
    show_help: bool = False


def _parse_int(text: str, flag: str, low: int, high: int) -> int:
    pattern = r"[+-]?[0-9]+" if low < 0 else r"\+?[0-9]+"
    if not re.fullmatch(pattern, text) or not low <= int(text) <= high:
        raise ValueError(f"{flag} must be greater than 0!")
    return int(text)


def parse_args(argv: list[str]) -> NetOptions:
    """Read --interval, --history, --interface and --help from the arguments."""
    args = list(argv)
    options = NetOptions()
    for arg, value in zip(args, args[1:] + [None]):
        if arg == "--help":
            options.show_help = True
        elif arg == "--interval" and value is not None:
            options.interval = _parse_int(value, "--interval", _I32_MIN, _I32_MAX)
        elif arg == "--history" and value is not None:
            options.history = _parse_int(value, "--history", 0, _USIZE_MAX)
        elif arg == "--interface" and value is not None:
            options.interface = value
    if options.interval <= 0 or options.history == 0:
        raise ValueError("--interval and --history must be greater than 0")
    return options


def _row(stats: Iterable[int], max_value: int, symbols, colors) -> str:
    spans = []
    for stat in stats:
        index = (stat * 100 // max_value) * (len(symbols) - 1) // 100
        spans.append(f"<span color='{colors[index]}'>{symbols[index]}</span>")
    return "".join(spans)


def double_chart(
    up_stats, down_stats, max_value, up_symbols, down_symbols, up_colors, down_colors
) -> str:
    """Render upload rates above download rates, separated by an escaped \\r."""
    return (
        _row(up_stats, max_value, up_symbols, up_colors)
        + "\\r"
        + _row(down_stats, max_value, down_symbols, down_colors)
    )


def total_rate(byte_counts: Iterable[int], interval: int) -> int:
    """Kilobytes per second over all byte counts seen during the interval."""
    return sum(byte_counts) // interval // 1000


def interface_rate(
    counters: Iterable[tuple[str, int]], interval: int, interface: str
) -> int:
    """Kilobytes per second for the named interface only."""
    return total_rate(
        (count for name, count in counters if name == interface), interval
    )


def scale_limit(highest: int) -> int:
    """Upper bound of the graph range for the highest rate seen."""
    for limit in SCALE_LIMITS:
        if highest < limit:
            return limit
    return highest


def _wrap_i32(value: int) -> int:
    return (value - _I32_MIN) % 2**32 + _I32_MIN


def _average(stats: list[int]) -> int:
    return _wrap_i32(sum(stats) // len(stats))


def render(up_stats: list[int], down_stats: list[int], interface: str) -> str:
    """Build the JSON line that waybar displays."""
    highest = max(1, max(up_stats, default=0), max(down_stats, default=0))
    limit = scale_limit(highest)
    up_average = _average(up_stats)
    down_average = _average(down_stats)
    pair = up_average + down_average
    combined = _wrap_i32(abs(pair) // 2 * (1 if pair >= 0 else -1))
    chart = double_chart(
        up_stats, down_stats, limit, CHARS_UP, CHARS_DOWN, COLORS_UP, COLORS_DOWN
    )
    return (
        f'{{"text":"{chart}","tooltip":"{chart}","class":"",'
        f'"alt":"Interface : {interface}'
        f"\\rUp        : {_wrap_i32(up_stats[-1])} KBps"
        f"\\rDown      : {_wrap_i32(down_stats[-1])} KBps"
        f"\\rRange     : 0-{limit} KBps"
        f"\\rAvg.Up    : {up_average} KBps"
        f'\\rAvg.Down  : {down_average} KBps",'
        f'"percentage":{combined}}}'
    )


def _deltas(previous: dict, current: dict) -> tuple[list, list]:
    received = []
    sent = []
    for name, counters in current.items():
        before = previous.get(name)
        if before is None:
            received.append((name, 0))
            sent.append((name, 0))
        else:
            received.append((name, max(counters.bytes_recv - before.bytes_recv, 0)))
            sent.append((name, max(counters.bytes_sent - before.bytes_sent, 0)))
    return received, sent


def main(argv: list[str] | None = None) -> int:
    """Sample network traffic forever, printing one JSON line per interval."""
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if options.show_help:
        print(f"Usage: {sys.argv[0]} [options]\n\n{HELP_OPTIONS}")

    up_stats = deque([0] * options.history, maxlen=options.history)
    down_stats = deque([0] * options.history, maxlen=options.history)
    previous = psutil.net_io_counters(pernic=True)
    while True:
        current = psutil.net_io_counters(pernic=True)
        received, sent = _deltas(previous, current)
        previous = current
        if options.interface == TOTAL:
            down = total_rate((count for _, count in received), options.interval)
            up = total_rate((count for _, count in sent), options.interval)
        else:
            down = interface_rate(received, options.interval, options.interface)
            up = interface_rate(sent, options.interval, options.interface)
        up_stats.append(up)
        down_stats.append(down)
        print(render(list(up_stats), list(down_stats), options.interface), flush=True)
        time.sleep(options.interval)