"""Waybar module drawing a CPU usage history graph."""

from __future__ import annotations

import math
import re
import sys
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path

import psutil

COLORS = (
    "#96faf7", "#66f1d7", "#67f08d", "#85f066", "#f0ea66",
    "#f0b166", "#f09466", "#f28888", "#f37777", "#f85555",
)
CHARS = ("0", "b", "c", "d", "e", "f", "g", "h", "i", "j")

MINIMUM_CPU_UPDATE_INTERVAL = 0.2
PROC_STAT = "/proc/stat"

HELP_OPTIONS = """Options:
  --interval <seconds>   Set the interval between updates (default: 2)
  --history <number>     Set the number of reading to show in the graph (default: 15)
"""

_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@dataclass
class GraphOptions:
    """Command-line settings shared by the single-series graphs."""

    interval: int = 2
    history: int = 15
    show_help: bool = False


def _parse_unsigned(text: str, flag: str, limit: int) -> int:
    if not re.fullmatch(r"\+?[0-9]+", text) or int(text) > limit:
        raise ValueError(f"{flag} must be greater than 0!")
    return int(text)


def parse_args(argv: list[str]) -> GraphOptions:
    """Read --interval, --history and --help from the arguments."""
    args = list(argv)
    options = GraphOptions()
    for arg, value in zip(args, args[1:] + [None]):
        if arg == "--help":
            options.show_help = True
        elif arg == "--interval" and value is not None:
            options.interval = _parse_unsigned(value, "--interval", _U32_MAX)
        elif arg == "--history" and value is not None:
            options.history = _parse_unsigned(value, "--history", _USIZE_MAX)
    if options.interval == 0 or options.history == 0:
        raise ValueError("--interval and --history must be greater than 0")
    return options


def _saturating_int(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


def _chart_index(value: float, symbol_count: int) -> int:
    scaled = value * (symbol_count - 1) / 100.0
    if math.isnan(scaled) or scaled <= 0:
        return 0
    if math.isinf(scaled):
        raise IndexError("chart value out of range")
    return int(scaled)


def single_chart(stats, symbols, colors) -> str:
    """Render percentages (0-100) as a row of coloured glyphs."""
    spans = []
    for stat in stats:
        index = _chart_index(stat, len(symbols))
        spans.append(f"<span color='{colors[index]}'>{symbols[index]}</span>")
    return "".join(spans)


def read_proc_stat_line(path=PROC_STAT) -> list[str]:
    """Return the fields of the aggregate cpu line of a /proc/stat file."""
    with Path(path).open(encoding="utf-8", errors="replace") as handle:
        return handle.readline().split()


def cpu_usage_between(first: list[str], second: list[str]) -> float:
    """Busy percentage between two /proc/stat cpu samples."""
    user = int(second[1]) - int(first[1])
    system = int(second[3]) - int(first[3])
    idle = int(second[4]) - int(first[4])
    busy = user + system
    total = busy + idle
    if total == 0:
        return math.nan if busy == 0 else math.copysign(math.inf, busy)
    return 100.0 * busy / total


def get_cpu_usage_from_proc(path=PROC_STAT) -> float:
    """Sample /proc/stat twice a short time apart and return the busy percentage."""
    first = read_proc_stat_line(path)
    time.sleep(MINIMUM_CPU_UPDATE_INTERVAL)
    second = read_proc_stat_line(path)
    return cpu_usage_between(first, second)


def get_cpu_use() -> tuple[float, list[str]]:
    """Return overall CPU usage and a 'cpuN-percent' entry for each core."""
    time.sleep(MINIMUM_CPU_UPDATE_INTERVAL)
    cores = [
        f"cpu{number}-{int(usage)}"
        for number, usage in enumerate(psutil.cpu_percent(percpu=True))
    ]
    return get_cpu_usage_from_proc(), cores


def tabulate_cores(cores: list[str]) -> str:
    """Align 'name-value' entries into escaped tooltip lines."""
    width = max((len(core) for core in cores), default=0)
    return "".join(
        core.replace("-", " " * (width - len(core) + 1)) + "%\\n" for core in cores
    )


def render(stats: list[float], cores: list[str]) -> str:
    """Build the JSON line that waybar displays."""
    average = _saturating_int(sum(stats) / len(stats))
    chart = single_chart(stats, CHARS, COLORS)
    return (
        f'{{"text":"{chart}","tooltip":"{chart}","class": "",'
        f'"alt":"Avg.Usage: {average}%\\n--------------\\n{tabulate_cores(cores)}",'
        f'"percentage":{_saturating_int(stats[-1])}}}'
    )


def main(argv: list[str] | None = None) -> int:
    """Sample CPU usage forever, printing one JSON line per interval."""
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if options.show_help:
        print(f"Usage: {sys.argv[0]} [options]\n\n{HELP_OPTIONS}")

    stats = deque([0.0] * options.history, maxlen=options.history)
    psutil.cpu_percent(percpu=True)
    while True:
        average, cores = get_cpu_use()
        stats.append(average)
        print(render(list(stats), cores), flush=True)
        time.sleep(options.interval)