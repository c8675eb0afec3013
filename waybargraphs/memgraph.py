"""Waybar module drawing a memory usage history graph."""

from __future__ import annotations

import sys
import time
from collections import deque

import psutil

from .cpugraph import CHARS, COLORS, HELP_OPTIONS, parse_args, single_chart

_BYTES_PER_MB = 1_000_000


def get_mem_use(used: int, total: int) -> float:
    """Used memory as a percentage of total memory."""
    if total == 0:
        return 0.0
    return used / total * 100.0


def render(stats: list[float], used: int, total: int) -> str:
    """Build the JSON line that waybar displays."""
    total_mb = total // _BYTES_PER_MB
    used_mb = used // _BYTES_PER_MB
    average = int(sum(stats) / len(stats))
    average_mb = int(total_mb * (average / 100))
    chart = single_chart(stats, CHARS, COLORS)
    return (
        f'{{"text":"{chart}","tooltip":"{chart}","class": "",'
        f'"alt":"Avg.Usage: {average}%\\rUsed     : {used_mb} MB'
        f'\\rAverage  : {average_mb} MB\\rTotal    : {total_mb} MB",'
        f'"percentage":{int(stats[-1])}}}'
    )


def main(argv: list[str] | None = None) -> int:
    """Sample memory usage forever, printing one JSON line per interval."""
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if options.show_help:
        print(f"Usage: {sys.argv[0]} [options]\n\n{HELP_OPTIONS}")

    stats = deque([0.0] * options.history, maxlen=options.history)
    while True:
        memory = psutil.virtual_memory()
        used = memory.total - memory.available
        stats.append(get_mem_use(used, memory.total))
        print(render(list(stats), used, memory.total), flush=True)
        time.sleep(options.interval)