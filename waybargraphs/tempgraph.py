"""Waybar module drawing a temperature history graph."""

from __future__ import annotations

import math
import re
import sys
import time
from collections import deque
from dataclasses import dataclass

import psutil

COLORS = (
    "#96faf7", "#66f1d7", "#67f08d", "#85f066", "#f0ea66",
    "#f0b166", "#f09466", "#f28888", "#f37777", "#f85555",
)
CHARS = ("0", "b", "c", "d", "e", "f", "g", "h", "i", "j")

HELP_OPTIONS = """Options:
  --interval <seconds>   Set the interval between updates (default: 2)
  --history <number>     Set the number of reading to show in the graph (default: 10)
  --item <sensor_name>   Set the name of temperature sensor/item to show in the graph (default: max)
                            --item max      - the highest temperature of all sensors
                            --item avg      - the average temperature of all sensors
                            --item '<name>' - the temperature of that sensor
"""

_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@dataclass
class TempOptions:
    """Command-line settings of the temperature graph."""

    interval: int = 2
    history: int = 10
    item: str = "max"
    show_help: bool = False


@dataclass(frozen=True)
class Reading:
    """One sensor's label and temperature in °C, if it reported one."""

    label: str
    temperature: float | None


def _parse_unsigned(text: str, flag: str, limit: int) -> int:
    if not re.fullmatch(r"\+?[0-9]+", text) or int(text) > limit:
        raise ValueError(f"{flag} must be greater than 0!")
    return int(text)


def parse_args(argv: list[str]) -> TempOptions:
    """Read --interval, --history, --item and --help from the arguments."""
    args = list(argv)
    options = TempOptions()
    for arg, value in zip(args, args[1:] + [None]):
        if arg == "--help":
            options.show_help = True
        elif arg == "--interval" and value is not None:
            options.interval = _parse_unsigned(value, "--interval", _U32_MAX)
        elif arg == "--history" and value is not None:
            options.history = _parse_unsigned(value, "--history", _USIZE_MAX)
        elif arg == "--item" and value is not None:
            options.item = value
    if options.interval == 0 or options.history == 0:
        raise ValueError("--interval and --history must be greater than 0")
    return options


def _round_half_away(value: float) -> float:
    return math.floor(value + 0.5) if value >= 0 else math.ceil(value - 0.5)


def _chart_index(value: float, symbol_count: int) -> int:
    scaled = value / symbol_count
    if math.isnan(scaled) or scaled <= 0:
        return 0
    if math.isinf(scaled):
        raise IndexError("chart value out of range")
    return int(_round_half_away(scaled))


def rounded_chart(stats, symbols, colors) -> str:
    """Render temperatures as glyphs, one step per len(symbols) degrees."""
    spans = []
    for stat in stats:
        index = _chart_index(stat, len(symbols))
        spans.append(f"<span color='{colors[index]}'>{symbols[index]}</span>")
    return "".join(spans)


def _positive(reading: Reading) -> float:
    value = reading.temperature
    return value if value is not None and value > 0.0 else 0.0


def _as_i32(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


def _format_float(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def avg_temp(readings: list[Reading]) -> tuple[float, list[str]]:
    """Average of the running temperature totals, with one line per sensor."""
    if not readings:
        return 0.0, []
    total = 0.0
    running = 0.0
    counted = 0
    lines = []
    for reading in readings:
        running += _positive(reading)
        if running > 0.0:
            total += running
            counted += 1
            lines.append(f"{reading.label}-{_as_i32(running)}°C")
    average = total / counted if counted else math.nan
    return average, lines


def max_temp(readings: list[Reading]) -> tuple[float, list[str]]:
    """Highest temperature, with one line per sensor reporting above zero."""
    highest = 0.0
    lines = []
    for reading in readings:
        value = _positive(reading)
        highest = max(highest, value)
        if value > 0.0:
            lines.append(f"{reading.label}-{_as_i32(value)}°C")
    return highest, lines


def temp_item(readings: list[Reading], name: str) -> tuple[float, list[str]]:
    """Temperature of the named sensor, or -1 when no sensor has that name."""
    wanted = -1.0
    for reading in readings:
        if reading.label == name:
            wanted = _positive(reading)
    return wanted, [f"{name}-{_format_float(wanted)}"]


def tabulate_components(lines: list[str]) -> str:
    """Align 'name-value' entries into escaped tooltip lines."""
    width = max((len(line.encode("utf-8")) for line in lines), default=0)
    return "".join(
        line.replace("-", " " * (width - len(line.encode("utf-8")) + 1)) + "\\n"
        for line in lines
    )


def render(stats: list[float], stat_type: str, components: list[str]) -> str:
    """Build the JSON line that waybar displays."""
    chart = rounded_chart(stats, CHARS, COLORS)
    latest = _as_i32(stats[-1])
    return (
        f'{{"text":"{chart}","tooltip":"{chart}","class":"",'
        f'"alt":"{stat_type}Temp: {latest}°C\\n---------------\\n'
        f'{tabulate_components(components)}","percentage":{latest}}}'
    )


def read_sensors() -> list[Reading]:
    """Current readings of every temperature sensor the system exposes."""
    sensors = getattr(psutil, "sensors_temperatures", None)
    if sensors is None:
        return []
    readings = []
    for chip, entries in sensors().items():
        for entry in entries:
            label = f"{chip} {entry.label}" if entry.label else chip
            readings.append(Reading(label, entry.current))
    return readings


def _measure(item: str, readings: list[Reading]) -> tuple[str, float, list[str]]:
    if item == "avg":
        return ("Avg.", *avg_temp(readings))
    if item == "max":
        return ("Max.", *max_temp(readings))
    return (item, *temp_item(readings, item))


def main(argv: list[str] | None = None) -> int:
    """Sample temperatures forever, printing one JSON line per interval."""
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if options.show_help:
        print(f"Usage: {sys.argv[0]} [options]\n\n{HELP_OPTIONS}")

    stats = deque([0.0] * options.history, maxlen=options.history)
    while True:
        stat_type, value, components = _measure(options.item, read_sensors())
        stats.append(value)
        print(render(list(stats), stat_type, components), flush=True)
        time.sleep(options.interval)