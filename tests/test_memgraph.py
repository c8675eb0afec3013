import json

import pytest

from waybargraphs.cpugraph import CHARS, COLORS, single_chart
from waybargraphs.memgraph import get_mem_use, render

TOTAL = 8_000_000_000
USED = 4_000_000_000


def test_get_mem_use_fraction():
    assert get_mem_use(50, 200) == pytest.approx(25.0)


def test_get_mem_use_full():
    assert get_mem_use(TOTAL, TOTAL) == pytest.approx(100.0)


def test_get_mem_use_zero_total():
    assert get_mem_use(0, 0) == 0.0


def test_get_mem_use_monotonic():
    values = [get_mem_use(used, TOTAL) for used in (0, USED // 2, USED, TOTAL)]
    assert values == sorted(values)


def test_render_json_fields():
    stats = [50.0, 50.0, 50.0]
    data = json.loads(render(stats, USED, TOTAL))
    chart = single_chart(stats, CHARS, COLORS)
    assert data["text"] == chart
    assert data["tooltip"] == chart
    assert data["percentage"] == int(stats[-1])
    parts = data["alt"].split("\r")
    assert parts[0] == f"Avg.Usage: {int(stats[0])}%"
    assert parts[1] == "Used     : 4000 MB"
    assert parts[2] == "Average  : 4000 MB"
    assert parts[3].startswith("Total    : ")


def test_render_percentage_follows_latest_sample():
    stats = [10.0, 90.0, 33.0]
    data = json.loads(render(stats, USED, TOTAL))
    assert data["percentage"] == int(stats[-1])
    assert data["text"].count("<span ") == len(stats)