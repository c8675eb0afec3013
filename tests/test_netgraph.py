import pytest

from waybargraphs.netgraph import (
    CHARS_DOWN,
    CHARS_UP,
    COLORS_DOWN,
    COLORS_UP,
    NetOptions,
    double_chart,
    interface_rate,
    parse_args,
    render,
    scale_limit,
    total_rate,
)


def test_parse_args_defaults():
    options = parse_args([])
    assert options == NetOptions(interval=2, history=15, interface="total")


def test_parse_args_reads_values():
    options = parse_args(["--interval", "3", "--history", "7", "--interface", "eth0"])
    assert (options.interval, options.history, options.interface) == (3, 7, "eth0")


def test_parse_args_help_flag():
    assert parse_args(["--help"]).show_help is True


@pytest.mark.parametrize(
    "argv",
    [
        ["--interval", "0"],
        ["--history", "0"],
        ["--interval", "abc"],
        ["--history", "-1"],
        ["--interval", "-3"],
    ],
)
def test_parse_args_rejects_bad_values(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_trailing_flag_without_value_is_ignored():
    assert parse_args(["--interval"]).interval == 2


@pytest.mark.parametrize(
    "highest, expected",
    [(0, 15), (1, 15), (15, 30), (120, 300), (999, 1000), (1000, 1000), (5000, 5000)],
)
def test_scale_limit(highest, expected):
    assert scale_limit(highest) == expected


def test_total_rate_sums_before_dividing():
    assert total_rate([1500, 2500], 2) == total_rate([4000], 2)
    assert total_rate([999], 1) == 0
    assert total_rate([], 5) == 0


def test_interface_rate_filters_by_name():
    counters = [("eth0", 8000), ("wlan0", 50000), ("eth0", 2000)]
    assert interface_rate(counters, 2, "eth0") == total_rate([8000, 2000], 2)
    assert interface_rate(counters, 2, "missing") == 0


def test_double_chart_zero_and_full():
    chart = double_chart([0, 15], [15, 0], 15, CHARS_UP, CHARS_DOWN, COLORS_UP, COLORS_DOWN)
    up, down = chart.split("\\r")
    assert up == (
        f"<span color='{COLORS_UP[0]}'>{CHARS_UP[0]}</span>"
        f"<span color='{COLORS_UP[-1]}'>{CHARS_UP[-1]}</span>"
    )
    assert down == (
        f"<span color='{COLORS_DOWN[-1]}'>{CHARS_DOWN[-1]}</span>"
        f"<span color='{COLORS_DOWN[0]}'>{CHARS_DOWN[0]}</span>"
    )


def test_double_chart_overflow_raises():
    with pytest.raises(IndexError):
        double_chart([20], [0], 15, CHARS_UP, CHARS_DOWN, COLORS_UP, COLORS_DOWN)


def test_double_chart_zero_max_raises():
    with pytest.raises(ZeroDivisionError):
        double_chart([1], [1], 0, CHARS_UP, CHARS_DOWN, COLORS_UP, COLORS_DOWN)


def test_render_idle_interface():
    line = render([0, 0, 0], [0, 0, 0], "eth0")
    assert line.startswith('{"text":"')
    assert "Interface : eth0" in line
    assert "Range     : 0-15 KBps" in line
    assert line.endswith('"percentage":0}')


def test_render_span_count_matches_history():
    line = render([1, 2, 3, 4], [5, 6, 7, 8], "total")
    text = line.split('"text":"')[1].split('","tooltip"')[0]
    assert text.count("<span") == 8
    assert text.count("\\r") == 1


def test_render_reports_latest_values():
    line = render([0, 0, 12], [0, 0, 7], "total")
    assert "Up        : 12 KBps" in line
    assert "Down      : 7 KBps" in line