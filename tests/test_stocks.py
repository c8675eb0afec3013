import re
from unittest import mock

import pytest
import requests

from waybargraphs.stocks import (
    find_matches,
    get_html,
    get_html_filtered_by_regex,
    main,
)


def _response(text):
    response = mock.Mock()
    response.text = text
    return response


def test_find_matches_returns_all_in_order():
    assert find_matches("MSFT up, MSFT down", "(MSFT)") == ["MSFT", "MSFT"]


def test_find_matches_whole_match_not_group():
    assert find_matches("price 12.5 and 7.25", r"(\d+)\.\d+") == ["12.5", "7.25"]


def test_find_matches_none():
    assert find_matches("nothing here", "MSFT") == []


def test_find_matches_invalid_pattern():
    with pytest.raises(re.error):
        find_matches("text", "(")


@mock.patch("waybargraphs.stocks.requests.get")
def test_get_html_returns_body(get):
    get.return_value = _response("<html>MSFT</html>")
    assert get_html("https://example.com/") == "<html>MSFT</html>"
    get.assert_called_once_with("https://example.com/")


@mock.patch("waybargraphs.stocks.requests.get")
def test_get_html_error_gives_empty(get):
    get.side_effect = requests.ConnectionError("down")
    assert get_html("https://example.com/") == ""


@mock.patch("waybargraphs.stocks.requests.get")
def test_filtered_fetch(get):
    get.return_value = _response("a MSFT b MSFT")
    assert get_html_filtered_by_regex("https://example.com/", "MSFT") == [
        "MSFT",
        "MSFT",
    ]


@mock.patch("waybargraphs.stocks.requests.get")
def test_filtered_fetch_on_error_is_empty(get):
    get.side_effect = requests.Timeout("slow")
    assert get_html_filtered_by_regex("https://example.com/", "MSFT") == []


@mock.patch("waybargraphs.stocks.requests.get")
def test_main_prints_matches(get, capsys):
    get.return_value = _response("MSFT and MSFT")
    assert main([]) == 0
    assert capsys.readouterr().out == 'response:\n["MSFT", "MSFT"]\n'


@mock.patch("waybargraphs.stocks.requests.get")
def test_main_accepts_url_and_pattern(get, capsys):
    get.return_value = _response("abc")
    assert main(["https://example.com/", "b"]) == 0
    get.assert_called_once_with("https://example.com/")
    assert capsys.readouterr().out.endswith('["b"]\n')