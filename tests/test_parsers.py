import math

from psquared.parsers import parse_value


def test_plain_numbers():
    assert parse_value("3.5\n") == 3.5
    assert parse_value("  -2e3  ") == -2000.0
    assert parse_value("12,foo,bar") == 12.0
    assert parse_value("7 ms") == 7.0


def test_blank_and_comments():
    assert parse_value("") is None
    assert parse_value("   \n") is None
    assert parse_value("# header") is None


def test_garbage_is_none():
    assert parse_value("latency=12") is None
    assert parse_value("abc") is None


def test_nan_passes_through():
    assert math.isnan(parse_value("nan"))


def test_json_default_fields():
    assert parse_value('{"value": 1.25}') == 1.25
    assert parse_value('{"ts": "x", "latency": 40}') == 40.0
    assert parse_value('{"other": 1}') is None


def test_json_explicit_field():
    assert parse_value('{"value": 1, "rtt": 9.5}', field="rtt") == 9.5
    assert parse_value('{"rtt": "slow"}', field="rtt") is None


def test_malformed_json_is_none():
    assert parse_value('{"value": }') is None
