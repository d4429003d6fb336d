from datetime import date, datetime, time

import pytest

from xlsxbook.utility import (
    create_safe_sheet_name,
    datetime_from_number,
    datetime_to_number,
    escape_sheet_name,
    get_rel_file_path,
    is_space_reserve_needed,
    parse_xsd_boolean,
    split_path,
    time_to_number,
    unescape_sheet_name,
)


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("true", True), ("0", False), ("false", False)],
)
def test_parse_xsd_boolean_known_values(value, expected):
    assert parse_xsd_boolean(value) is expected
    assert parse_xsd_boolean(value, not expected) is expected


@pytest.mark.parametrize("value", ["", "yes", "TRUE"])
def test_parse_xsd_boolean_falls_back_to_default(value):
    assert parse_xsd_boolean(value) is False
    assert parse_xsd_boolean(value, True) is True


def test_split_path_with_directory():
    assert split_path("xl/worksheets/sheet1.xml") == ("xl/worksheets", "sheet1.xml")


def test_split_path_without_directory():
    assert split_path("workbook.xml") == (".", "workbook.xml")


def test_get_rel_file_path():
    assert get_rel_file_path("xl/workbook.xml") == "xl/_rels/workbook.xml.rels"


def test_get_rel_file_path_without_directory():
    assert get_rel_file_path("workbook.xml") == ""


@pytest.mark.parametrize("is1904", [False, True])
def test_epoch_is_zero(is1904):
    epoch = datetime(1904, 1, 1) if is1904 else datetime(1899, 12, 31)
    assert datetime_to_number(epoch, is1904) == 0.0
    assert datetime_from_number(0, is1904) == epoch


@pytest.mark.parametrize("is1904", [False, True])
@pytest.mark.parametrize(
    "dt",
    [
        datetime(1905, 6, 7, 8, 9, 10),
        datetime(1970, 1, 1),
        datetime(2014, 3, 15, 23, 59, 59),
        datetime(2024, 2, 29, 12, 0, 0),
    ],
)
def test_datetime_round_trip(dt, is1904):
    assert datetime_from_number(datetime_to_number(dt, is1904), is1904) == dt


@pytest.mark.parametrize(
    "dt", [datetime(1900, 1, 1), datetime(1900, 2, 28), datetime(1900, 3, 1)]
)
def test_round_trip_around_phantom_leap_day(dt):
    assert datetime_from_number(datetime_to_number(dt)) == dt


def test_phantom_leap_day_is_skipped():
    before = datetime_to_number(datetime(1900, 2, 28))
    after = datetime_to_number(datetime(1900, 3, 1))
    assert after - before == 2.0


def test_1904_and_1900_systems_differ_by_constant():
    a = datetime(2000, 1, 1)
    b = datetime(2010, 5, 5)
    diff_a = datetime_to_number(a) - datetime_to_number(a, True)
    diff_b = datetime_to_number(b) - datetime_to_number(b, True)
    assert diff_a == diff_b


def test_date_accepted_like_midnight_datetime():
    assert datetime_to_number(date(2015, 4, 2)) == datetime_to_number(datetime(2015, 4, 2))


def test_time_to_number():
    assert time_to_number(time(0, 0)) == 0.0
    assert time_to_number(time(12, 0)) == 0.5


def test_time_fraction_matches_datetime_fraction():
    dt = datetime(2001, 2, 3, 6, 30, 15)
    whole = datetime_to_number(datetime(2001, 2, 3))
    assert datetime_to_number(dt) - whole == pytest.approx(time_to_number(dt.time()))


def test_create_safe_sheet_name_empty():
    assert create_safe_sheet_name("") == ""


@pytest.mark.parametrize("ch", list("/\\?*][:"))
def test_create_safe_sheet_name_replaces_invalid(ch):
    assert create_safe_sheet_name(f"a{ch}b") == "a b"


def test_create_safe_sheet_name_truncates():
    name = "x" * 40
    result = create_safe_sheet_name(name)
    assert len(result) == 31
    assert name.startswith(result)


def test_create_safe_sheet_name_unescapes_quoted():
    assert create_safe_sheet_name("'my sheet'") == "my sheet"


def test_create_safe_sheet_name_strips_edge_apostrophes():
    assert create_safe_sheet_name("'abc") == " abc"
    assert create_safe_sheet_name("abc'") == "abc "


def test_escape_sheet_name_not_needed():
    assert escape_sheet_name("Sheet1") == "Sheet1"


@pytest.mark.parametrize("name", ["my sheet", "a+b", "x-y", "it's", "a&b", "50%"])
def test_escape_unescape_round_trip(name):
    escaped = escape_sheet_name(name)
    assert escaped.startswith("'") and escaped.endswith("'")
    assert unescape_sheet_name(escaped) == name


def test_escape_doubles_apostrophes():
    assert escape_sheet_name("it's") == "'it''s'"


@pytest.mark.parametrize("name", ["'abc", "abc'"])
def test_escape_rejects_already_escaped(name):
    with pytest.raises(ValueError):
        escape_sheet_name(name)


@pytest.mark.parametrize("name", ["abc", "''", "'abc"])
def test_unescape_rejects_unquoted(name):
    with pytest.raises(ValueError):
        unescape_sheet_name(name)


@pytest.mark.parametrize(
    "s, expected",
    [("", False), ("abc", False), ("a b", False), (" a", True), ("a\t", True), ("\na", True), ("a\r", True)],
)
def test_is_space_reserve_needed(s, expected):
    assert is_space_reserve_needed(s) is expected