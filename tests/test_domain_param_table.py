"""Contract tests for `ks param list` parsing."""

from __future__ import annotations

import pytest

from ksenv.domain.param_table import parse_param_table, unquote
from ksenv.errors import ParseError

KS_PARAM_LIST_OUTPUT = """COMPONENT PARAM          VALUE
========= =====          =====
guestbook containerPort 80
guestbook image         "gcr.io/heptio-images/ks-guestbook-demo:0.1"
guestbook name          "guestbook-ui"
"""


def test_parse_real_param_list_output() -> None:
    assert parse_param_table(KS_PARAM_LIST_OUTPUT) == {
        "containerPort": "80",
        "image": "gcr.io/heptio-images/ks-guestbook-demo:0.1",
        "name": "guestbook-ui",
    }


def test_parse_three_rows_gives_three_entries() -> None:
    output = "H1 H2 H3\n== == ==\nc a 1\nc b 2\nc d 3"
    assert len(parse_param_table(output)) == 3


def test_duplicate_parameter_later_row_wins() -> None:
    output = 'C P V\n= = =\nweb replicas 1\ndb replicas "5"\n'
    assert parse_param_table(output) == {"replicas": "5"}


def test_quoted_value_with_blanks_is_unquoted() -> None:
    output = 'C P V\n= = =\nweb greeting "hello world"\n'
    assert parse_param_table(output) == {"greeting": "hello world"}


def test_unquotable_value_is_kept_verbatim() -> None:
    output = "C P V\n= = =\nweb mode unquoted\nweb half \"open\n"
    assert parse_param_table(output) == {"mode": "unquoted", "half": '"open'}


def test_extra_columns_use_third_field() -> None:
    output = 'C P V\n= = =\nweb image "nginx" # pinned\nweb size 3 extra\n'
    assert parse_param_table(output) == {"image": "nginx", "size": "3"}


def test_blank_rows_and_short_output() -> None:
    assert parse_param_table("C P V\n= = =\n\n   \n") == {}
    assert parse_param_table("") == {}
    assert parse_param_table("only a header") == {}


def test_short_row_is_a_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_param_table("C P V\n= = =\nweb replicas\n")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('"hello world"', "hello world"),
        ('"tab\\there"', "tab\there"),
        ('"quote \\" inside"', 'quote " inside'),
        ('"\\u00e9\\x41\\101"', "éAA"),
        ("`raw \\n text`", "raw \\n text"),
        ("'x'", "x"),
        ('""', ""),
    ],
)
def test_unquote_valid_literals(raw: str, expected: str) -> None:
    assert unquote(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["unquoted", '"', '"open', "'ab'", '"bad \\q escape"', '"a"b"', "'\\\"'", "80"],
)
def test_unquote_rejects_invalid_literals(raw: str) -> None:
    with pytest.raises(ValueError):
        unquote(raw)
