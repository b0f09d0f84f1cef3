import pytest

from stpatchkit.iso14755 import parse_codepoint, request_codepoint


def test_simple_codepoint():
    assert parse_codepoint("41\n") == "A"


@pytest.mark.parametrize("char", ["A", "z", "\u00e9", "\u263a", "\u4e2d", "\U0001f600"])
def test_round_trip(char):
    assert parse_codepoint(format(ord(char), "x") + "\n") == char
    assert parse_codepoint(format(ord(char), "X")) == char


def test_hex_prefix_accepted():
    assert parse_codepoint("0x41") == "A"


def test_only_first_line_counts():
    assert parse_codepoint("41\nzz\n") == "A"


@pytest.mark.parametrize("text", ["", "-41", "12345678", "zz", "41 x", "0x\n", " \n", "+\n"])
def test_rejected(text):
    assert parse_codepoint(text) is None


def test_long_line_rejected_even_if_valid_prefix():
    assert parse_codepoint("00000041\n") is None


def test_out_of_range_gives_replacement():
    assert parse_codepoint("110000") == "\ufffd"
    assert parse_codepoint("d800") == "\ufffd"


def test_empty_line_is_nul():
    assert parse_codepoint("\n") == "\x00"


def test_request_runs_command():
    assert request_codepoint("printf '41\\n'") == "A"


def test_request_without_output():
    assert request_codepoint("exit 1") is None