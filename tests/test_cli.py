"""Tests for command-line parsing."""
import pytest

from picroll.cli import parse_args


def test_defaults():
    opts = parse_args(["a.jpg", "b.jpg"])
    assert opts.paths == ["a.jpg", "b.jpg"]
    assert not opts.debug
    assert not opts.presentation
    assert opts.delay_seconds == 0


def test_flags_mixed_with_files():
    opts = parse_args(["-d", "a.jpg", "-p", "-s5", "b.jpg"])
    assert opts.debug and opts.presentation
    assert opts.delay_seconds == 5
    assert opts.paths == ["a.jpg", "b.jpg"]


def test_fractional_delay():
    assert parse_args(["-s0.5", "x"]).delay_seconds == 0.5


def test_double_dash_ends_flags():
    assert parse_args(["--", "-weird.jpg"]).paths == ["-weird.jpg"]


def test_help():
    assert parse_args(["-h"]).show_help


@pytest.mark.parametrize("argv", [["-x"], ["-sfast"], ["-s-1"]])
def test_bad_arguments(argv):
    with pytest.raises(ValueError):
        parse_args(argv)
