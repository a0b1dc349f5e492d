"""Unit tests for static formatting helpers."""

from __future__ import annotations

import os

import pytest

from termfx import terminal as terminal_module
from termfx.colors import BLUE, GREEN, RED, RESET, ColorEncoder, ansi_prefix
from termfx.formatting import (
    box_text,
    center_text,
    colored,
    fade_text,
    print_colored,
    print_fade,
    println_colored,
    rainbow_string,
    table_text,
)

pytestmark = [pytest.mark.unit, pytest.mark.formatting]


class TestColored:
    """Test colored text helpers."""

    def test_colored(self):
        """Test text is wrapped in prefix and reset."""
        assert colored("hi", RED) == f"{ansi_prefix(RED)}hi{RESET}"

    def test_colored_without_colors(self):
        """Test none mode returns plain text."""
        assert colored("hi", RED, ColorEncoder("none")) == "hi"

    def test_print_colored(self, terminal, output):
        """Test print_colored writes without a newline."""
        print_colored("hi", GREEN, terminal)
        assert output() == f"{ansi_prefix(GREEN)}hi{RESET}"

    def test_println_colored(self, terminal, output):
        """Test println_colored appends a newline."""
        println_colored("hi", GREEN, terminal)
        assert output() == f"{ansi_prefix(GREEN)}hi{RESET}\n"


class TestFade:
    """Test fades and static rainbows."""

    def test_fade_spreads_colors(self):
        """Test colors are spread evenly over the characters."""
        assert fade_text("abcd", [RED, BLUE]) == (
            f"{ansi_prefix(RED)}a{ansi_prefix(RED)}b"
            f"{ansi_prefix(BLUE)}c{ansi_prefix(BLUE)}d{RESET}"
        )

    def test_fade_more_colors_than_text(self):
        """Test extra colors are skipped, not repeated."""
        assert fade_text("ab", [RED, GREEN, BLUE, RED]) == (
            f"{ansi_prefix(RED)}a{ansi_prefix(BLUE)}b{RESET}"
        )

    def test_fade_empty(self):
        """Test empty text or no colors leaves text unchanged."""
        assert fade_text("", [RED]) == ""
        assert fade_text("ab", []) == "ab"

    def test_print_fade(self, terminal, output):
        """Test print_fade writes the faded text."""
        print_fade("a", [RED], terminal)
        assert output() == f"{ansi_prefix(RED)}a{RESET}"

    def test_rainbow_string_offset(self):
        """Test the palette starts at the offset."""
        assert rainbow_string("abc", [RED, GREEN], offset=1) == (
            f"{ansi_prefix(GREEN)}a{ansi_prefix(RED)}b{ansi_prefix(GREEN)}c{RESET}"
        )

    def test_rainbow_string_default_palette(self):
        """Test the default palette starts with red."""
        assert rainbow_string("a").startswith(ansi_prefix(RED))


class TestCenter:
    """Test centering."""

    def test_center_in_width(self):
        """Test text is left-padded to the middle."""
        assert center_text("hi", 10) == "    hi"
        assert center_text("hi", 7) == "  hi"

    def test_too_wide_is_unchanged(self):
        """Test text wider than the width is not padded."""
        assert center_text("toolong", 3) == "toolong"

    def test_wide_characters(self):
        """Test widths are measured in terminal cells."""
        assert center_text("日本", 10) == "   日本"

    def test_terminal_width_default(self, monkeypatch):
        """Test the terminal width is used when no width is given."""
        monkeypatch.setattr(
            terminal_module.shutil,
            "get_terminal_size",
            lambda fallback=(80, 24): os.terminal_size((20, 24)),
        )
        assert center_text("hi") == " " * 9 + "hi"


class TestBox:
    """Test boxes."""

    def test_single_line(self):
        """Test a one-line box."""
        assert box_text("hi") == "╔════╗\n║ hi ║\n╚════╝"

    def test_multi_line_left_aligned(self):
        """Test lines are padded to the widest."""
        assert box_text("a\nbcd") == "╔═════╗\n║ a   ║\n║ bcd ║\n╚═════╝"

    def test_empty(self):
        """Test an empty box still has a body row."""
        assert box_text("") == "╔══╗\n║  ║\n╚══╝"


class TestTable:
    """Test tables."""

    def test_contains_cells(self):
        """Test headers, cells and title are laid out without escapes."""
        text = table_text(["Name", "Value"], [["alpha", 1], ["beta", 22]], title="Things", width=60)
        assert "Name" in text
        assert "Value" in text
        assert "alpha" in text
        assert "22" in text
        assert "Things" in text
        assert "╔" in text
        assert "\x1b" not in text
        assert not text.endswith("\n")

    def test_short_rows_padded(self):
        """Test rows shorter than the headers are accepted."""
        text = table_text(["A", "B"], [["only"]], width=40)
        assert "only" in text
