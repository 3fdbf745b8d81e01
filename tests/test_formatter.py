"""Tests for result display formatting: score bars, truncation, and Rich output."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from cmdpal.search.formatter import (
    MAX_SCORE,
    display_empty_state,
    display_grouped_results,
    display_no_results,
    display_window,
    score_bar,
    truncate_text,
)
from cmdpal.models import QuickLink
from cmdpal.search.grouper import group
from cmdpal.search.ranker import rank
from cmdpal.view.virtualizer import window_for


def _console() -> Console:
    return Console(file=StringIO(), record=True, width=120)


# ---------------------------------------------------------------------------
# score_bar tests
# ---------------------------------------------------------------------------


class TestScoreBar:
    def test_score_bar_zero(self):
        assert score_bar(0.0) == "○○○○○○○○○○ 0"

    def test_score_bar_full(self):
        assert score_bar(MAX_SCORE) == "━━━━━━━━━━ 3600"

    def test_score_bar_exact_label(self):
        # 3000 / 3600 = 0.83 -> 8 filled
        assert score_bar(3000) == "━━━━━━━━○○ 3000"

    def test_score_bar_clamps(self):
        assert score_bar(10_000).startswith("━" * 10)
        assert score_bar(-5).startswith("○" * 10)

    def test_score_bar_custom_width(self):
        result = score_bar(1800, width=4)
        assert result == "━━○○ 1800"


# ---------------------------------------------------------------------------
# truncate_text tests
# ---------------------------------------------------------------------------


class TestTruncateText:
    def test_short_text_unchanged(self):
        assert truncate_text("Save", 10) == "Save"

    def test_word_boundary(self):
        assert truncate_text("hello world foo", 10) == "hello..."

    def test_no_space(self):
        assert truncate_text("abcdefghijkl", 8) == "abcde..."

    def test_tiny_limit(self):
        assert truncate_text("abcdefghijkl", 2) == ".."


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------


class TestDisplayGroupedResults:
    def test_group_headers_and_rows(self, commands, recents):
        console = _console()
        ranked = rank(commands, recents, "", 10)
        grouped = group(ranked, recents, has_query=False, show_recent=True)
        display_grouped_results(grouped, "", selected_id=ranked[0].id, console=console)
        output = console.export_text()
        for name in ["Recent", "File", "Preferences", "Navigation", "Other"]:
            assert name in output
        assert "Go to Home" in output
        assert "Ctrl+S" not in output
        assert ">" in output

    def test_shortcut_column(self):
        from cmdpal.models import Command

        save = Command(id="file.save", label="Save", category="File", shortcut="Ctrl+S")
        console = _console()
        display_grouped_results({"File": [save]}, "save", console=console)
        assert "Ctrl+S" in console.export_text()

    def test_shortcut_column_hidden(self):
        from cmdpal.models import Command

        save = Command(id="file.save", label="Save", category="File", shortcut="Ctrl+S")
        console = _console()
        display_grouped_results({"File": [save]}, "save", show_shortcuts=False, console=console)
        assert "Ctrl+S" not in console.export_text()

    def test_score_column(self, commands):
        console = _console()
        ranked = rank(commands, [], "save", 10)
        display_grouped_results(
            {"File": ranked}, "save", scores={"file.save": 3000.0}, console=console
        )
        output = console.export_text()
        assert "Score" in output
        assert "3000" in output


class TestDisplayWindow:
    def test_window_fields(self):
        console = _console()
        display_window(window_for(200, 48, 320, 960), console=console)
        output = console.export_text()
        assert "Virtual window" in output
        assert "yes" in output
        assert "15" in output
        assert "32" in output
        assert "9600" in output


class TestDisplayNoResults:
    def test_default_message(self):
        console = _console()
        display_no_results(console=console)
        assert "No commands found" in console.export_text()

    def test_custom_message(self):
        console = _console()
        display_no_results("Nothing matches", console=console)
        assert "Nothing matches" in console.export_text()


class TestDisplayEmptyState:
    def test_all_sections(self, commands):
        console = _console()
        display_empty_state(
            [QuickLink(label="Docs", url="/docs")], ["[bold]theme"], commands[:2], console=console
        )
        output = console.export_text()
        assert "Quick Links" in output
        assert "Docs  /docs" in output
        # query text is printed literally, never parsed as markup
        assert '"[bold]theme"' in output
        assert "Settings  Open preferences" in output

    def test_empty_sections_skipped(self):
        console = _console()
        display_empty_state([], [], [], console=console)
        assert console.export_text() == ""
