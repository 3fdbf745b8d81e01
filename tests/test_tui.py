"""Tests for the Textual palette front-end.

Drives PaletteApp through App.run_test / Pilot: typing is debounced by
the session, so each typing step is followed by a pause longer than the
debounce delay.
"""

from __future__ import annotations

from cmdpal.config import PaletteConfig
from cmdpal.models import QuickLink
from cmdpal.session.palette import PaletteSession
from cmdpal.tui.app import PaletteApp
from cmdpal.tui.providers import CatalogCommands
from cmdpal.tui.widgets import ResultsView, SearchBar
from cmdpal.tui.widgets.results import render_session

SETTLE = 0.4


async def _type(pilot, text: str) -> None:
    await pilot.press(*text)
    await pilot.pause(SETTLE)


async def test_app_mounts_with_idle_listing(commands, recents):
    app = PaletteApp(commands, recents)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause()
        assert app.session is not None
        assert app.session.is_open
        results = app.query_one(ResultsView)
        assert results.rendered_ids[0] == "nav.home"
        assert "admin.reset" not in results.rendered_ids


async def test_app_title_and_subtitle(commands):
    app = PaletteApp(commands)
    async with app.run_test(size=(120, 40)):
        assert app.title == "cmdpal"
        assert app.sub_title == "Command Palette"


async def test_app_includes_catalog_provider(commands):
    app = PaletteApp(commands)
    async with app.run_test(size=(120, 40)):
        assert CatalogCommands in app.COMMANDS


async def test_search_bar_has_focus_and_placeholder(commands):
    app = PaletteApp(commands)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause()
        search_bar = app.query_one(SearchBar)
        assert app.focused is search_bar
        assert search_bar.placeholder == "Type a command or search..."


async def test_typing_filters_results(commands, recents):
    app = PaletteApp(commands, recents)
    async with app.run_test(size=(120, 40)) as pilot:
        await _type(pilot, "save")
        assert app.session.query == "save"
        assert app.query_one(ResultsView).rendered_ids == ["file.save"]
        assert app.session.announcement == "1 command found"


async def test_no_results_shows_empty_message(commands):
    app = PaletteApp(commands)
    async with app.run_test(size=(120, 40)) as pilot:
        await _type(pilot, "xyzzy")
        assert app.session.empty_message == "No commands found"
        assert app.query_one(ResultsView).rendered_ids == []


async def test_arrow_keys_move_selection(commands, recents):
    app = PaletteApp(commands, recents)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause()
        await pilot.press("down")
        assert app.session.selected_index == 1
        await pilot.press("up", "up")
        assert app.session.selected_index == len(app.session.ranked) - 1
        await pilot.press("home")
        assert app.session.selected_index == 0
        await pilot.press("end")
        assert app.session.selected_index == len(app.session.ranked) - 1
        assert app.query_one(SearchBar).value == ""


async def test_enter_runs_command_and_resets(commands, recents):
    app = PaletteApp(commands, recents)
    async with app.run_test(size=(120, 40)) as pilot:
        await _type(pilot, "save")
        await pilot.press("enter")
        await pilot.pause(SETTLE)
        assert [c.id for c in app.activated] == ["file.save"]
        assert app.session.is_open
        assert app.session.query == ""
        assert app.query_one(SearchBar).value == ""
        assert app.session.recents[0].id == "file.save"


async def test_enter_right_after_typing_runs_typed_match(commands, recents):
    app = PaletteApp(commands, recents)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause()
        await pilot.press(*"settings", "enter")
        await pilot.pause(SETTLE)
        assert [c.id for c in app.activated] == ["nav.settings"]


async def test_escape_clears_query(commands):
    app = PaletteApp(commands)
    async with app.run_test(size=(120, 40)) as pilot:
        await _type(pilot, "set")
        assert app.session.query == "set"
        await pilot.press("escape")
        await pilot.pause(SETTLE)
        assert app.query_one(SearchBar).value == ""
        assert app.session.query == ""


async def test_run_command_by_id(commands):
    app = PaletteApp(commands)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause()
        app.run_command("nav.settings")
        await pilot.pause(SETTLE)
        assert [c.id for c in app.activated] == ["nav.settings"]


async def test_run_command_ignores_disabled(commands):
    app = PaletteApp(commands)
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause()
        app.run_command("admin.reset")
        await pilot.pause(SETTLE)
        assert app.activated == []


async def test_activation_is_traced(commands, telemetry):
    tel, exporter = telemetry
    app = PaletteApp(commands, telemetry=tel)
    async with app.run_test(size=(120, 40)) as pilot:
        await _type(pilot, "save")
        await pilot.press("enter")
        await pilot.pause(SETTLE)
    names = [span.name for span in exporter.get_finished_spans()]
    assert "palette.activate" in names
    assert "palette.rank" in names


async def test_idle_view_lists_quick_links(commands):
    links = [QuickLink(label="Docs", url="/docs")]
    app = PaletteApp(commands, quick_links=links, recent_searches=["theme"])
    async with app.run_test(size=(120, 40)) as pilot:
        await pilot.pause()
        assert app.session.visible_quick_links == tuple(links)
        assert app.session.visible_recent_searches == ("theme",)


# ---------------------------------------------------------------------------
# Row rendering
# ---------------------------------------------------------------------------


def _lines(session: PaletteSession) -> list[str]:
    text, _ = render_session(session)
    return text.plain.splitlines()


def test_category_headers(commands, recents):
    session = PaletteSession(commands, recents)
    session.open()
    lines = _lines(session)
    assert lines[0] == "Recent"
    assert "Navigation" in lines


def test_recent_header_without_categories(commands, recents):
    session = PaletteSession(commands, recents, config=PaletteConfig(show_categories=False))
    session.open()
    text, ids = render_session(session)
    lines = text.plain.splitlines()
    assert lines[0] == "Recent"
    assert "Navigation" not in lines
    assert "File" not in lines
    assert ids[0] == "nav.home"


def test_no_headers_when_both_flags_off(commands, recents):
    config = PaletteConfig(show_categories=False, show_recent=False)
    session = PaletteSession(commands, recents, config=config)
    session.open()
    assert all(line.startswith(("  ", "› ")) for line in _lines(session))


def test_empty_state_sections(commands):
    session = PaletteSession(
        commands,
        config=PaletteConfig(scoring="modal"),
        quick_links=[QuickLink(label="Docs", url="/docs")],
        recent_searches=["theme"],
    )
    session.open()
    text, ids = render_session(session)
    lines = text.plain.splitlines()
    assert ids == []
    assert lines[0] == "Quick Links"
    assert "Recent Searches" in lines
    assert '  "theme"' in lines
    assert "Popular" in lines


def test_no_results_message_and_links(commands):
    session = PaletteSession(commands, quick_links=[QuickLink(label="Docs", url="/docs")])
    session.set_query("xyzzy")
    lines = _lines(session)
    assert lines[0] == "No commands found"
    assert "Quick Links" in lines
