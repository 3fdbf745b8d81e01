"""Command palette provider backed by the cmdpal ranker.

Plugs a catalog into Textual's built-in command palette (Ctrl+P): hits
are ranked and scored by :func:`cmdpal.search.ranker.score_commands`
instead of Textual's own matcher.
"""

from __future__ import annotations

from functools import partial

from textual.command import DiscoveryHit, Hit, Hits, Provider

from cmdpal.search.formatter import MAX_SCORE
from cmdpal.search.highlight import highlight
from cmdpal.search.ranker import score_commands


class CatalogCommands(Provider):
    """Expose the App's command catalog through Textual's palette.

    The App must provide ``session`` (a PaletteSession) and
    ``run_command(command_id)``.
    """

    def _session(self):
        return getattr(self.app, "session", None)

    async def discover(self) -> Hits:
        """List recent and regular commands before anything is typed."""
        session = self._session()
        if session is None:
            return
        scored = score_commands(
            session.commands, session.recents, "", session.config.max_results
        )
        for sc in scored:
            yield DiscoveryHit(
                sc.command.label,
                partial(self.app.run_command, sc.command.id),
                text=sc.command.label,
                help=sc.command.description,
            )

    async def search(self, query: str) -> Hits:
        """Yield one Hit per ranked command, scored in ``[0, 1]``."""
        session = self._session()
        if session is None:
            return
        scored = score_commands(
            session.commands, session.recents, query, session.config.max_results
        )
        for sc in scored:
            yield Hit(
                min(1.0, sc.score / MAX_SCORE),
                highlight(sc.command.label, query),
                partial(self.app.run_command, sc.command.id),
                text=sc.command.label,
                help=sc.command.description,
            )
