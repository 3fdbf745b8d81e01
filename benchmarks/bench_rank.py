"""Ranking latency benchmark.

Measures one full query pass (score, filter, boost, sort, truncate, group)
over synthetic catalogs of increasing size, for a mix of short and long
queries. Reports P50/P95/P99 per catalog size and flags sizes whose P95
exceeds one debounce interval.

Usage:
    python benchmarks/bench_rank.py            # 100 / 1,000 / 10,000 commands
    python benchmarks/bench_rank.py --quick    # 100 / 1,000 commands, fewer rounds
"""

from __future__ import annotations

import argparse
import random
from time import perf_counter

from rich.console import Console
from rich.table import Table

from cmdpal.constants import DEBOUNCE_SECONDS, MAX_RESULTS
from cmdpal.models import Command
from cmdpal.search.grouper import group
from cmdpal.search.ranker import rank

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SEED = 42
SIZES = [100, 1_000, 10_000]
QUICK_SIZES = [100, 1_000]
ROUNDS = 50
QUICK_ROUNDS = 10

QUERIES = ["s", "sa", "save", "srch", "setng", "open file", "keyboard shortcuts", "xyzzy"]

VERBS = ["Open", "Save", "Close", "Toggle", "Search", "Go to", "Show", "Reset", "Export"]
NOUNS = ["File", "Folder", "Settings", "Theme", "Terminal", "Panel", "Workspace", "History"]
CATEGORIES = ["File", "View", "Navigation", "Preferences", None]

console = Console()


def make_catalog(size: int, rng: random.Random) -> list[Command]:
    """Build *size* synthetic commands with realistic labels."""
    commands = []
    for i in range(size):
        verb = rng.choice(VERBS)
        noun = rng.choice(NOUNS)
        commands.append(
            Command(
                id=f"cmd.{i}",
                label=f"{verb} {noun} {i}",
                description=f"{verb} the current {noun.lower()}",
                category=rng.choice(CATEGORIES),
                keywords=(noun.lower(), verb.lower()),
                disabled=rng.random() < 0.02,
            )
        )
    return commands


def percentile(samples: list[float], pct: float) -> float:
    ordered = sorted(samples)
    index = min(len(ordered) - 1, int(round(pct / 100 * (len(ordered) - 1))))
    return ordered[index]


def bench_size(size: int, rounds: int, rng: random.Random) -> list[float]:
    """Return per-query latencies in milliseconds."""
    commands = make_catalog(size, rng)
    recents = rng.sample(commands, k=min(5, size))
    samples: list[float] = []
    for _ in range(rounds):
        for query in QUERIES:
            start = perf_counter()
            ranked = rank(commands, recents, query, MAX_RESULTS)
            group(ranked, recents, has_query=True, show_recent=True)
            samples.append((perf_counter() - start) * 1000)
    return samples


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--quick", action="store_true", help="Smaller catalogs, fewer rounds")
    args = parser.parse_args()

    sizes = QUICK_SIZES if args.quick else SIZES
    rounds = QUICK_ROUNDS if args.quick else ROUNDS
    budget_ms = DEBOUNCE_SECONDS * 1000
    rng = random.Random(SEED)

    table = Table(title="Query pass latency (ms)")
    table.add_column("Commands", justify="right")
    table.add_column("Queries", justify="right")
    table.add_column("P50", justify="right")
    table.add_column("P95", justify="right")
    table.add_column("P99", justify="right")
    table.add_column("Within debounce", justify="center")

    for size in sizes:
        samples = bench_size(size, rounds, rng)
        p95 = percentile(samples, 95)
        table.add_row(
            f"{size:,}",
            str(len(samples)),
            f"{percentile(samples, 50):.2f}",
            f"{p95:.2f}",
            f"{percentile(samples, 99):.2f}",
            "[green]yes[/green]" if p95 <= budget_ms else "[red]no[/red]",
        )

    console.print(table)


if __name__ == "__main__":
    main()
