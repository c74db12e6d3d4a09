#!/usr/bin/env python3
"""Play every dictionary word as a target and compare scoring strategies.

Features:
  - Runs one session per target, in parallel across worker processes.
  - A failed session is recorded next to the successes, never aborting the run.
  - Compares all built-in strategies (or a chosen subset) on the same targets.
  - Outputs summary table, CSV, JSON and histogram.
"""

from __future__ import annotations

import argparse
import csv
import json
import os
import random
import sys
import time
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Sequence

from ranker import ScoreFn
from solver import CandidateSetExhausted, SolverError, SolverLoop, check_dictionary
from strategies import get_strategy, strategy_names
from strategy import SolverConfig, Strategy

RESULTS_DIR = Path(__file__).resolve().parent / "results"


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass
class GameResult:
    strategy: str
    target: str
    num_guesses: int
    solved: bool
    guesses: list[str] = field(default_factory=list)
    error: str | None = None


def summarize(games: list[GameResult]) -> dict:
    """Aggregate stats for one strategy's games.

    ``mean_guesses`` only counts solved sessions, so failures do not pass
    for fast successes.
    """
    n = len(games)
    solved = [g.num_guesses for g in games if g.solved]
    dist: dict[str, int] = {}
    for b in sorted(set(solved)):
        dist[str(b)] = solved.count(b)
    failed = n - len(solved)
    if failed:
        dist["failed"] = failed
    solved.sort()
    k = len(solved)
    if k == 0:
        median = 0.0
    elif k % 2 == 1:
        median = float(solved[k // 2])
    else:
        median = (solved[k // 2 - 1] + solved[k // 2]) / 2
    return {
        "games_played": n,
        "games_solved": k,
        "solve_rate": round(k / n, 4) if n else 0,
        "mean_guesses": round(sum(solved) / k, 3) if k else 0.0,
        "median_guesses": median,
        "max_guesses": max(solved) if solved else 0,
        "guess_distribution": dist,
    }


@dataclass
class BatchResults:
    games: list[GameResult] = field(default_factory=list)

    @property
    def failures(self) -> list[GameResult]:
        return [g for g in self.games if not g.solved]

    @property
    def mean_guesses(self) -> float:
        """Mean guess count over solved sessions (0.0 if none were solved)."""
        solved = [g.num_guesses for g in self.games if g.solved]
        return sum(solved) / len(solved) if solved else 0.0

    def histogram(self) -> dict[str, int]:
        """Guess-count buckets (``"1"``, ``"2"``, ... and ``"failed"``)."""
        return summarize(self.games)["guess_distribution"]

    def by_strategy(self) -> dict[str, list[GameResult]]:
        grouped: dict[str, list[GameResult]] = defaultdict(list)
        for g in self.games:
            grouped[g.strategy].append(g)
        return dict(grouped)

    def to_csv(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["strategy", "target", "num_guesses", "solved", "guesses", "error"])
            for g in self.games:
                writer.writerow([
                    g.strategy, g.target, g.num_guesses, int(g.solved),
                    " ".join(g.guesses), g.error or "",
                ])

    def print_summary(self) -> None:
        print(f"\n{'Strategy':<16} {'Games':>6} {'Solved':>7} {'Rate':>6} "
              f"{'Mean':>6} {'Median':>7} {'Max':>5}")
        print("-" * 60)
        summaries = {name: summarize(gs) for name, gs in self.by_strategy().items()}
        for entry in compute_leaderboard(summaries):
            s = summaries[entry["strategy"]]
            print(f"{entry['strategy']:<16} {s['games_played']:>6} {s['games_solved']:>6}  "
                  f"{100 * s['solve_rate']:>5.1f}% {s['mean_guesses']:>6.2f} "
                  f"{s['median_guesses']:>7.1f} {s['max_guesses']:>5}")
        for g in self.failures:
            print(f"  [fail] {g.strategy}: {g.target}: {g.error}", file=sys.stderr)
        print()

    def plot_histograms(self, path: str | Path | None = None) -> Path | None:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        by_strat = {
            name: [g.num_guesses for g in games if g.solved]
            for name, games in self.by_strategy().items()
        }
        strats = sorted(by_strat)
        if not strats:
            return None

        cols = min(len(strats), 4)
        rows = (len(strats) + cols - 1) // cols
        fig, axes = plt.subplots(rows, cols, figsize=(5 * cols, 4 * rows), squeeze=False)
        max_guess = max((n for counts in by_strat.values() for n in counts), default=1)
        bins = list(range(1, max_guess + 2))

        for idx, name in enumerate(strats):
            ax = axes[idx // cols][idx % cols]
            ax.hist(by_strat[name], bins=bins, edgecolor="black", align="left")
            ax.set_title(name, fontsize=10)
            ax.set_xlabel("Guesses")
            ax.set_ylabel("Count")

        for idx in range(len(strats), rows * cols):
            axes[idx // cols][idx % cols].set_visible(False)

        fig.suptitle("Guess-count distribution by strategy")
        fig.tight_layout()
        dest = Path(path) if path else RESULTS_DIR / "tournament_histograms.png"
        dest.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(dest, dpi=150)
        plt.close(fig)
        return dest

    def to_json(self, path: str | Path, config: dict | None = None) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        summaries = {name: summarize(gs) for name, gs in self.by_strategy().items()}
        data = {
            "timestamp": datetime.now().isoformat(),
            "config": config or {},
            "leaderboard": compute_leaderboard(summaries),
            "strategies": summaries,
            "games": [asdict(g) for g in self.games],
        }
        p.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ------------------------------------------------------------------
# Worker function (runs in a child process)
# ------------------------------------------------------------------

def _run_chunk(
    dictionary: list[str],
    targets: list[str],
    strategy: Strategy | ScoreFn,
    strategy_name: str,
    config: SolverConfig,
) -> list[GameResult]:
    """Solve each target in *targets*, one independent session apiece."""
    loop = SolverLoop(dictionary, strategy, config)
    results: list[GameResult] = []
    for target in targets:
        try:
            session = loop.solve(target)
        except CandidateSetExhausted as exc:
            results.append(GameResult(
                strategy=strategy_name, target=target, num_guesses=len(exc.guesses),
                solved=False, guesses=exc.guesses, error=str(exc),
            ))
        except SolverError as exc:
            results.append(GameResult(
                strategy=strategy_name, target=target, num_guesses=0,
                solved=False, error=str(exc),
            ))
        else:
            results.append(GameResult(
                strategy=strategy_name, target=target,
                num_guesses=session.guess_count, solved=True,
                guesses=session.guesses,
            ))
    return results


def _chunks(items: list[str], size: int) -> list[list[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


# ------------------------------------------------------------------
# Batch runner
# ------------------------------------------------------------------

def run_batch(
    dictionary: Sequence[str],
    strategy: str | Strategy | ScoreFn | None = None,
    targets: Sequence[str] | None = None,
    config: SolverConfig | None = None,
    num_games: int | None = None,
    seed: int = 42,
    max_workers: int | None = None,
) -> BatchResults:
    """Solve every target (default: every dictionary word) as its own session.

    Parameters
    ----------
    strategy : str, Strategy, callable or None
        Strategy name, instance or score function. With more than one worker
        it must be picklable (module-level functions and Strategy objects are).
    num_games : int or None
        Play only a seeded random sample of this many targets.
    max_workers : int or None
        Worker processes. 1 runs inline; None picks ``os.cpu_count()``.

    Raises
    ------
    ValueError
        Before any session is played, if a dictionary word is malformed.
        Problems with individual targets are recorded as failed games.
    """
    config = config or SolverConfig()
    dictionary = list(dictionary)
    check_dictionary(dictionary, config.word_length)
    if strategy is None or isinstance(strategy, str):
        strategy = get_strategy(strategy)
    name = strategy.name if isinstance(strategy, Strategy) else getattr(
        strategy, "__name__", repr(strategy))

    targets = list(dictionary) if targets is None else list(targets)
    if num_games is not None and num_games < len(targets):
        targets = random.Random(seed).sample(targets, num_games)

    if max_workers is None:
        max_workers = os.cpu_count() or 1
    max_workers = max(1, min(max_workers, len(targets) or 1))

    results = BatchResults()
    if max_workers == 1:
        results.games.extend(_run_chunk(dictionary, targets, strategy, name, config))
        return results

    # About four chunks per worker.
    size = max(1, len(targets) // (max_workers * 4))
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_run_chunk, dictionary, chunk, strategy, name, config)
            for chunk in _chunks(targets, size)
        ]
        # Collect in submission order so results follow the target order.
        for fut in futures:
            results.games.extend(fut.result())
    return results


def run_tournament(
    dictionary: Sequence[str],
    strategies: Sequence[str] | None = None,
    targets: Sequence[str] | None = None,
    config: SolverConfig | None = None,
    num_games: int | None = None,
    seed: int = 42,
    max_workers: int | None = None,
) -> BatchResults:
    """Run :func:`run_batch` once per strategy on the same targets."""
    names = list(strategies) if strategies else strategy_names()
    dictionary = list(dictionary)
    if targets is None:
        targets = list(dictionary)
    if num_games is not None and num_games < len(targets):
        targets = random.Random(seed).sample(list(targets), num_games)

    print(f"Running {len(names)} strategies on {len(targets)} targets "
          f"(dictionary: {len(dictionary)} words, workers: {max_workers or 'auto'}) ...",
          flush=True)

    combined = BatchResults()
    for name in names:
        t0 = time.time()
        batch = run_batch(
            dictionary, name, targets=targets, config=config, max_workers=max_workers,
        )
        combined.games.extend(batch.games)
        s = summarize(batch.games)
        extra = f", failures: {len(batch.failures)}" if batch.failures else ""
        print(f"  {get_strategy(name).name:<16} done: {s['games_solved']}/{s['games_played']} "
              f"solved, mean {s['mean_guesses']:.2f}{extra} ({time.time() - t0:.1f}s)")
    return combined


# ------------------------------------------------------------------
# Leaderboard
# ------------------------------------------------------------------

def compute_leaderboard(summaries: dict[str, dict]) -> list[dict]:
    """Rank strategies: higher solve rate first, then lower mean guesses.

    Strategies with identical solve rate and mean share a rank.
    """
    ordered = sorted(
        summaries.items(),
        key=lambda kv: (-kv[1]["solve_rate"], kv[1]["mean_guesses"], kv[0]),
    )
    entries = []
    prev_key = None
    rank = 0
    for pos, (name, s) in enumerate(ordered, 1):
        key = (s["solve_rate"], s["mean_guesses"])
        if key != prev_key:
            rank = pos
            prev_key = key
        entries.append({
            "rank": rank,
            "strategy": name,
            "solve_rate": s["solve_rate"],
            "mean_guesses": s["mean_guesses"],
        })
    return entries


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Play every dictionary word and compare scoring strategies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python tournament.py                                # all strategies, bundled list
  python tournament.py --strategy discounted          # one strategy
  python tournament.py --words data/words_5.csv       # frequency-weighted list
  python tournament.py --num-games 100 --seed 7       # subsample 100 targets
  python tournament.py --no-recompute                 # statistics from full list only
""",
    )
    parser.add_argument("--words", type=str, default=None, help="Path to word list (.txt or .csv)")
    parser.add_argument("--strategy", action="append", default=None,
                        help=f"Strategy to run, repeatable (default: all of {strategy_names()})")
    parser.add_argument("--num-games", type=int, default=None, help="Limit number of targets")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for --num-games")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: auto)")
    parser.add_argument("--no-recompute", action="store_true",
                        help="Compute letter statistics once over the full dictionary")
    parser.add_argument("--csv", type=str, default=None, help="Save results CSV path")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram path")
    parser.add_argument("--json", type=str, default=None, help="Save results JSON path")
    args = parser.parse_args(argv)

    from lexicon import load_lexicon

    try:
        lex = load_lexicon(args.words)
        names = [get_strategy(s).name for s in args.strategy] if args.strategy else None
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except KeyError as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 2
    print(f"Vocabulary: {len(lex)} words"
          + (" (with frequencies)" if lex.weights else ""))

    config = SolverConfig(recompute_stats=not args.no_recompute)
    if lex.weights:
        config = replace(config, weights=dict(lex.weights))

    t0 = time.time()
    results = run_tournament(
        lex.words,
        strategies=names,
        config=config,
        num_games=args.num_games,
        seed=args.seed,
        max_workers=args.workers,
    )
    results.print_summary()
    print(f"Elapsed: {time.time() - t0:.1f}s")

    csv_path = args.csv or str(RESULTS_DIR / "tournament.csv")
    results.to_csv(csv_path)
    print(f"CSV saved to {csv_path}")

    plot_path = results.plot_histograms(args.plot or RESULTS_DIR / "tournament.png")
    if plot_path is not None:
        print(f"Histogram saved to {plot_path}")

    if args.json:
        results.to_json(args.json, config={
            "words": args.words,
            "num_games": args.num_games,
            "seed": args.seed,
            "recompute_stats": config.recompute_stats,
        })
        print(f"JSON saved to {args.json}")

    return 1 if results.failures else 0


if __name__ == "__main__":
    sys.exit(main())
