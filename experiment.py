#!/usr/bin/env python3
"""Run a single strategy with detailed per-round output."""

from __future__ import annotations

import argparse
import json
import math
import random
import sys
from dataclasses import replace
from pathlib import Path

from lexicon import load_lexicon
from solver import SolverError, SolverLoop
from strategies import get_strategy
from strategy import SolverConfig
from wordle_env import feedback, render_pattern

RESULTS_DIR = Path(__file__).resolve().parent / "results"


def _entropy_bits(n: int) -> float:
    return math.log2(n) if n > 1 else 0.0


def run_experiment(
    loop: SolverLoop,
    targets: list[str],
    verbose: bool = False,
) -> list[dict]:
    """Play each target and log every round.

    Failed sessions are logged with ``solved=False`` and an ``error``
    message instead of stopping the run.
    """
    logs: list[dict] = []

    for i, target in enumerate(targets, 1):
        if verbose:
            print(f"\n--- Game {i}/{len(targets)} | Target: {target} ---")

        game_log: list[dict] = []
        error = None
        try:
            for rnd in loop.iter_rounds(target):
                pat = feedback(target, rnd.guess)
                remaining = len(rnd.candidates)
                step = {
                    "guess": rnd.guess,
                    "feedback": list(pat),
                    "remaining": remaining,
                    "entropy_bits": round(_entropy_bits(remaining), 3),
                    "knowledge": rnd.state.describe(),
                }
                game_log.append(step)
                if verbose:
                    print(
                        f"  Guess {len(game_log)}: {rnd.guess}  {render_pattern(pat)}  "
                        f"remaining={remaining}  H={step['entropy_bits']:.2f} bits  "
                        f"[{step['knowledge']}]"
                    )
        except SolverError as exc:
            error = str(exc)
            print(f"error: {exc}", file=sys.stderr)

        solved = error is None
        logs.append({
            "game": i,
            "target": target,
            "solved": solved,
            "num_guesses": len(game_log),
            "steps": game_log,
            "error": error,
        })

        if verbose:
            status = "SOLVED" if solved else f"FAILED ({error})"
            print(f"  -> {status} in {len(game_log)} guesses")

    return logs


def print_experiment_summary(logs: list[dict], strategy_name: str) -> None:
    n = len(logs)
    solved = [g["num_guesses"] for g in logs if g["solved"]]
    print(f"\n=== {strategy_name}: {n} games ===")
    print(f"  Solved: {len(solved)}/{n} ({100 * len(solved) / n:.1f}%)" if n else "  No games")
    if not solved:
        return
    solved.sort()
    k = len(solved)
    median = solved[k // 2] if k % 2 == 1 else (solved[k // 2 - 1] + solved[k // 2]) / 2
    print(f"  Guesses: mean {sum(solved) / k:.2f}, median {median:.1f}, max {solved[-1]}")


def plot_distribution(logs: list[dict], strategy_name: str, path: Path | None = None) -> Path:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    guesses = [g["num_guesses"] for g in logs if g["solved"]]
    mx = max(guesses) if guesses else 6
    bins = list(range(1, mx + 2))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(guesses, bins=bins, edgecolor="black", align="left")
    ax.set_title(f"{strategy_name}: guess distribution")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Count")
    fig.tight_layout()

    dest = path or RESULTS_DIR / f"experiment_{strategy_name.lower()}.png"
    dest.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(dest, dpi=150)
    plt.close(fig)
    return dest


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Single-strategy solver experiment")
    parser.add_argument("--strategy", type=str, default=None,
                        help="Strategy name (default: Discounted)")
    parser.add_argument("--words", type=str, default=None, help="Path to word list")
    parser.add_argument("--target", type=str, action="append", default=None,
                        help="Target word to solve, repeatable (default: random sample)")
    parser.add_argument("--num-games", type=int, default=10,
                        help="Sampled targets when --target is not given")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--no-recompute", action="store_true",
                        help="Compute letter statistics once over the full dictionary")
    parser.add_argument("--verbose", action="store_true", help="Print per-round details")
    parser.add_argument("--plot", type=str, default=None, help="Save plot to this path")
    parser.add_argument("--json", type=str, default=None, help="Save results as JSON")
    args = parser.parse_args(argv)

    try:
        lex = load_lexicon(path=args.words)
        strat = get_strategy(args.strategy)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except KeyError as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 2
    print(f"Vocabulary: {len(lex)} words")
    print(f"Strategy: {strat.name}")

    config = SolverConfig(recompute_stats=not args.no_recompute)
    if lex.weights:
        config = replace(config, weights=dict(lex.weights))
    loop = SolverLoop(lex.words, strat, config)

    if args.target:
        targets = [t.strip().lower() for t in args.target]
        for t in targets:
            try:
                loop.check_target(t)
            except SolverError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 2
    else:
        rng = random.Random(args.seed)
        targets = rng.sample(lex.words, min(args.num_games, len(lex.words)))

    logs = run_experiment(loop, targets, verbose=args.verbose or bool(args.target))
    print_experiment_summary(logs, strat.name)

    if args.plot:
        print(f"Plot saved to {plot_distribution(logs, strat.name, Path(args.plot))}")

    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        output = {
            "strategy": strat.name,
            "config": {
                "words": args.words,
                "num_games": len(targets),
                "seed": args.seed,
                "recompute_stats": config.recompute_stats,
            },
            "games": logs,
        }
        json_path.write_text(json.dumps(output, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"JSON saved to {json_path}")

    return 0 if all(g["solved"] for g in logs) else 1


if __name__ == "__main__":
    sys.exit(main())
