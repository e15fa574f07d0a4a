#!/usr/bin/env python3
"""
Draughts Benchmark Runner

Runs the draughts test suite at multiple depths to measure how often the
engine finds the known best move, how fast it searches, and how much the
transposition table helps.

Usage:
    python tools/run_benchmark.py [--depths 2,4,6] [--evaluator material] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from draughts_engine.config import EVALUATOR_NAMES, EngineConfig
from draughts_engine.utils.testing import run_suite


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_benchmark(depths: list[int], evaluator: str = "heuristic", seed: int = 42, verbose: bool = False):
    """
    Run the draughts suite at multiple depths.

    Args:
        depths: List of depths to test
        evaluator: Evaluator name
        seed: Engine seed
        verbose: If True, print detailed results for each position
    """
    print("=" * 80)
    print("DRAUGHTS BENCHMARK")
    print("=" * 80)
    print(f"Evaluator: {evaluator}")
    print("Search: Iterative deepening alpha-beta + transposition table")
    print(f"Depths: {depths}")
    print("=" * 80)

    all_results = []

    for depth in depths:
        print(f"\n{'=' * 80}")
        print(f"DEPTH {depth}")
        print("=" * 80)

        config = EngineConfig(max_depth=depth, evaluator=evaluator, seed=seed)
        result = run_suite(config, verbose=verbose)
        all_results.append({'depth': depth, **result})

        print(f"\nResults at depth {depth}:")
        print(f"  Correct: {result['score']}/{result['total']} ({result['percentage']:.1f}%)")
        print(f"  Total time: {format_time(result['total_time'])}")
        print(f"  Avg time per position: {format_time(result['avg_time'])}")
        print(f"  Total nodes: {result['nodes']:,}")
        print(f"  Nodes/sec: {result['nps']:,.0f}")
        print(f"  TT hit rate: {result['tt_hit_rate']:.1f}%")

        failed = [r for r in result['results'] if not r.correct]
        if failed and verbose:
            print("\n  Failed positions:")
            for r in failed:
                print(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print("\n" + "=" * 80)
    print("SUMMARY TABLE")
    print("=" * 80)
    print(f"{'Depth':<8} {'Correct':<12} {'%':<8} {'Avg Time':<12} {'Nodes/sec':<15} {'TT Hit %':<10}")
    print("-" * 80)

    for r in all_results:
        print(
            f"{r['depth']:<8} {r['score']}/{r['total']:<10} {r['percentage']:<7.1f}% "
            f"{format_time(r['avg_time']):<12} {r['nps']:>12,.0f}  {r['tt_hit_rate']:>8.1f}%"
        )

    print("=" * 80)

    position_results: dict[str, list[bool]] = {}
    for r in all_results:
        for pos_result in r['results']:
            position_results.setdefault(pos_result.position.id, []).append(pos_result.correct)

    always_failed = [pos_id for pos_id, results in position_results.items() if not any(results)]
    if always_failed:
        print(f"\nPositions that failed at all depths: {', '.join(sorted(always_failed))}")

    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Run the draughts test suite at multiple depths"
    )
    parser.add_argument(
        "--depths",
        type=str,
        default="2,4,6",
        help="Comma-separated list of depths to test (default: 2,4,6)"
    )
    parser.add_argument(
        "--evaluator",
        choices=EVALUATOR_NAMES,
        default="heuristic",
        help="Evaluation function (default: heuristic)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Engine seed (default: 42)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results for each position"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        depths = [int(d.strip()) for d in args.depths.split(",")]
        run_benchmark(depths, evaluator=args.evaluator, seed=args.seed, verbose=args.verbose)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
