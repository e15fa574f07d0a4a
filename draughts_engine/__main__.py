"""
Command-line analysis of a single position.

Usage:
    python -m draughts_engine [--fen FEN] [--moves 32-28 19-23 ...]
                              [--depth 6] [--time 5] [--evaluator heuristic]
"""

import argparse
import sys

from draughts_engine.board import STARTING_FEN, DraughtsBoard
from draughts_engine.config import EVALUATOR_NAMES, EngineConfig
from draughts_engine.engine import DraughtsEngine
from draughts_engine.utils.log import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m draughts_engine",
        description="Find the best move in an international draughts position",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--fen", default=STARTING_FEN, help="Position in PDN FEN notation")
    parser.add_argument("--moves", nargs="*", default=[], help="PDN moves to play from the FEN first")
    parser.add_argument("--depth", type=int, default=6, help="Maximum search depth")
    parser.add_argument("--time", type=float, default=None, help="Time limit in seconds")
    parser.add_argument("--evaluator", choices=EVALUATOR_NAMES, default="heuristic", help="Evaluation function")
    parser.add_argument("--seed", type=int, default=42, help="Seed for hashing and fallback moves")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--log-file", default=None, help="Log file (default: log to stderr)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(debug=args.debug, log_file=args.log_file)

    try:
        config = EngineConfig(
            max_depth=args.depth,
            time_limit=args.time,
            seed=args.seed,
            evaluator=args.evaluator,
        )
        board = DraughtsBoard(args.fen)
        for text in args.moves:
            board.push_pdn(text)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = DraughtsEngine(config)
    print(board)
    print(f"FEN: {board.fen()}")

    move = engine.request_move(board)
    result = engine.last_result

    if move is None:
        print("No legal moves")
        return 0

    print(f"bestmove {move.pdn()} score {result.score} depth {result.depth} "
          f"nodes {result.nodes} time {int(result.elapsed * 1000)}ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
