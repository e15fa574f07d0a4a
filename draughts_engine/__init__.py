"""
Draughts Engine

A search-based player for international draughts (10x10) with a
multi-factor heuristic evaluation and iterative deepening alpha-beta search.

## Architecture

The engine is organized into several key modules:

1. **board**: Position representation
   - DraughtsBoard: legal moves (mandatory and majority capture, flying
     kings), reversible push/pop, PDN FEN and move notation
   - numpy array views of a position

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - HeuristicEvaluator: material, back row, protected squares, runaway
     men, trapped kings
   - MaterialEvaluator: plain piece count

3. **search**: Search algorithms
   - Alpha-beta search with mutually recursive max/min procedures
   - Iterative deepening driver with cooperative cancellation
   - Transposition table with Zobrist hashing
   - Evaluation-based move ordering

4. **engine**: Player facade for a game harness
   - request_move / last_score / request_stop

5. **utils**: Logging setup, test positions and benchmarking

## Quick Start

```python
from draughts_engine import DraughtsBoard, DraughtsEngine, EngineConfig

engine = DraughtsEngine(EngineConfig(max_depth=6))
board = DraughtsBoard()

move = engine.request_move(board)
print(f"Best move: {move} (score: {engine.last_score()})")
```

From the command line:

```bash
python -m draughts_engine --depth 6 --fen "W:W31-50:B1-20"
```

## Version

0.1.0
"""

__version__ = "0.1.0"

from draughts_engine.board import DraughtsBoard, Move
from draughts_engine.config import EngineConfig, EvalWeights
from draughts_engine.engine import DraughtsEngine, RandomPlayer
from draughts_engine.evaluation import Evaluator, HeuristicEvaluator, MaterialEvaluator
from draughts_engine.search import SearchResult

__all__ = [
    'DraughtsBoard',
    'Move',
    'EngineConfig',
    'EvalWeights',
    'DraughtsEngine',
    'RandomPlayer',
    'Evaluator',
    'HeuristicEvaluator',
    'MaterialEvaluator',
    'SearchResult',
]
