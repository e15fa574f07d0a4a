"""
Engine configuration.
"""

from dataclasses import dataclass, field
from typing import Optional

EVALUATOR_NAMES = ("heuristic", "material")


@dataclass
class EvalWeights:
    """Weights of the heuristic evaluation terms.

    The defaults reproduce the plain sum of all terms. None of the values
    are load-bearing for search correctness; they are tuning knobs.
    """

    man: int = 1
    """Material value of a man (multiplied by the square weight)"""

    king: int = 2
    """Material value of a king (multiplied by the square weight)"""

    material: int = 1
    """Weight of the material term"""

    back_row: int = 1
    """Weight per own piece still on the own back row"""

    protected: int = 1
    """Weight per protected central square"""

    runaway: int = 1
    """Weight per man with a free path to promotion"""

    trapped_king: int = 1
    """Penalty per own king without an available move"""


@dataclass
class EngineConfig:
    """Configuration of a DraughtsEngine.

    Search budget, reproducibility and transposition table settings in one
    place.
    """

    max_depth: int = 6
    """Deepest iterative deepening iteration"""

    time_limit: Optional[float] = None
    """Seconds per move before the search stops itself (None = depth only)"""

    seed: Optional[int] = 42
    """Seed for the Zobrist table and fallback move choice (None for random)"""

    evaluator: str = "heuristic"
    """Evaluation function: 'heuristic' or 'material'"""

    weights: EvalWeights = field(default_factory=EvalWeights)
    """Heuristic evaluation weights"""

    tt_verify: bool = False
    """Store occupancy in table entries and reject fingerprint collisions"""

    tt_max_entries: Optional[int] = None
    """Bound on table entries with FIFO eviction (None = unbounded)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")

        if self.evaluator not in EVALUATOR_NAMES:
            raise ValueError(
                f"evaluator should be one of {', '.join(EVALUATOR_NAMES)}, got {self.evaluator}"
            )

        if self.tt_max_entries is not None and self.tt_max_entries <= 0:
            raise ValueError(f"tt_max_entries must be positive, got {self.tt_max_entries}")

    def __repr__(self) -> str:
        return (
            f"EngineConfig(depth={self.max_depth}, time_limit={self.time_limit}, "
            f"evaluator={self.evaluator}, seed={self.seed})"
        )
