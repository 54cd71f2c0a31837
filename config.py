from dataclasses import dataclass
from typing import Optional

@dataclass
class BenchConfig:
    depth: int = 7                    # 7: ~3e8 nodes, a few minutes in CPython
    divide: bool = False              # per-root-move breakdown
    show_progress: bool = True        # tqdm bar over root moves (divide only)
    log_path: Optional[str] = None    # append results here if set

@dataclass
class CheckConfig:
    """Settings for the make/undo self-check run by the benchmark"""
    num_positions: int = 100          # random positions to probe
    max_plies: int = 40               # random playout length
    seed: int = 0

@dataclass
class Config:
    bench: BenchConfig = None
    check: CheckConfig = None

    def __post_init__(self):
        if self.bench is None:
            self.bench = BenchConfig()
        if self.check is None:
            self.check = CheckConfig()
