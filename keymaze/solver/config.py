"""
Configuration for the key collection solver.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SolverConfig:
    """Configuration for the key collection solver."""

    # Search parameters
    workers: int = 1  # Threads over first-key branches; 1 keeps it single-threaded
    timeout_ms: Optional[float] = None  # External budget, None means run to completion
    initial_bound: Optional[int] = None  # Seed for the best known cost

    # Reporting
    show_progress: bool = False  # tqdm bar while building the path table
