# curvegrammar/config.py
"""
Evaluator configuration and defaults.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple


WEIGHT_SCOPES: Tuple[str, ...] = ('global', 'per_name')


@dataclass
class EvaluatorConfig:
    """Global evaluator configuration."""
    
    # Reproducibility: the reference run uses seed 42
    seed: int = 42
    
    # How rule-variant weights are normalized:
    # - 'global':   one weight sum over ALL rules (reference behavior)
    # - 'per_name': weight sum over the variants of the requested name only
    weight_scope: str = 'global'
    
    # Rule that seeds the stack
    entry_rule: str = 'entry'
    
    # Optional hard bound on emitted points (None = unbounded)
    max_points: Optional[int] = None
    
    # Successor switches allowed in a row at one depth before the
    # evaluator reports a successor cycle
    max_successor_hops: int = 64
    
    # Log a progress line every N emitted points (0 disables)
    progress_interval: int = 10000
    
    log_level: int = logging.INFO
    
    def __post_init__(self):
        if self.weight_scope not in WEIGHT_SCOPES:
            raise ValueError(
                f"Unknown weight_scope: {self.weight_scope!r} (expected one of {WEIGHT_SCOPES})"
            )
        if self.max_points is not None and self.max_points < 0:
            raise ValueError(f"max_points must be non-negative, got {self.max_points}")
        if self.progress_interval < 0:
            raise ValueError(f"progress_interval must be non-negative, got {self.progress_interval}")
        if self.max_successor_hops < 1:
            raise ValueError(f"max_successor_hops must be >= 1, got {self.max_successor_hops}")


# Global config instance
CONFIG = EvaluatorConfig()
