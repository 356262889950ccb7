# fastfem/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SolverSettings:
    """Numerical tolerances and diagnostics for one solve."""

    # Elements shorter than this contribute a zero stiffness matrix
    zero_length_tol: float = 1e-9

    # Sections with |S| below this are treated as axial-only in stress recovery
    section_modulus_tol: float = 1e-12

    # Relative pivot threshold of the rank-revealing QR (None: n·eps)
    rank_rtol: Optional[float] = None

    # Residual, relative to the load, above which a solve is reported as singular
    residual_rtol: float = 1e-8

    # Advisory condition number of the slider saddle system
    compute_condition_number: bool = True

    # Equilibrium imbalance (relative to the largest load/reaction) worth a warning
    equilibrium_warn_rtol: float = 1e-6

    # Emit the full text report at DEBUG level after each successful solve
    log_report: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.zero_length_tol <= 0.0:
            raise ValueError("zero_length_tol must be positive")
        if self.section_modulus_tol < 0.0:
            raise ValueError("section_modulus_tol must be non-negative")
        if self.rank_rtol is not None and not 0.0 < self.rank_rtol < 1.0:
            raise ValueError("rank_rtol must be in (0, 1)")
        if self.residual_rtol <= 0.0:
            raise ValueError("residual_rtol must be positive")
        if self.equilibrium_warn_rtol <= 0.0:
            raise ValueError("equilibrium_warn_rtol must be positive")


# Default settings instance
DEFAULT_SETTINGS = SolverSettings()
