# fastfem/kernel - element-agnostic core
"""
KERNEL
======

Plumbing that does not depend on the element formulation:
- DOF indexing: (node, local_dof) -> global index
- Scatter-add assembly of element matrices
- Dense direct solves, including the Lagrange-multiplier saddle system
"""

from .dof import DOFManager, DOF_2D_FRAME
from .assemble import assemble_global_K, add_nodal_load
from .solve import (
    SolverError,
    SingularSystemError,
    SaddleSystemError,
    MechanismError,
    SaddleSolution,
    solve_dense,
    solve_reduced,
    solve_saddle,
)

__all__ = [
    'DOFManager', 'DOF_2D_FRAME',
    'assemble_global_K', 'add_nodal_load',
    'SolverError', 'SingularSystemError', 'SaddleSystemError', 'MechanismError',
    'SaddleSolution', 'solve_dense', 'solve_reduced', 'solve_saddle',
]
