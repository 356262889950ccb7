# fastfem - planar frame and truss analysis
"""
FASTFEM: Direct-Stiffness Analysis of Planar Frames and Trusses
===============================================================

Static, linear-elastic analysis of 2D structures built from rigid-jointed
beams and pin-ended truss members. One load case per solve.

ARCHITECTURE:
-------------
    kernel/         Element-agnostic core (DOF indexing, assembly, dense solves)
    catalog.py      Material and section profiles
    model.py        Node, BeamElement, FrameSystem
    editing.py      Model edits with cascading deletes
    elements.py     Frame2D element stiffness and transformation
    assembly.py     Global K for a planar frame
    constraints.py  Free-DOF partition and slider MPC rows
    post.py         Reactions, end forces, combined stress
    solve.py        The solve pipeline and its status codes
    report.py       pandas tables and a text summary
    config.py       Solver settings

USAGE:
------
    >>> from fastfem import FrameSystem, Node, BeamElement, ConstraintKind, solve
    >>> from fastfem.catalog import default_catalog
    >>> materials, sections = default_catalog()
    >>> system = FrameSystem(
    ...     nodes=[Node(0.0, 0.0, ConstraintKind.FIXED), Node(1.0, 0.0)],
    ...     beams=[BeamElement(0, 1, material=0, section=0)],
    ...     materials=materials, sections=sections,
    ... )
    >>> system.forces[4] = -100.0
    >>> solve(system)
    <SolveStatus.OK: 0>
"""

from .catalog import MaterialProfile, SectionProfile, default_catalog
from .model import (
    ConstraintKind,
    Node,
    BeamElement,
    MemberResult,
    FrameSystem,
    TopologyError,
)
from .config import SolverSettings, DEFAULT_SETTINGS
from .kernel import SolverError, SingularSystemError, SaddleSystemError, MechanismError
from .solve import SolveStatus, NoFreeDOFError, solve, solve_or_raise

__version__ = "0.1.0"

__all__ = [
    'MaterialProfile', 'SectionProfile', 'default_catalog',
    'ConstraintKind', 'Node', 'BeamElement', 'MemberResult', 'FrameSystem',
    'TopologyError',
    'SolverSettings', 'DEFAULT_SETTINGS',
    'SolverError', 'SingularSystemError', 'SaddleSystemError', 'MechanismError',
    'SolveStatus', 'NoFreeDOFError', 'solve', 'solve_or_raise',
]
