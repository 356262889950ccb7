# formulate -> assemble -> reduce -> solve -> post-process, with status codes

import logging
from enum import IntEnum
from typing import Optional

import numpy as np

from .config import SolverSettings, DEFAULT_SETTINGS
from .model import FrameSystem
from .assembly import assemble_global_K, element_stiffness_matrices
from .constraints import partition_dofs, slider_constraint_rows
from .kernel.solve import (
    SolverError,
    SingularSystemError,
    SaddleSystemError,
    solve_reduced,
    solve_saddle,
)
from .post import compute_reactions, equilibrium_check, recover_member_results
from .report import format_report

logger = logging.getLogger(__name__)


class SolveStatus(IntEnum):
    """Outcome of `solve`. Zero is success, failures are negative."""
    OK = 0
    NO_FREE_DOFS = -1
    SADDLE_SIZE_MISMATCH = -2
    SINGULAR = -3


class NoFreeDOFError(SolverError):
    """Raised when every DOF of the model is restrained."""
    pass


_STATUS_BY_ERROR = (
    (NoFreeDOFError, SolveStatus.NO_FREE_DOFS),
    (SaddleSystemError, SolveStatus.SADDLE_SIZE_MISMATCH),
    (SingularSystemError, SolveStatus.SINGULAR),
)


def _run(system: FrameSystem, settings: SolverSettings) -> None:
    system.resize_vectors()
    system.validate()

    # Step 1: element stiffness, formulated once and shared with post-processing
    element_matrices = element_stiffness_matrices(
        system.nodes, system.beams, system.materials, system.sections,
        zero_length_tol=settings.zero_length_tol,
    )

    # Step 2: global stiffness
    K = assemble_global_K(
        system.nodes, system.beams, system.materials, system.sections,
        element_matrices=element_matrices,
    )
    system.global_k = K

    # Step 3: free DOFs and slider rows
    partition = partition_dofs(system.nodes)
    if partition.n_free == 0:
        raise NoFreeDOFError("No free DOFs to solve.")

    K_r = partition.reduce_matrix(K)
    F_r = partition.reduce_vector(system.forces)
    C = slider_constraint_rows(system.nodes, partition)
    logger.debug(
        "Reduced system: %d free DOFs of %d, %d slider constraint(s)",
        partition.n_free, partition.ndof, partition.n_constraints,
    )

    # Step 4: solve
    if partition.n_constraints == 0:
        u_r = solve_reduced(
            K_r, F_r,
            rank_rtol=settings.rank_rtol, residual_rtol=settings.residual_rtol,
        )
        multipliers = np.zeros(0, dtype=float)
        cond = None
    else:
        saddle = solve_saddle(
            K_r, F_r, C,
            compute_condition=settings.compute_condition_number,
            rank_rtol=settings.rank_rtol, residual_rtol=settings.residual_rtol,
        )
        u_r = saddle.u
        multipliers = saddle.multipliers
        cond = saddle.condition_number

    d = partition.expand(u_r)

    # Step 5: reactions, member forces and stresses
    R = compute_reactions(K, d, system.forces)
    results, min_stress, max_stress = recover_member_results(
        system.nodes, system.beams, system.sections, element_matrices, d,
        section_modulus_tol=settings.section_modulus_tol,
        zero_length_tol=settings.zero_length_tol,
    )

    system.displacement = d
    system.reactions = R
    system.member_results = results
    system.multipliers = multipliers
    system.condition_number = cond
    system.min_stress = min_stress
    system.max_stress = max_stress

    _check_equilibrium(system, settings)


def _check_equilibrium(system: FrameSystem, settings: SolverSettings) -> None:
    check = equilibrium_check(system.nodes, system.forces, system.reactions)
    load_ref = max(
        float(np.max(np.abs(system.forces), initial=0.0)),
        float(np.max(np.abs(system.reactions), initial=0.0)),
    )
    extent = max(
        (max(abs(n.x), abs(n.y)) for n in system.nodes), default=0.0
    )
    limit = settings.equilibrium_warn_rtol * load_ref * (1.0 + extent)
    if limit > 0.0 and not check.is_balanced(atol=limit):
        logger.warning(
            "Equilibrium residual: Fx=%.3e Fy=%.3e Mz=%.3e", check.fx, check.fy, check.mz
        )


def solve_or_raise(system: FrameSystem, settings: Optional[SolverSettings] = None) -> None:
    """
    Run the full analysis pipeline on `system` and store the results on it.

    Raises:
    -------
    TopologyError
        If the model breaks the beam/node/catalog invariants
    NoFreeDOFError, SingularSystemError, SaddleSystemError
        If the solve fails; previous outputs are left in place
    """
    settings = settings or DEFAULT_SETTINGS
    system.solved = False
    try:
        _run(system, settings)
    except SolverError as exc:
        system.status = status_for_error(exc)
        raise
    system.status = SolveStatus.OK
    system.solved = True

    logger.info(
        "Solved %d nodes, %d beams: stress range %.6g to %.6g",
        len(system.nodes), len(system.beams), system.min_stress, system.max_stress,
    )
    if settings.log_report and logger.isEnabledFor(logging.DEBUG):
        logger.debug("\n%s", format_report(system))


def status_for_error(exc: BaseException) -> SolveStatus:
    """SolveStatus matching a solver exception."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return SolveStatus.SINGULAR


def solve(system: FrameSystem, settings: Optional[SolverSettings] = None) -> SolveStatus:
    """
    Solve the current model state and report a status code.

    Returns:
    --------
    SolveStatus
        OK (0) on success; NO_FREE_DOFS (-1), SADDLE_SIZE_MISMATCH (-2) or
        SINGULAR (-3) on failure. A failed solve keeps the previous
        displacement/stress outputs and leaves `system.solved` False.
    """
    try:
        solve_or_raise(system, settings)
    except SolverError as exc:
        logger.warning("Solve failed: %s", exc)
        return system.status
    return SolveStatus.OK
