# fastfem/kernel/solve.py
"""Dense direct solves for the reduced and the slider-augmented (saddle-point) systems."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import scipy.linalg

logger = logging.getLogger(__name__)

# Rounding allowance of the residual check, in units of n·eps·Σ_j ||A[:, j]||·|x_j|
ROUNDOFF_FACTOR = 10.0


class SolverError(RuntimeError):
    """Base class for failures of a single solve."""
    pass


class SingularSystemError(SolverError):
    """Raised when the system has no finite solution for the applied load."""
    pass


# Name used by callers that think in structural terms
MechanismError = SingularSystemError


class SaddleSystemError(SolverError):
    """Raised when the augmented solve returns a result of the wrong size."""
    pass


def solve_dense(
    A: np.ndarray,
    b: np.ndarray,
    rank_rtol: Optional[float] = None,
    residual_rtol: float = 1e-8,
) -> Tuple[np.ndarray, int]:
    """
    Solve A·x = b with a column-pivoted (rank-revealing) QR decomposition.

    A rank-deficient but consistent system is solved with its null-space
    components set to zero. This is the normal situation for a node joined only
    by truss members: its rotation carries no stiffness and no load.

    Args:
        A: Square system matrix (n x n)
        b: Right-hand side (n,)
        rank_rtol: Pivots at or below rank_rtol·|R_00| are treated as zero
            (default n·eps, the LAPACK rank cutoff)
        residual_rtol: Max ||A·x - b|| relative to ||b||, on top of the
            rounding floor n·eps·Σ_j ||A[:, j]||·|x_j| of evaluating A·x

    Returns:
        x: Solution (n,)
        rank: Numerical rank of A

    Raises:
        SingularSystemError: If the result is not finite or the residual shows
            the load has a component the structure cannot resist (mechanism)
    """
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float)
    n = A.shape[0]
    if A.shape != (n, n) or b.shape != (n,):
        raise ValueError(f"Expected square A and matching b, got {A.shape} and {b.shape}")
    if n == 0:
        return np.zeros(0, dtype=float), 0

    eps = np.finfo(float).eps
    if rank_rtol is None:
        rank_rtol = n * eps

    Q, R, perm = scipy.linalg.qr(A, pivoting=True)
    pivots = np.abs(np.diag(R))
    if pivots[0] == 0.0:
        rank = 0
    else:
        rank = int(np.count_nonzero(pivots > rank_rtol * pivots[0]))

    x = np.zeros(n, dtype=float)
    if rank > 0:
        qtb = Q[:, :rank].T @ b
        x[perm[:rank]] = scipy.linalg.solve_triangular(R[:rank, :rank], qtb)

    if not np.all(np.isfinite(x)):
        raise SingularSystemError(f"Solve produced non-finite values (rank {rank}/{n}).")

    # Zero load: the basic solution is exactly zero and trivially consistent
    b_norm = float(np.linalg.norm(b))
    if b_norm == 0.0:
        return x, rank

    residual = float(np.linalg.norm(A @ x - b))
    roundoff = n * eps * float(np.linalg.norm(A, axis=0) @ np.abs(x))
    if residual > residual_rtol * b_norm + ROUNDOFF_FACTOR * roundoff:
        raise SingularSystemError(
            f"Unstable system (rank {rank}/{n}, residual={residual:.2e}). "
            "Check supports and member releases."
        )

    if rank < n:
        logger.debug("Rank-deficient system solved: rank %d of %d", rank, n)
    return x, rank


def solve_reduced(
    K_r: np.ndarray,
    F_r: np.ndarray,
    rank_rtol: Optional[float] = None,
    residual_rtol: float = 1e-8,
) -> np.ndarray:
    """
    Solve the reduced stiffness equation K_r·u_r = F_r (no sliders).

    Raises:
        SingularSystemError: If K_r cannot carry F_r
    """
    u_r, _ = solve_dense(K_r, F_r, rank_rtol=rank_rtol, residual_rtol=residual_rtol)
    return u_r


@dataclass(frozen=True)
class SaddleSolution:
    """
    Result of the Lagrange-multiplier solve.

    u: reduced displacements (n_free,)
    multipliers: physical multipliers, one per constraint row
    scale: factor applied to the constraint rows
    condition_number: sigma_max / sigma_min of the augmented matrix, or None
    """
    u: np.ndarray
    multipliers: np.ndarray
    scale: float
    condition_number: Optional[float] = None


def constraint_scale(K_r: np.ndarray) -> float:
    """Frobenius norm of K_r, or 1.0 when K_r is exactly zero."""
    k_scale = float(np.linalg.norm(K_r))
    return k_scale if k_scale > 0.0 else 1.0


def condition_number(M: np.ndarray) -> float:
    """Ratio of the largest to the smallest singular value (inf if singular)."""
    sv = scipy.linalg.svdvals(M)
    if sv.size == 0:
        return 1.0
    if sv[-1] == 0.0:
        return float("inf")
    return float(sv[0] / sv[-1])


def build_saddle_system(
    K_r: np.ndarray,
    F_r: np.ndarray,
    C_scaled: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Augmented system

        [ K_r   Cᵀ ] [u ]   [F_r]
        [ C     0  ] [λ'] = [ 0 ]
    """
    n = K_r.shape[0]
    m = C_scaled.shape[0]
    size = n + m

    M = np.zeros((size, size), dtype=float)
    M[:n, :n] = K_r
    M[:n, n:] = C_scaled.T
    M[n:, :n] = C_scaled

    rhs = np.zeros(size, dtype=float)
    rhs[:n] = F_r
    return M, rhs


def solve_saddle(
    K_r: np.ndarray,
    F_r: np.ndarray,
    C: np.ndarray,
    compute_condition: bool = True,
    rank_rtol: Optional[float] = None,
    residual_rtol: float = 1e-8,
) -> SaddleSolution:
    """
    Solve K_r·u = F_r subject to C·u = 0 with Lagrange multipliers.

    The constraint rows are unit-magnitude direction cosines while K_r entries
    are of order EA/L, so C is first multiplied by ||K_r|| to put both blocks
    in the same numerical range. The multipliers of the scaled system are
    mapped back afterwards so that Cᵀ·λ is the constraint force in the units
    of F_r.

    Args:
        K_r: Reduced stiffness (n x n)
        F_r: Reduced load (n,)
        C: Constraint rows over the reduced basis (m x n)
        compute_condition: Also compute the advisory condition number

    Returns:
        SaddleSolution

    Raises:
        SingularSystemError: If the augmented system has no finite solution
        SaddleSystemError: If the solve returns a vector of the wrong size
    """
    n = K_r.shape[0]
    m = C.shape[0]
    if C.shape != (m, n):
        raise ValueError(f"Constraint matrix shape {C.shape} doesn't match {n} free DOFs")

    scale = constraint_scale(K_r)
    M, rhs = build_saddle_system(K_r, F_r, C * scale)
    size = n + m

    cond = None
    if compute_condition:
        cond = condition_number(M)
        logger.debug("Saddle system %dx%d, scale=%.3e, cond=%.3e", size, size, scale, cond)

    full, _ = solve_dense(M, rhs, rank_rtol=rank_rtol, residual_rtol=residual_rtol)
    if full.shape[0] != size:
        raise SaddleSystemError(
            f"Saddle point solve returned {full.shape[0]} values, expected {size}."
        )

    u = full[:n]
    multipliers = full[n:] * scale
    return SaddleSolution(u=u, multipliers=multipliers, scale=scale, condition_number=cond)
