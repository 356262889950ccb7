# fastfem/constraints.py
"""
CONSTRAINT REDUCTION
====================

PURPOSE:
--------
Turns node support conditions into
1. a partition of the 3N global DOFs into free and eliminated DOFs, and
2. one multi-point constraint (MPC) row per slider node.

The free-DOF list is the basis of the reduced system: reduced column j is
global DOF `free[j]`. It is built once per solve, stored read-only, and used
by the solver (to reduce K and F) and afterwards to scatter the reduced
solution back into the 3N displacement vector.

DOF CLASSIFICATION:
-------------------
    FREE       ux  uy  rz    all free
    SLIDER     ux  uy  rz    all free, plus one MPC row on (ux, uy)
    FIXED_PIN          rz    translations eliminated
    FIXED                    everything eliminated

SLIDER MPC:
-----------
A slider at angle θ (degrees, the direction the node may move along) must not
move along its normal n = (cos(θ+90°), sin(θ+90°)):

    n_x·ux + n_y·uy = 0

The row holds n_x at the reduced column of the node's ux and n_y at the column
of its uy, zeros elsewhere.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .model import ConstraintKind, Node, DOF_PER_NODE
from .kernel.dof import DOF_2D_FRAME, UX, UY, RZ


def node_free_dofs(node: Node, index: int) -> List[int]:
    """
    Global indices of the DOFs of node `index` that remain unknowns.

    Raises:
    -------
    TypeError
        If the node carries something that is not a ConstraintKind.
    """
    kind = node.constraint
    ux = DOF_2D_FRAME.idx(index, UX)
    uy = DOF_2D_FRAME.idx(index, UY)
    rz = DOF_2D_FRAME.idx(index, RZ)

    if kind is ConstraintKind.FREE:
        return [ux, uy, rz]
    if kind is ConstraintKind.SLIDER:
        return [ux, uy, rz]
    if kind is ConstraintKind.FIXED_PIN:
        return [rz]
    if kind is ConstraintKind.FIXED:
        return []
    raise TypeError(f"Node {index}: unknown constraint kind {kind!r}")


def _readonly(values) -> np.ndarray:
    arr = np.array(values, dtype=int)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class DOFPartition:
    """
    Free/eliminated split of the global DOFs for one solve.

    Attributes:
    -----------
    ndof : int
        Size of the global system (3N)
    free : np.ndarray
        Read-only; free[j] is the global DOF of reduced column j
    fixed : np.ndarray
        Read-only; eliminated global DOFs (displacement zero)
    slider_nodes : tuple of int
        Node indices carrying a slider MPC, in node order
    """
    ndof: int
    free: np.ndarray
    fixed: np.ndarray
    slider_nodes: Tuple[int, ...] = ()

    @property
    def n_free(self) -> int:
        return int(self.free.shape[0])

    @property
    def n_constraints(self) -> int:
        return len(self.slider_nodes)

    def position(self, global_dof: int) -> int:
        """Reduced column of a global DOF, -1 if the DOF is eliminated."""
        hits = np.flatnonzero(self.free == global_dof)
        return int(hits[0]) if hits.size else -1

    def reduce_matrix(self, K: np.ndarray) -> np.ndarray:
        return K[np.ix_(self.free, self.free)]

    def reduce_vector(self, F: np.ndarray) -> np.ndarray:
        return F[self.free]

    def expand(self, u_r: np.ndarray) -> np.ndarray:
        """Scatter reduced values into a zero (ndof,) vector."""
        if u_r.shape != (self.n_free,):
            raise ValueError(f"Expected {self.n_free} reduced values, got {u_r.shape}")
        d = np.zeros(self.ndof, dtype=float)
        d[self.free] = u_r
        return d


def partition_dofs(nodes: Sequence[Node]) -> DOFPartition:
    """Classify every node's DOFs and freeze the reduced basis."""
    free: List[int] = []
    sliders: List[int] = []
    for i, node in enumerate(nodes):
        free.extend(node_free_dofs(node, i))
        if node.constraint is ConstraintKind.SLIDER:
            sliders.append(i)

    ndof = DOF_PER_NODE * len(nodes)
    free_set = set(free)
    fixed = [dof for dof in range(ndof) if dof not in free_set]
    return DOFPartition(
        ndof=ndof,
        free=_readonly(free),
        fixed=_readonly(fixed),
        slider_nodes=tuple(sliders),
    )


def slider_normal(angle_deg: float) -> Tuple[float, float]:
    """Unit normal (cos(θ+90°), sin(θ+90°)) of a slider track at θ degrees."""
    normal = math.radians(angle_deg) + math.pi / 2.0
    return math.cos(normal), math.sin(normal)


def slider_constraint_rows(nodes: Sequence[Node], partition: DOFPartition) -> np.ndarray:
    """
    MPC rows over the reduced basis, one per slider node.

    Returns:
    --------
    np.ndarray
        Shape (n_sliders, n_free). A model without sliders gives (0, n_free).
    """
    C = np.zeros((partition.n_constraints, partition.n_free), dtype=float)
    for row, index in enumerate(partition.slider_nodes):
        a_x, a_y = slider_normal(nodes[index].angle)
        col_x = partition.position(DOF_2D_FRAME.idx(index, UX))
        col_y = partition.position(DOF_2D_FRAME.idx(index, UY))
        C[row, col_x] = a_x
        C[row, col_y] = a_y
    return C
