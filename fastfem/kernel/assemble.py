# fastfem/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Scatter-Add
===================================

PURPOSE:
--------
Builds the global stiffness matrix from element contributions. Assembly does
not care what the element is, only:
- the total number of DOFs
- for each element: its DOF map and its stiffness matrix in global coordinates

ALGORITHM:
----------
    K = zeros(ndof × ndof)
    for each element:
        for each (a, b) in ke:
            K[dof_map[a], dof_map[b]] += ke[a, b]

Addition is commutative, so the element order does not change the result and
elements sharing a node superpose their stiffness at that node's DOFs.
"""

import numpy as np
from typing import List, Sequence, Tuple


def assemble_global_K(
    ndof: int,
    contributions: Sequence[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix from element contributions.

    Parameters:
    -----------
    ndof : int
        Total number of DOFs (3 × n_nodes for a planar frame)

    contributions : sequence of (dof_map, ke)
        - dof_map: global DOF indices of the element, e.g. [0, 1, 2, 3, 4, 5]
        - ke: element stiffness in global coordinates,
          shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        Global stiffness matrix K, shape (ndof, ndof). Symmetric positive
        semi-definite until supports are applied.

    Example:
    --------
    >>> contributions = [(dof.element_dof_map([b.ni, b.nj]), ke) for b, ke in ...]
    >>> K = assemble_global_K(dof.ndof(len(nodes)), contributions)
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)

        if ke.shape != (n_element_dofs, n_element_dofs):
            raise ValueError(
                f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"
            )

        idx = np.asarray(dof_map, dtype=int)
        # np.add.at accumulates repeated indices instead of overwriting them
        np.add.at(K, np.ix_(idx, idx), ke)

    return K


def add_nodal_load(
    F: np.ndarray,
    node_id: int,
    load_vector: Sequence[float],
    dof_per_node: int
) -> None:
    """
    Accumulate a nodal load into the global load vector (in-place).

    load_vector is [Fx, Fy, Mz] for a planar frame.

    >>> F = np.zeros(6)
    >>> add_nodal_load(F, node_id=1, load_vector=[1000.0, 0.0, 0.0], dof_per_node=3)
    >>> F[3]
    1000.0
    """
    base_dof = dof_per_node * node_id
    for i, val in enumerate(load_vector):
        F[base_dof + i] += val
