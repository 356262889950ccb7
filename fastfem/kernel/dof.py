# fastfem/kernel/dof.py
"""
DOF INDEXING
============

Maps (node index, local DOF) to a row/column of the global system.

    planar frame:  3 DOF/node (ux, uy, rz)

    node k  ->  3k (ux), 3k+1 (uy), 3k+2 (rz)

Everything downstream (assembly, constraint reduction, post-processing) goes
through this mapping so the layout is defined in exactly one place.
"""

from dataclasses import dataclass
from typing import List, Sequence

UX, UY, RZ = 0, 1, 2


@dataclass(frozen=True)
class DOFManager:
    """
    Degree-of-freedom indexing for a fixed number of DOFs per node.

    Examples:
    ---------
    >>> dof = DOFManager(dof_per_node=3)
    >>> dof.idx(1, UY)
    4
    >>> dof.element_dof_map([2, 5])
    [6, 7, 8, 15, 16, 17]
    """
    dof_per_node: int

    def idx(self, node_id: int, local_dof: int) -> int:
        """Global DOF index of `local_dof` at `node_id`."""
        return self.dof_per_node * node_id + local_dof

    def ndof(self, n_nodes: int) -> int:
        return self.dof_per_node * n_nodes

    def node_dofs(self, node_id: int) -> List[int]:
        base = self.dof_per_node * node_id
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_ids: Sequence[int]) -> List[int]:
        """
        Scatter/gather map for an element: the node DOF blocks concatenated in
        the element's node order.
        """
        result = []
        for node_id in node_ids:
            result.extend(self.node_dofs(node_id))
        return result


DOF_2D_FRAME = DOFManager(dof_per_node=3)
