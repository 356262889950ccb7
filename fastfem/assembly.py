#global K assembly

from typing import List, Optional, Sequence

import numpy as np

from .catalog import MaterialProfile, SectionProfile
from .model import Node, BeamElement, DOF_PER_NODE
from .elements import frame2d_global_stiffness, ZERO_LENGTH_TOL
from .kernel.dof import DOF_2D_FRAME
from .kernel import assemble as kernel_assemble


def element_dof_map(e: BeamElement) -> List[int]:
    """[3ni, 3ni+1, 3ni+2, 3nj, 3nj+1, 3nj+2]"""
    return DOF_2D_FRAME.element_dof_map([e.ni, e.nj])


def element_stiffness_matrices(
    nodes: Sequence[Node],
    elements: Sequence[BeamElement],
    materials: Sequence[MaterialProfile],
    sections: Sequence[SectionProfile],
    zero_length_tol: float = ZERO_LENGTH_TOL,
) -> List[np.ndarray]:
    """Global-coordinate stiffness of every element, in element order."""
    return [
        frame2d_global_stiffness(nodes, e, materials, sections, zero_length_tol)
        for e in elements
    ]


def assemble_global_K(
    nodes: Sequence[Node],
    elements: Sequence[BeamElement],
    materials: Sequence[MaterialProfile],
    sections: Sequence[SectionProfile],
    element_matrices: Optional[Sequence[np.ndarray]] = None,
) -> np.ndarray:
    """
    3N x 3N global stiffness of a planar frame.

    Pass `element_matrices` (as returned by element_stiffness_matrices) to
    reuse matrices already formulated for this solve.
    """
    if element_matrices is None:
        element_matrices = element_stiffness_matrices(nodes, elements, materials, sections)
    if len(element_matrices) != len(elements):
        raise ValueError(
            f"{len(element_matrices)} element matrices for {len(elements)} elements"
        )

    contributions = [
        (element_dof_map(e), ke) for e, ke in zip(elements, element_matrices)
    ]
    return kernel_assemble.assemble_global_K(DOF_PER_NODE * len(nodes), contributions)
