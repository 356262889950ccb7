# reactions, equilibrium check, element end forces, combined stress

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .catalog import SectionProfile
from .model import Node, BeamElement, MemberResult, DOF_PER_NODE
from .elements import element_geometry, frame2d_transform, ZERO_LENGTH_TOL
from .assembly import element_dof_map
from .kernel.dof import UX, UY, RZ

SECTION_MODULUS_TOL = 1e-12


def compute_reactions(K: np.ndarray, d: np.ndarray, F: np.ndarray) -> np.ndarray:
    """
    R = K·d - F over every DOF.

    Only constrained DOFs (and slider translations) carry a physical reaction;
    at free DOFs R is the solve residual and should be ~0.
    """
    return K @ d - F


@dataclass(frozen=True)
class EquilibriumCheck:
    """
    Global balance of applied loads plus reactions.

    fx, fy : Σ(F + R) over the x and y translation DOFs
    mz : Σ(M + R_M) + Σ(x·Fy - y·Fx) over all nodes, i.e. the resultant moment
         about the origin including the lever arm of every nodal force
    """
    fx: float
    fy: float
    mz: float

    def is_balanced(self, atol: float = 1e-6) -> bool:
        return max(abs(self.fx), abs(self.fy), abs(self.mz)) <= atol


def equilibrium_check(nodes: Sequence[Node], F: np.ndarray, R: np.ndarray) -> EquilibriumCheck:
    """
    Sum applied forces and reactions for verification. Never enforced.

    For a correct solve every component is ~0 relative to the load magnitude.
    """
    total = F + R
    fx_all = total[UX::DOF_PER_NODE]
    fy_all = total[UY::DOF_PER_NODE]
    mz_all = total[RZ::DOF_PER_NODE]

    xs = np.array([n.x for n in nodes], dtype=float)
    ys = np.array([n.y for n in nodes], dtype=float)
    lever = float(np.sum(xs * fy_all - ys * fx_all))

    return EquilibriumCheck(
        fx=float(np.sum(fx_all)),
        fy=float(np.sum(fy_all)),
        mz=float(np.sum(mz_all)) + lever,
    )


def element_end_displacements(e: BeamElement, d_global: np.ndarray) -> np.ndarray:
    """[u1, v1, θ1, u2, v2, θ2] of an element in global coordinates."""
    return d_global[element_dof_map(e)].astype(float)


def element_end_forces_local(
    nodes: Sequence[Node],
    e: BeamElement,
    ke_global: np.ndarray,
    d_global: np.ndarray,
    zero_length_tol: float = ZERO_LENGTH_TOL,
) -> np.ndarray:
    """
    Element end forces in LOCAL coordinates.

    1. Gather the element's 6 global end displacements
    2. Global end forces f_g = ke_global × d_e
    3. Rotate into the member axis: f_l = T × f_g

    Parameters:
    -----------
    nodes : sequence of Node
    e : BeamElement
    ke_global : np.ndarray
        The element's 6x6 stiffness in global coordinates (same one that was
        assembled for this solve)
    d_global : np.ndarray
        Solved (3N,) displacement vector
    zero_length_tol : float
        Same cutoff the stiffness was formulated with

    Returns:
    --------
    np.ndarray
        Shape (6,): [N1, V1, M1, N2, V2, M2]
        - N2 is the member axial force, tension positive
        - M1, M2 are the end moments
    """
    _, c, s = element_geometry(nodes, e, zero_length_tol)
    d_e = element_end_displacements(e, d_global)
    f_global = ke_global @ d_e
    T = frame2d_transform(c, s)
    return T @ f_global


def combined_stress(
    axial_force: float,
    max_moment: float,
    section: SectionProfile,
    section_modulus_tol: float = SECTION_MODULUS_TOL,
) -> float:
    """
    Envelope fiber stress of a member, tension positive.

    Without a usable section modulus (truss sections, S ≈ 0) this is the axial
    stress P/A. Otherwise the two extreme fibers see P/A + M/S and P/A - M/S;
    the one with the larger magnitude is returned with its sign.
    """
    axial_stress = axial_force / section.A
    if abs(section.S) < section_modulus_tol:
        return axial_stress

    bending_stress = max_moment / section.S
    stress_tension = axial_stress + bending_stress
    stress_compression = axial_stress - bending_stress
    if abs(stress_tension) > abs(stress_compression):
        return stress_tension
    return stress_compression


def member_result(
    f_local: np.ndarray,
    section: SectionProfile,
    section_modulus_tol: float = SECTION_MODULUS_TOL,
) -> MemberResult:
    """Axial force, max end moment and envelope stress from local end forces."""
    P = float(f_local[3])
    max_M = max(abs(float(f_local[2])), abs(float(f_local[5])))
    stress = combined_stress(P, max_M, section, section_modulus_tol)
    return MemberResult(
        axial_force=P,
        max_moment=max_M,
        stress=float(stress),
        end_forces=tuple(float(v) for v in f_local),
    )


def recover_member_results(
    nodes: Sequence[Node],
    beams: Sequence[BeamElement],
    sections: Sequence[SectionProfile],
    element_matrices: Sequence[np.ndarray],
    d_global: np.ndarray,
    section_modulus_tol: float = SECTION_MODULUS_TOL,
    zero_length_tol: float = ZERO_LENGTH_TOL,
) -> Tuple[List[MemberResult], float, float]:
    """
    Internal forces and stress for every beam.

    Returns:
    --------
    (results, min_stress, max_stress)
        One MemberResult per beam, in beam order. With no beams the stress
        range is (0.0, 0.0).
    """
    results = []
    min_stress = math.inf
    max_stress = -math.inf
    for e, ke in zip(beams, element_matrices):
        f_local = element_end_forces_local(nodes, e, ke, d_global, zero_length_tol)
        result = member_result(f_local, sections[e.section], section_modulus_tol)
        results.append(result)
        max_stress = max(max_stress, result.stress)
        min_stress = min(min_stress, result.stress)

    if not results:
        return results, 0.0, 0.0
    return results, min_stress, max_stress


def slider_track_motion(node: Node, d_node: Sequence[float]) -> Tuple[float, float]:
    """
    Split a slider's (ux, uy) into motion along its track and along the normal.

    The normal component should be ~0 after a successful solve.
    """
    theta = math.radians(node.angle)
    c, s = math.cos(theta), math.sin(theta)
    ux, uy = float(d_node[0]), float(d_node[1])
    along = ux * c + uy * s
    normal = -ux * s + uy * c
    return along, normal
