# Frame2D element stiffness + transformation

from typing import Sequence, Tuple

import numpy as np

from .catalog import MaterialProfile, SectionProfile
from .model import Node, BeamElement

ZERO_LENGTH_TOL = 1e-9


def element_geometry(
    nodes: Sequence[Node],
    e: BeamElement,
    zero_length_tol: float = ZERO_LENGTH_TOL,
) -> Tuple[float, float, float]:
    """
    Length and direction cosines of an element.

    A numerically zero-length element gets (L, 1.0, 0.0) so callers never
    divide by zero; its stiffness is zero anyway.
    """
    ni = nodes[e.ni]
    nj = nodes[e.nj]
    dx = nj.x - ni.x
    dy = nj.y - ni.y
    L = float(np.hypot(dx, dy))
    if L < zero_length_tol:
        return L, 1.0, 0.0
    return L, dx / L, dy / L


def frame2d_local_stiffness(E: float, A: float, I: float, L: float) -> np.ndarray:
    """
    Local stiffness matrix in element local coords (x along member).
    DOF order: [uix, uiy, rzi, ujx, ujy, rzj]

    With I = 0 every bending/shear term vanishes and only the axial block
    remains.
    """
    EA_L = E * A / L
    EI = E * I
    L2 = L * L
    L3 = L2 * L

    k = np.array([
        [ EA_L,      0.0,        0.0,    -EA_L,      0.0,        0.0],
        [  0.0,  12*EI/L3,   6*EI/L2,      0.0, -12*EI/L3,   6*EI/L2],
        [  0.0,   6*EI/L2,    4*EI/L,      0.0,  -6*EI/L2,    2*EI/L],
        [-EA_L,      0.0,        0.0,     EA_L,      0.0,        0.0],
        [  0.0, -12*EI/L3,  -6*EI/L2,      0.0,  12*EI/L3,  -6*EI/L2],
        [  0.0,   6*EI/L2,    2*EI/L,      0.0,  -6*EI/L2,    4*EI/L],
    ], dtype=float)
    return k


def frame2d_transform(c: float, s: float) -> np.ndarray:
    """
    6x6 transform from global DOFs to local DOFs.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    return T


def element_properties(
    e: BeamElement,
    materials: Sequence[MaterialProfile],
    sections: Sequence[SectionProfile],
) -> Tuple[float, float, float]:
    """(E, A, I) of an element, with I forced to 0 for truss members."""
    E = materials[e.material].E
    section = sections[e.section]
    I = 0.0 if e.is_truss else section.I
    return E, section.A, I


def frame2d_global_stiffness(
    nodes: Sequence[Node],
    e: BeamElement,
    materials: Sequence[MaterialProfile],
    sections: Sequence[SectionProfile],
    zero_length_tol: float = ZERO_LENGTH_TOL,
) -> np.ndarray:
    """
    Element stiffness in global coordinates, Tᵀ·k·T.

    A zero-length element returns the exact 6x6 zero matrix.
    """
    L, c, s = element_geometry(nodes, e, zero_length_tol)
    if L < zero_length_tol:
        return np.zeros((6, 6), dtype=float)

    E, A, I = element_properties(e, materials, sections)
    k_local = frame2d_local_stiffness(E, A, I, L)
    T = frame2d_transform(c, s)
    k_global = T.T @ k_local @ T
    return k_global
