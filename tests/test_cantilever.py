import numpy as np
import pytest

from fastfem import FrameSystem, Node, BeamElement, ConstraintKind, SolveStatus, solve
from fastfem.catalog import MaterialProfile, SectionProfile
from fastfem.model import DOF_PER_NODE


def _cantilever(L=3.0, E=210e9, A=0.01, I=8.0e-6, S=1.0e-4, P=1000.0):
    system = FrameSystem(
        nodes=[Node(0.0, 0.0, ConstraintKind.FIXED), Node(L, 0.0)],
        beams=[BeamElement(0, 1, material=0, section=0)],
        materials=[MaterialProfile("steel", E)],
        sections=[SectionProfile("test", A, I, S)],
    )
    system.forces[DOF_PER_NODE * 1 + 1] = -P
    return system


def test_cantilever_tip_load_deflection():
    L, E, I, P = 3.0, 210e9, 8.0e-6, 1000.0
    system = _cantilever(L=L, E=E, I=I, P=P)

    assert solve(system) == SolveStatus.OK

    d = system.displacement
    uy_tip = d[DOF_PER_NODE * 1 + 1]
    rz_tip = d[DOF_PER_NODE * 1 + 2]

    uy_expected = -P * L**3 / (3 * E * I)
    rz_expected = -P * L**2 / (2 * E * I)

    assert np.isclose(uy_tip, uy_expected, rtol=1e-6, atol=1e-12)
    assert np.isclose(rz_tip, rz_expected, rtol=1e-6, atol=1e-12)

    # Fixed end holds the load and its moment
    R = system.reactions
    assert np.isclose(R[1], +P, rtol=1e-6, atol=1e-6)
    assert np.isclose(R[2], +P * L, rtol=1e-6, atol=1e-6)
    assert np.isclose(R[0], 0.0, atol=1e-6)


def test_cantilever_end_forces_and_stress():
    """
    Fixed end: V = P, M = PL. Tip: V = -P, M = 0. No axial force, so the
    envelope stress magnitude is the bending stress PL/S.
    """
    L, P, S = 3.0, 1000.0, 1.0e-4
    system = _cantilever(L=L, P=P, S=S)
    solve(system)

    result = system.member_results[0]
    Ni, Vi, Mi, Nj, Vj, Mj = result.end_forces

    assert np.isclose(Vi, P, rtol=1e-6)
    assert np.isclose(Mi, P * L, rtol=1e-6)
    assert np.isclose(Vj, -P, rtol=1e-6)
    assert abs(Mj) < 1e-6 * P * L
    assert abs(result.axial_force) < 1e-6

    assert np.isclose(result.max_moment, P * L, rtol=1e-6)
    assert np.isclose(abs(result.stress), P * L / S, rtol=1e-6)
    assert system.min_stress == system.max_stress == result.stress


def test_cantilever_tip_moment():
    """Pure end moment: uniform curvature, tip rotation ML/EI."""
    L, E, I, M = 2.0, 70e9, 4.0e-6, 500.0
    system = _cantilever(L=L, E=E, I=I, P=0.0)
    system.forces[DOF_PER_NODE * 1 + 2] = M

    assert solve(system) == SolveStatus.OK

    rz_tip = system.displacement[DOF_PER_NODE * 1 + 2]
    uy_tip = system.displacement[DOF_PER_NODE * 1 + 1]
    assert np.isclose(rz_tip, M * L / (E * I), rtol=1e-6)
    assert np.isclose(uy_tip, M * L**2 / (2 * E * I), rtol=1e-6)
    assert np.isclose(system.reactions[2], -M, rtol=1e-6)


@pytest.mark.parametrize("I", [1.0e-6, 1.0e-7])
def test_long_cantilever_with_stiff_stub(I):
    """
    A 50 m cantilever ending in a 1 cm stub that is orders of magnitude
    stiffer. The stiffness matrix is regular but has a condition number of
    about 1e13..1e14; the tip must still deflect by PL³/3EI.
    """
    L, E, P = 50.0, 200e9, 1.0
    system = FrameSystem(
        nodes=[
            Node(0.0, 0.0, ConstraintKind.FIXED),
            Node(L, 0.0),
            Node(L, 0.01),
        ],
        beams=[
            BeamElement(0, 1, material=0, section=0),
            BeamElement(1, 2, material=0, section=1),
        ],
        materials=[MaterialProfile("steel", E)],
        sections=[
            SectionProfile("long", 1e-4, I, 1e-5),
            SectionProfile("stub", 1e-2, 1e-5, 1e-3),
        ],
    )
    system.forces[DOF_PER_NODE * 1 + 1] = -P

    assert solve(system) == SolveStatus.OK

    uy_expected = -P * L**3 / (3 * E * I)
    assert np.isclose(system.displacement[DOF_PER_NODE * 1 + 1], uy_expected, rtol=1e-3)
    # the stub rides along rigidly
    assert np.isclose(system.displacement[DOF_PER_NODE * 2 + 1], uy_expected, rtol=1e-3)
