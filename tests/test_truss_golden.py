"""
TEST: Two-bar truss with a closed-form solution
===============================================

        (0,4)
        /  \
       /    \
   (-3,0)  (3,0)      both supports pinned, load P downward at the apex

Each bar is 5 m long at sin(a) = 4/5, so each carries N = -P/(2 sin a)
= -5P/8 and the apex drops v = N·L / (EA·sin a) = -125P / (32EA).
"""

import numpy as np
import pytest

from fastfem import FrameSystem, Node, BeamElement, ConstraintKind, SolveStatus, solve
from fastfem.catalog import MaterialProfile, SectionProfile


E = 200e9
A = 1e-3
P = 1e4


def _two_bar_truss():
    system = FrameSystem(
        nodes=[
            Node(-3.0, 0.0, ConstraintKind.FIXED_PIN),
            Node(3.0, 0.0, ConstraintKind.FIXED_PIN),
            Node(0.0, 4.0),
        ],
        beams=[
            BeamElement(0, 2, 0, 0, is_truss=True),
            BeamElement(1, 2, 0, 0, is_truss=True),
        ],
        materials=[MaterialProfile("steel", E)],
        sections=[SectionProfile("bar", A, 0.0, 0.0)],
    )
    system.forces[7] = -P
    return system


def test_apex_deflection():
    system = _two_bar_truss()
    assert solve(system) == SolveStatus.OK

    ux, uy, rz = system.node_displacement(2)
    assert uy == pytest.approx(-125 * P / (32 * E * A), rel=1e-9)
    assert uy == pytest.approx(-1.953125e-4, rel=1e-9)
    assert abs(ux) < 1e-15
    # rotation has no stiffness and no load: it stays at zero
    assert rz == 0.0


def test_member_forces_and_stress():
    system = _two_bar_truss()
    solve(system)

    for result in system.member_results:
        assert result.axial_force == pytest.approx(-5 * P / 8, rel=1e-9)
        assert result.max_moment == pytest.approx(0.0, abs=1e-9)
        assert result.stress == pytest.approx(-6.25e6, rel=1e-9)

    assert system.min_stress == pytest.approx(-6.25e6, rel=1e-9)
    assert system.max_stress == pytest.approx(-6.25e6, rel=1e-9)


def test_support_reactions():
    system = _two_bar_truss()
    solve(system)

    np.testing.assert_allclose(system.node_reaction(0)[:2], [3750.0, 5000.0], rtol=1e-9)
    np.testing.assert_allclose(system.node_reaction(1)[:2], [-3750.0, 5000.0], rtol=1e-9)
    # free apex carries no reaction
    np.testing.assert_allclose(system.node_reaction(2), 0.0, atol=1e-6)
