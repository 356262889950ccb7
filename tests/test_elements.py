import numpy as np
import pytest

from fastfem.catalog import MaterialProfile, SectionProfile
from fastfem.model import Node, BeamElement
from fastfem.elements import (
    element_geometry,
    frame2d_local_stiffness,
    frame2d_transform,
    frame2d_global_stiffness,
)

E = 210e9
A = 0.01
I = 8.0e-6

MATERIALS = [MaterialProfile("Steel", E)]
SECTIONS = [
    SectionProfile("Beam", A=A, I=I, S=1.0e-4),
    SectionProfile("Bar", A=A, I=0.0, S=0.0),
]


def test_local_stiffness_terms():
    """Axial and Euler–Bernoulli bending terms land where the textbook puts them."""
    L = 2.0
    k = frame2d_local_stiffness(E, A, I, L)

    assert k[0, 0] == pytest.approx(E * A / L)
    assert k[0, 3] == pytest.approx(-E * A / L)
    assert k[1, 1] == pytest.approx(12 * E * I / L**3)
    assert k[1, 2] == pytest.approx(6 * E * I / L**2)
    assert k[2, 2] == pytest.approx(4 * E * I / L)
    assert k[2, 5] == pytest.approx(2 * E * I / L)
    assert k[4, 5] == pytest.approx(-6 * E * I / L**2)
    # no axial/bending coupling in local coordinates
    assert k[0, 1] == 0.0 and k[0, 2] == 0.0
    np.testing.assert_allclose(k, k.T)


def test_transform_is_orthogonal():
    c, s = np.cos(0.3), np.sin(0.3)
    T = frame2d_transform(c, s)
    np.testing.assert_allclose(T @ T.T, np.eye(6), atol=1e-14)


def test_horizontal_element_global_equals_local():
    nodes = [Node(0.0, 0.0), Node(3.0, 0.0)]
    e = BeamElement(0, 1, material=0, section=0)

    k_global = frame2d_global_stiffness(nodes, e, MATERIALS, SECTIONS)
    k_local = frame2d_local_stiffness(E, A, I, 3.0)

    np.testing.assert_allclose(k_global, k_local)


def test_vertical_element_swaps_axial_direction():
    """For a member along +y, the axial stiffness EA/L sits on the uy DOFs."""
    L = 3.0
    nodes = [Node(0.0, 0.0), Node(0.0, L)]
    e = BeamElement(0, 1, material=0, section=0)

    k = frame2d_global_stiffness(nodes, e, MATERIALS, SECTIONS)

    assert k[1, 1] == pytest.approx(E * A / L)
    assert k[0, 0] == pytest.approx(12 * E * I / L**3)
    assert k[1, 4] == pytest.approx(-E * A / L)


def test_global_stiffness_symmetric_and_singular():
    """An unsupported element has three rigid-body modes."""
    nodes = [Node(0.0, 0.0), Node(3.0, 4.0)]
    e = BeamElement(0, 1, material=0, section=0)

    k = frame2d_global_stiffness(nodes, e, MATERIALS, SECTIONS)

    np.testing.assert_allclose(k, k.T, rtol=1e-12, atol=1e-3)
    assert np.linalg.matrix_rank(k, tol=1e-6 * np.abs(k).max()) == 3


def test_rigid_body_rotation_produces_no_force():
    nodes = [Node(1.0, 2.0), Node(4.0, 6.0)]
    e = BeamElement(0, 1, material=0, section=0)
    k = frame2d_global_stiffness(nodes, e, MATERIALS, SECTIONS)

    theta = 1e-3
    mode = np.array([
        -nodes[0].y * theta, nodes[0].x * theta, theta,
        -nodes[1].y * theta, nodes[1].x * theta, theta,
    ])
    np.testing.assert_allclose(k @ mode, 0.0, atol=1e-6 * np.abs(k).max() * theta)


def test_truss_flag_matches_zero_inertia_section():
    """
    is_truss=True forces I = 0, so it must give exactly the matrix of the same
    element with a zero-inertia section and the flag unset.
    """
    nodes = [Node(0.0, 0.0), Node(2.0, 1.5)]

    truss_on_beam_section = BeamElement(0, 1, material=0, section=0, is_truss=True)
    truss_on_bar_section = BeamElement(0, 1, material=0, section=1, is_truss=True)
    frame_on_bar_section = BeamElement(0, 1, material=0, section=1, is_truss=False)

    k1 = frame2d_global_stiffness(nodes, truss_on_beam_section, MATERIALS, SECTIONS)
    k2 = frame2d_global_stiffness(nodes, truss_on_bar_section, MATERIALS, SECTIONS)
    k3 = frame2d_global_stiffness(nodes, frame_on_bar_section, MATERIALS, SECTIONS)

    np.testing.assert_array_equal(k1, k3)
    np.testing.assert_array_equal(k2, k3)
    # only the axial block survives: rotational rows/cols are exactly zero
    assert np.all(k1[2, :] == 0.0) and np.all(k1[:, 5] == 0.0)


def test_zero_length_element_is_exactly_zero():
    nodes = [Node(1.0, 1.0), Node(1.0, 1.0)]
    e = BeamElement(0, 1, material=0, section=0)

    k = frame2d_global_stiffness(nodes, e, MATERIALS, SECTIONS)

    assert k.shape == (6, 6)
    assert np.all(k == 0.0)


def test_zero_length_geometry_does_not_divide():
    nodes = [Node(0.5, 0.5), Node(0.5, 0.5 + 1e-12)]
    L, c, s = element_geometry(nodes, BeamElement(0, 1, 0, 0))
    assert L < 1e-9
    assert (c, s) == (1.0, 0.0)
