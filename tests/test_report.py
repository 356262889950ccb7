import numpy as np

from fastfem import FrameSystem, Node, BeamElement, ConstraintKind, solve
from fastfem.catalog import default_catalog
from fastfem.report import node_table, member_table, format_report


def _portal():
    materials, sections = default_catalog()
    system = FrameSystem(
        nodes=[
            Node(0.0, 0.0, ConstraintKind.FIXED),
            Node(0.0, 0.5),
            Node(0.5, 0.5),
            Node(0.5, 0.0, ConstraintKind.SLIDER, angle=0.0),
        ],
        beams=[BeamElement(0, 1, 0, 0), BeamElement(1, 2, 0, 0), BeamElement(2, 3, 1, 1)],
        materials=materials,
        sections=sections,
    )
    system.forces[3] = 100.0
    system.forces[7] = -200.0
    return system


def test_node_table_before_and_after_solve():
    system = _portal()
    table = node_table(system)

    assert list(table.columns) == [
        'node', 'x', 'y', 'constraint', 'ux', 'uy', 'rz', 'rz_deg',
        'magnitude', 'Rx', 'Ry', 'Mz',
    ]
    assert len(table) == 4
    assert (table['ux'] == 0.0).all()

    solve(system)
    table = node_table(system)

    assert table.loc[0, 'constraint'] == 'fixed'
    assert table.loc[3, 'constraint'] == 'slider'
    assert table.loc[1, 'magnitude'] > 0.0
    # free nodes report no reaction
    assert (table.loc[table['constraint'] == 'free', ['Rx', 'Ry', 'Mz']] == 0.0).all().all()
    assert np.isclose(table['Ry'].sum(), 200.0, rtol=1e-6)
    assert np.isclose(table.loc[1, 'rz_deg'], np.degrees(system.displacement[5]))


def test_member_table_fills_after_solve():
    system = _portal()
    table = member_table(system)

    assert len(table) == 3
    assert table['stress'].isna().all()
    assert table.loc[2, 'material'] == system.materials[1].name

    solve(system)
    table = member_table(system)

    assert not table['stress'].isna().any()
    assert table['stress'].min() == system.min_stress
    assert table['stress'].max() == system.max_stress


def test_format_report_sections():
    system = _portal()
    solve(system)
    text = format_report(system)

    assert text.startswith("=== SOLUTION (solved) ===")
    assert "Node 3 slider (0 deg)" in text
    assert "Reactions:" in text
    assert "Equilibrium balance:" in text
    assert "Members:" in text
    assert "Stress range:" in text
    assert "Saddle condition number:" in text


def test_format_report_unsolved_model():
    materials, sections = default_catalog()
    system = FrameSystem(nodes=[Node(0.0, 0.0)], materials=materials, sections=sections)
    text = format_report(system)

    assert "not solved" in text
    assert "(none)" in text
