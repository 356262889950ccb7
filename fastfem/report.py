# Tabular results and a plain-text solution summary

import math
from typing import List

import numpy as np
import pandas as pd

from .model import FrameSystem, ConstraintKind
from .post import equilibrium_check, slider_track_motion


def node_table(system: FrameSystem) -> pd.DataFrame:
    """
    One row per node: displacements, rotation and reactions.

    Columns: node, x, y, constraint, ux, uy, rz, rz_deg, magnitude, Rx, Ry, Mz
    Reactions are reported only for supported nodes (0 for free nodes).
    """
    rows = []
    for i, node in enumerate(system.nodes):
        ux, uy, rz = system.node_displacement(i)
        if node.constraint is ConstraintKind.FREE:
            rx = ry = mz = 0.0
        else:
            rx, ry, mz = system.node_reaction(i)
        rows.append({
            'node': i,
            'x': node.x,
            'y': node.y,
            'constraint': node.constraint.value,
            'ux': float(ux),
            'uy': float(uy),
            'rz': float(rz),
            'rz_deg': math.degrees(float(rz)),
            'magnitude': float(np.hypot(ux, uy)),
            'Rx': float(rx),
            'Ry': float(ry),
            'Mz': float(mz),
        })
    columns = ['node', 'x', 'y', 'constraint', 'ux', 'uy', 'rz', 'rz_deg',
               'magnitude', 'Rx', 'Ry', 'Mz']
    return pd.DataFrame(rows, columns=columns)


def member_table(system: FrameSystem) -> pd.DataFrame:
    """
    One row per beam: connectivity, profiles and the last solve's outputs.

    Columns: beam, ni, nj, material, section, truss, P, M1, M2, M_max, stress
    """
    rows = []
    for i, beam in enumerate(system.beams):
        row = {
            'beam': i,
            'ni': beam.ni,
            'nj': beam.nj,
            'material': system.materials[beam.material].name,
            'section': system.sections[beam.section].name,
            'truss': beam.is_truss,
            'P': np.nan,
            'M1': np.nan,
            'M2': np.nan,
            'M_max': np.nan,
            'stress': np.nan,
        }
        if i < len(system.member_results):
            result = system.member_results[i]
            row.update({
                'P': result.axial_force,
                'M1': result.end_forces[2],
                'M2': result.end_forces[5],
                'M_max': result.max_moment,
                'stress': result.stress,
            })
        rows.append(row)
    columns = ['beam', 'ni', 'nj', 'material', 'section', 'truss',
               'P', 'M1', 'M2', 'M_max', 'stress']
    return pd.DataFrame(rows, columns=columns)


def format_report(system: FrameSystem) -> str:
    """Human-readable summary of the last solve."""
    lines: List[str] = []
    state = "solved" if system.solved else f"not solved (status {system.status})"
    lines.append(f"=== SOLUTION ({state}) ===")

    nodes = node_table(system)
    lines.append(nodes[['node', 'constraint', 'ux', 'uy', 'rz_deg', 'magnitude']]
                 .to_string(index=False))

    for i, node in enumerate(system.nodes):
        if node.constraint is ConstraintKind.SLIDER:
            along, normal = slider_track_motion(node, system.node_displacement(i))
            lines.append(
                f"  Node {i} slider ({node.angle:g} deg): along track {along:.6g}, "
                f"normal {normal:.3g}"
            )

    supports = nodes[nodes['constraint'] != ConstraintKind.FREE.value]
    lines.append("")
    lines.append("Reactions:")
    if supports.empty:
        lines.append("  (none)")
    else:
        lines.append(supports[['node', 'constraint', 'Rx', 'Ry', 'Mz']].to_string(index=False))

    check = equilibrium_check(system.nodes, system.forces, system.reactions)
    lines.append("")
    lines.append(
        f"Equilibrium balance: Fx={check.fx:.3e} Fy={check.fy:.3e} Mz={check.mz:.3e}"
    )

    lines.append("")
    lines.append("Members:")
    members = member_table(system)
    if members.empty:
        lines.append("  (none)")
    else:
        lines.append(members[['beam', 'ni', 'nj', 'truss', 'P', 'M_max', 'stress']]
                     .to_string(index=False))
    lines.append("")
    lines.append(f"Stress range: {system.min_stress:.6g} to {system.max_stress:.6g}")
    if system.condition_number is not None:
        lines.append(f"Saddle condition number: {system.condition_number:.3e}")
    return "\n".join(lines)
