# File: demos/run_slider_truss.py
"""
DEMO: BENCH TRUSS ON AN INCLINED SLIDER
=======================================

PURPOSE:
--------
A small mixed structure: five pin-ended truss members form a rigid panel, a
single frame member cantilevers it off a fixed wall, and a vertical slider
holds the lower-left corner horizontally.

    (-0.254, 0.254) ===== (0, 0.254)
        FIXED              |  \\
                           |    (0.3048, 0.1524)
                           |  /  |
                  SLIDER (0, 0) -- (0.3048, 0)   <- 2 kip load at 240°

WHAT TO LOOK FOR:
-----------------
- The slider node moves only vertically (normal motion ~ 0)
- Its reaction is horizontal and equals -λ·n
- Global equilibrium closes to round-off
- Truss members report axial stress only; the frame member adds bending
"""

import logging

import numpy as np
import matplotlib.pyplot as plt

from fastfem import FrameSystem, Node, BeamElement, ConstraintKind, SolveStatus, solve
from fastfem.catalog import default_catalog
from fastfem.editing import set_nodal_load
from fastfem.model import DOF_PER_NODE
from fastfem.report import node_table, member_table, format_report

LOAD = 8896.4432305  # N (2 kip)
LOAD_ANGLE = 240.0   # degrees


def build_model() -> FrameSystem:
    materials, sections = default_catalog()
    # sections: 0 steel beam, 1 aluminum beam, 2 steel truss, 3 aluminum truss
    system = FrameSystem(
        nodes=[
            Node(0.3048, 0.0),
            Node(0.3048, 0.1524),
            Node(0.0, 0.0, ConstraintKind.SLIDER, angle=90.0),
            Node(0.0, 0.254),
            Node(-0.254, 0.254, ConstraintKind.FIXED),
        ],
        beams=[
            BeamElement(0, 1, material=0, section=2, is_truss=True),
            BeamElement(0, 2, material=1, section=3, is_truss=True),
            BeamElement(1, 2, material=0, section=2, is_truss=True),
            BeamElement(1, 3, material=1, section=3, is_truss=True),
            BeamElement(2, 3, material=0, section=2, is_truss=True),
            BeamElement(3, 4, material=1, section=1),
        ],
        materials=materials,
        sections=sections,
    )
    theta = np.radians(LOAD_ANGLE)
    set_nodal_load(system, 0, fx=LOAD * np.cos(theta), fy=LOAD * np.sin(theta))
    return system


def plot(system: FrameSystem, scale: float = 50.0) -> None:
    d = system.displacement
    plt.figure(figsize=(8, 6))
    for i, beam in enumerate(system.beams):
        a, b = system.nodes[beam.ni], system.nodes[beam.nj]
        style = '--' if beam.is_truss else '-'
        plt.plot([a.x, b.x], [a.y, b.y], 'b' + style, alpha=0.4)

        ia, ib = DOF_PER_NODE * beam.ni, DOF_PER_NODE * beam.nj
        xa, ya = a.x + scale * d[ia], a.y + scale * d[ia + 1]
        xb, yb = b.x + scale * d[ib], b.y + scale * d[ib + 1]
        plt.plot([xa, xb], [ya, yb], 'r' + style, linewidth=2)
        plt.text((xa + xb) / 2, (ya + yb) / 2,
                 f"{system.member_results[i].stress / 1e6:.1f} MPa", fontsize=8)

    plt.title(f"Bench truss (deformed ×{scale:g})")
    plt.axis('equal')
    plt.grid(True, alpha=0.3)
    plt.show()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    system = build_model()
    status = solve(system)
    if status != SolveStatus.OK:
        print(f"Solve failed with status {status.name} ({int(status)})")
        return

    print(format_report(system))
    print()
    print(node_table(system).to_string(index=False))
    print()
    print(member_table(system).to_string(index=False))

    plot(system)


if __name__ == "__main__":
    main()
