# File: demos/run_portal_frame.py
"""
DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS)
============================================

PURPOSE:
--------
Two columns carry a roof beam. Gravity loads sit on the knees, wind pushes
the left knee sideways. We compare pinned and fixed bases.

KEY BEHAVIORS:
--------------
- Lateral load causes "sway": the frame leans to one side
- Fixed bases carry moment, so they sway less than pinned bases
- Drift is typically limited to H/400 or H/500 by building codes
"""

import matplotlib.pyplot as plt

from fastfem import FrameSystem, Node, BeamElement, ConstraintKind, solve
from fastfem.catalog import MaterialProfile, SectionProfile
from fastfem.editing import set_nodal_load, set_constraint
from fastfem.model import DOF_PER_NODE
from fastfem.report import member_table

L = 6.0          # Frame width / beam span (meters)
H = 3.0          # Frame height / column height (meters)
E = 210e9        # Young's modulus (Pascals)
I = 8.0e-6       # Moment of inertia (m⁴)
A = 0.01         # Cross-sectional area (m²)
S = 1.6e-4       # Section modulus (m³)
W = -6000.0      # Gravity load per knee (N)
P = 5000.0       # Lateral point load (N, positive = push right)


def build_portal(base: ConstraintKind) -> FrameSystem:
    system = FrameSystem(
        nodes=[
            Node(0.0, 0.0, base),   # Left base
            Node(0.0, H),           # Left top
            Node(L, H),             # Right top
            Node(L, 0.0, base),     # Right base
        ],
        beams=[
            BeamElement(0, 1, 0, 0),  # Left column
            BeamElement(1, 2, 0, 0),  # Beam
            BeamElement(2, 3, 0, 0),  # Right column
        ],
        materials=[MaterialProfile("Steel", E)],
        sections=[SectionProfile("Column", A, I, S)],
    )
    set_nodal_load(system, 1, fx=P, fy=W)
    set_nodal_load(system, 2, fy=W)
    return system


def main():
    print("=" * 70)
    print("DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS)")
    print("=" * 70)

    system = build_portal(ConstraintKind.FIXED_PIN)
    solve(system)
    pinned_drift = system.displacement[DOF_PER_NODE * 1 + 0]
    pinned = system.displacement.copy()

    set_constraint(system, 0, ConstraintKind.FIXED)
    set_constraint(system, 3, ConstraintKind.FIXED)
    solve(system)
    fixed_drift = system.displacement[DOF_PER_NODE * 1 + 0]

    print(f"Drift, pinned bases: {pinned_drift * 1000:.3f} mm (H/{H / abs(pinned_drift):.0f})")
    print(f"Drift, fixed bases:  {fixed_drift * 1000:.3f} mm (H/{H / abs(fixed_drift):.0f})")
    print(f"Drift limit (H/400): {H / 400 * 1000:.3f} mm")
    print()
    print("Members (fixed bases):")
    print(member_table(system).to_string(index=False))

    scale = 100
    plt.figure(figsize=(8, 6))
    xs = [n.x for n in system.nodes]
    ys = [n.y for n in system.nodes]
    plt.plot(xs, ys, 'k--o', alpha=0.3, label='Undeformed')
    for label, d, style in (("Pinned", pinned, 'r-o'), ("Fixed", system.displacement, 'b-o')):
        plt.plot([x + scale * d[DOF_PER_NODE * i] for i, x in enumerate(xs)],
                 [y + scale * d[DOF_PER_NODE * i + 1] for i, y in enumerate(ys)],
                 style, label=f'{label} bases (×{scale})')
    plt.legend()
    plt.title("Portal Frame - Gravity + Lateral")
    plt.axis('equal')
    plt.grid(True, alpha=0.3)
    plt.show()


if __name__ == "__main__":
    main()
