import numpy as np
import matplotlib.pyplot as plt

from fastfem import FrameSystem, Node, BeamElement, ConstraintKind, solve
from fastfem.catalog import MaterialProfile, SectionProfile
from fastfem.editing import add_nodal_load
from fastfem.model import DOF_PER_NODE


def main():
    """
    VISUAL DEMONSTRATION OF SIMPLY SUPPORTED BEAM
    =============================================
    A pin on the left and a horizontal slider on the right: the slider holds
    the beam vertically but lets it expand, exactly like a roller.
    """

    # ========================================================================
    # SETUP
    # ========================================================================
    L = 4.0  # Beam length (meters)
    E = 210e9  # Material stiffness (Pascals) - Steel
    I = 8.0e-6  # Bending resistance (m⁴)
    A = 0.01  # Cross-section area (m²)
    P = 1000.0  # Load (Newtons) - about 100 kg weight

    # More elements = smoother deformed shape
    num_elements = 8
    num_nodes = num_elements + 1

    nodes = [Node(L * i / num_elements, 0.0) for i in range(num_nodes)]
    last_node = num_nodes - 1
    nodes[0] = Node(0.0, 0.0, ConstraintKind.FIXED_PIN)
    nodes[last_node] = Node(L, 0.0, ConstraintKind.SLIDER, angle=0.0)

    system = FrameSystem(
        nodes=nodes,
        beams=[BeamElement(i, i + 1, material=0, section=0) for i in range(num_elements)],
        materials=[MaterialProfile("Steel", E)],
        sections=[SectionProfile("Demo", A=A, I=I, S=I / 0.05)],
    )

    mid_node = num_elements // 2
    add_nodal_load(system, mid_node, fy=-P)

    solve(system)

    # ========================================================================
    # EXTRACT RESULTS
    # ========================================================================
    d = system.displacement
    R = system.reactions
    Ry_left = R[DOF_PER_NODE * 0 + 1]
    Ry_right = R[DOF_PER_NODE * last_node + 1]
    uy_midspan = d[DOF_PER_NODE * mid_node + 1]

    print("Simply Supported Beam - Midspan Point Load")
    print("=" * 50)
    print(f"Left reaction (N): {Ry_left:.2f}")
    print(f"Right reaction (N): {Ry_right:.2f}")
    print(f"Slider multiplier: {system.multipliers[0]:.2f}")
    print(f"Midspan deflection (m): {uy_midspan:.6f}")
    print()
    print("Expected (from textbook):")
    print(f"Reactions: {P/2:.2f} N each (each support takes half)")
    print(f"Max deflection: {-P * L**3 / (48 * E * I):.6f} m")

    # ========================================================================
    # DRAW THE PICTURE
    # ========================================================================
    xs = np.array([n.x for n in system.nodes])
    ys = np.array([n.y for n in system.nodes])
    ux = d[0::DOF_PER_NODE]
    uy = d[1::DOF_PER_NODE]
    scale = 1000  # deflections are tiny

    plt.figure(figsize=(10, 4))
    plt.plot(xs, ys, 'b-o', label='Undeformed (original)', linewidth=2, markersize=8)
    plt.plot(xs + scale * ux, ys + scale * uy, 'r-o', label=f'Deformed (×{scale} scale)',
             linewidth=2, markersize=8)
    plt.axhline(y=0, color='k', linestyle='--', alpha=0.3, label='Reference')

    plt.legend()
    plt.title("Simply Supported Beam - Midspan Point Load")
    plt.xlabel("x (m)")
    plt.ylabel("y (m)")
    plt.grid(True, alpha=0.3)
    plt.show()


if __name__ == "__main__":
    main()
