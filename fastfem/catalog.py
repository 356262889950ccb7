"""
CATALOG: MATERIAL AND SECTION PROFILES
======================================

PURPOSE:
--------
Beams do not carry their own E, A, I, S. They reference an entry in a material
catalog and an entry in a section catalog by index, so many beams can share one
profile and editing a profile updates every beam that uses it.

ENGINEERING CONTEXT:
--------------------
- **Material**: the substance
  - E: Young's modulus (Pa), drives every stiffness term

- **Section**: the cross-section shape
  - A: area (m²), axial stiffness EA/L and axial stress P/A
  - I: moment of inertia (m⁴), bending stiffness EI
  - S: section modulus (m³), bending stress M/S

A pin-ended truss member is modelled with I = S = 0. The stress recovery then
falls back to pure axial stress P/A.

The defaults below are the steel and aluminum rods of the bench test
rig: 1/2" (12.7 mm) steel and 0.4" (10.16 mm) aluminum solid rounds.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class MaterialProfile:
    """
    Material properties referenced by beams.

    Parameters:
    -----------
    name : str
        Human-readable name (e.g., "Steel")
    E : float
        Young's modulus (Pa)
    """
    name: str
    E: float  # Young's modulus (Pa)

    def __post_init__(self):
        if not self.E > 0.0:
            raise ValueError(f"Material '{self.name}': E must be positive, got {self.E}")


@dataclass(frozen=True)
class SectionProfile:
    """
    Cross-sectional properties referenced by beams.

    Parameters:
    -----------
    name : str
        Human-readable name (e.g., "Steel Beam")
    A : float
        Cross-sectional area (m²), must be positive
    I : float
        Moment of inertia (m⁴), zero for truss-only sections
    S : float
        Section modulus (m³), zero for truss-only sections
    """
    name: str
    A: float  # Cross-sectional area (m²)
    I: float  # Moment of inertia (m⁴)
    S: float  # Section modulus (m³)

    def __post_init__(self):
        if not self.A > 0.0:
            raise ValueError(f"Section '{self.name}': A must be positive, got {self.A}")
        if self.I < 0.0:
            raise ValueError(f"Section '{self.name}': I must be non-negative, got {self.I}")
        if self.S < 0.0:
            raise ValueError(f"Section '{self.name}': S must be non-negative, got {self.S}")


def solid_round_section(name: str, diameter: float) -> SectionProfile:
    """
    Build a solid circular section from its diameter.

    A = πd²/4, I = πd⁴/64, S = I / (d/2)
    """
    A = math.pi * (diameter / 2.0) ** 2
    I = (math.pi / 64.0) * diameter ** 4
    S = I / (diameter / 2.0)
    return SectionProfile(name=name, A=A, I=I, S=S)


def truss_section(name: str, area: float) -> SectionProfile:
    """Axial-only section: no bending stiffness, no section modulus."""
    return SectionProfile(name=name, A=area, I=0.0, S=0.0)


# ============================================================================
# MATERIAL DEFINITIONS
# ============================================================================

STEEL = MaterialProfile(name="Steel", E=2.068427e11)  # 30,000 ksi
ALUMINUM = MaterialProfile(name="Aluminum", E=7.584233e10)  # 11,000 ksi


# ============================================================================
# SECTION DEFINITIONS
# ============================================================================

STEEL_DIAMETER = 0.0127  # m (1/2")
ALUMINUM_DIAMETER = 0.01016  # m (0.4")

STEEL_BEAM = solid_round_section("Steel Beam", STEEL_DIAMETER)
ALUMINUM_BEAM = solid_round_section("Aluminum Beam", ALUMINUM_DIAMETER)

# Truss profiles carry half the rod area, as in the bench setup
STEEL_TRUSS = truss_section("Steel Truss", STEEL_BEAM.A / 2.0)
ALUMINUM_TRUSS = truss_section("Aluminum Truss", ALUMINUM_BEAM.A / 2.0)

DEFAULT_MATERIALS: Tuple[MaterialProfile, ...] = (STEEL, ALUMINUM)
DEFAULT_SECTIONS: Tuple[SectionProfile, ...] = (
    STEEL_BEAM,
    ALUMINUM_BEAM,
    STEEL_TRUSS,
    ALUMINUM_TRUSS,
)


def default_catalog() -> Tuple[List[MaterialProfile], List[SectionProfile]]:
    """
    Fresh, independently editable copies of the default catalogs.

    Returns:
    --------
    (materials, sections) : lists that a FrameSystem can own
    """
    return list(DEFAULT_MATERIALS), list(DEFAULT_SECTIONS)
