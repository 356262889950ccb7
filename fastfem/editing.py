# fastfem/editing.py
"""
MODEL EDITING
=============

Operations an editor (UI, script, file loader) uses to change a FrameSystem.

Every function mutates the system in place and marks its outputs stale, so a
fresh `solve()` is required before displacement or stress values are trusted.

CASCADES:
---------
- Removing a node removes every beam that references it and shifts the node
  indices of the surviving beams down past the removed one.
- Removing a material or section removes every beam that uses it and shifts
  the catalog indices of the surviving beams.
- The applied-force vector always has three entries per node; adding a node
  appends zeros, removing a node drops its three entries.
"""

import dataclasses
from typing import Optional

import numpy as np

from .catalog import MaterialProfile, SectionProfile
from .model import (
    FrameSystem,
    Node,
    BeamElement,
    ConstraintKind,
    TopologyError,
    DOF_PER_NODE,
)
from .kernel.assemble import add_nodal_load as _accumulate_load


def _check_node(system: FrameSystem, index: int) -> None:
    if not 0 <= index < len(system.nodes):
        raise IndexError(f"Node index {index} out of range (0..{len(system.nodes) - 1})")


def _check_beam(system: FrameSystem, index: int) -> None:
    if not 0 <= index < len(system.beams):
        raise IndexError(f"Beam index {index} out of range (0..{len(system.beams) - 1})")


# ============================================================================
# NODES
# ============================================================================

def add_node(system: FrameSystem, node: Node) -> int:
    """Append a node (no load) and return its index."""
    system.nodes.append(node)
    system.resize_vectors()
    system.invalidate()
    return len(system.nodes) - 1


def remove_node(system: FrameSystem, index: int) -> None:
    """Delete a node, every beam attached to it, and its three load entries."""
    _check_node(system, index)
    system.resize_vectors()

    survivors = []
    for beam in system.beams:
        if beam.ni == index or beam.nj == index:
            continue
        survivors.append(dataclasses.replace(
            beam,
            ni=beam.ni - 1 if beam.ni > index else beam.ni,
            nj=beam.nj - 1 if beam.nj > index else beam.nj,
        ))
    system.beams[:] = survivors

    keep = np.ones(system.ndof, dtype=bool)
    keep[DOF_PER_NODE * index:DOF_PER_NODE * (index + 1)] = False
    system.forces = system.forces[keep]
    system.displacement = system.displacement[keep]
    system.reactions = system.reactions[keep]
    system.member_results = []

    del system.nodes[index]
    system.invalidate()


def move_node(system: FrameSystem, index: int, x: float, y: float) -> None:
    _check_node(system, index)
    system.nodes[index] = dataclasses.replace(system.nodes[index], x=x, y=y)
    system.invalidate()


def set_constraint(
    system: FrameSystem,
    index: int,
    constraint: ConstraintKind,
    angle: Optional[float] = None,
) -> None:
    """
    Change a node's support. `angle` (degrees) is the slider direction; when
    omitted the node keeps its current angle.
    """
    _check_node(system, index)
    if not isinstance(constraint, ConstraintKind):
        raise TypeError(f"Expected a ConstraintKind, got {constraint!r}")
    node = system.nodes[index]
    system.nodes[index] = dataclasses.replace(
        node,
        constraint=constraint,
        angle=node.angle if angle is None else float(angle),
    )
    system.invalidate()


# ============================================================================
# LOADS
# ============================================================================

def set_nodal_load(
    system: FrameSystem,
    index: int,
    fx: float = 0.0,
    fy: float = 0.0,
    mz: float = 0.0,
) -> None:
    """Replace the load at a node with [fx, fy, mz]."""
    _check_node(system, index)
    system.resize_vectors()
    base = DOF_PER_NODE * index
    system.forces[base:base + DOF_PER_NODE] = (fx, fy, mz)
    system.invalidate()


def add_nodal_load(
    system: FrameSystem,
    index: int,
    fx: float = 0.0,
    fy: float = 0.0,
    mz: float = 0.0,
) -> None:
    """Add [fx, fy, mz] to the load already at a node."""
    _check_node(system, index)
    system.resize_vectors()
    _accumulate_load(system.forces, index, (fx, fy, mz), DOF_PER_NODE)
    system.invalidate()


def clear_loads(system: FrameSystem) -> None:
    system.forces = np.zeros(system.ndof, dtype=float)
    system.invalidate()


# ============================================================================
# BEAMS
# ============================================================================

def add_beam(system: FrameSystem, beam: BeamElement) -> int:
    """
    Append a beam and return its index.

    Raises:
    -------
    TopologyError
        If the beam references a missing node, the same node twice, or a
        catalog entry that does not exist.
    """
    problems = system.beam_problems(beam)
    if problems:
        raise TopologyError(f"Cannot add beam {beam.ni}-{beam.nj}: " + "; ".join(problems))
    system.beams.append(beam)
    system.invalidate()
    return len(system.beams) - 1


def remove_beam(system: FrameSystem, index: int) -> None:
    _check_beam(system, index)
    del system.beams[index]
    system.member_results = []
    system.invalidate()


def set_truss(system: FrameSystem, index: int, is_truss: bool) -> None:
    _check_beam(system, index)
    system.beams[index] = dataclasses.replace(system.beams[index], is_truss=bool(is_truss))
    system.invalidate()


def set_beam_profiles(
    system: FrameSystem,
    index: int,
    material: Optional[int] = None,
    section: Optional[int] = None,
) -> None:
    """Point a beam at other catalog entries."""
    _check_beam(system, index)
    beam = system.beams[index]
    updated = dataclasses.replace(
        beam,
        material=beam.material if material is None else material,
        section=beam.section if section is None else section,
    )
    problems = system.beam_problems(updated)
    if problems:
        raise TopologyError(f"Beam {index}: " + "; ".join(problems))
    system.beams[index] = updated
    system.invalidate()


def prune_invalid_beams(system: FrameSystem) -> int:
    """
    Drop every beam that fails topology validation.

    Returns:
    --------
    int
        Number of beams removed
    """
    valid = [b for b in system.beams if not system.beam_problems(b)]
    removed = len(system.beams) - len(valid)
    if removed:
        system.beams[:] = valid
        system.member_results = []
        system.invalidate()
    return removed


# ============================================================================
# CATALOGS
# ============================================================================

def add_material(system: FrameSystem, material: MaterialProfile) -> int:
    system.materials.append(material)
    return len(system.materials) - 1


def replace_material(system: FrameSystem, index: int, material: MaterialProfile) -> None:
    """Swap a catalog entry; every beam referencing it picks up the new values."""
    if not 0 <= index < len(system.materials):
        raise IndexError(f"Material index {index} out of range")
    system.materials[index] = material
    system.invalidate()


def remove_material(system: FrameSystem, index: int) -> None:
    """Delete a material and every beam made of it."""
    if not 0 <= index < len(system.materials):
        raise IndexError(f"Material index {index} out of range")
    system.beams[:] = [
        dataclasses.replace(b, material=b.material - 1 if b.material > index else b.material)
        for b in system.beams
        if b.material != index
    ]
    del system.materials[index]
    system.member_results = []
    system.invalidate()


def add_section(system: FrameSystem, section: SectionProfile) -> int:
    system.sections.append(section)
    return len(system.sections) - 1


def replace_section(system: FrameSystem, index: int, section: SectionProfile) -> None:
    """Swap a catalog entry; every beam referencing it picks up the new values."""
    if not 0 <= index < len(system.sections):
        raise IndexError(f"Section index {index} out of range")
    system.sections[index] = section
    system.invalidate()


def remove_section(system: FrameSystem, index: int) -> None:
    """Delete a section and every beam that uses it."""
    if not 0 <= index < len(system.sections):
        raise IndexError(f"Section index {index} out of range")
    system.beams[:] = [
        dataclasses.replace(b, section=b.section - 1 if b.section > index else b.section)
        for b in system.beams
        if b.section != index
    ]
    del system.sections[index]
    system.member_results = []
    system.invalidate()
