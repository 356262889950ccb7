# Node, BeamElement, MemberResult and the FrameSystem aggregate

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .catalog import MaterialProfile, SectionProfile

DOF_PER_NODE = 3  # ux, uy, rz


class TopologyError(ValueError):
    """Raised when a beam references a missing node or catalog entry."""
    pass


class ConstraintKind(Enum):
    """
    Support condition of a node.

    FREE       ux, uy, rz all free
    FIXED      ux, uy, rz all restrained
    FIXED_PIN  ux, uy restrained, rz free
    SLIDER     rz free, (ux, uy) free along the slider direction only
    """
    FREE = "free"
    FIXED = "fixed"
    FIXED_PIN = "fixed_pin"
    SLIDER = "slider"


@dataclass(frozen=True)
class Node:
    """
    2D node. `angle` is the permitted sliding direction in degrees and only
    matters for ConstraintKind.SLIDER.
    """
    x: float
    y: float
    constraint: ConstraintKind = ConstraintKind.FREE
    angle: float = 0.0


@dataclass(frozen=True)
class BeamElement:
    """
    2-node planar frame element (Euler–Bernoulli), 3 DOF per node: (ux, uy, rz).

    ni -> nj defines the local x axis. `material` and `section` index into the
    owning system's catalogs. With `is_truss` the bending stiffness is dropped
    and the member carries axial force only.
    """
    ni: int
    nj: int
    material: int
    section: int
    is_truss: bool = False


@dataclass(frozen=True)
class MemberResult:
    """Post-solve outputs for one beam. Tension positive."""
    axial_force: float
    max_moment: float
    stress: float
    end_forces: Tuple[float, ...] = (0.0,) * 6  # local [N1, V1, M1, N2, V2, M2]


def _zeros(n: int) -> np.ndarray:
    return np.zeros(n, dtype=float)


@dataclass
class FrameSystem:
    """
    The structural model and its last solution.

    The caller owns this object and passes it to `fastfem.solve.solve`. Only
    `forces` is user input that survives a solve; every other array is
    re-derived from the node/beam lists on each solve.

    Attributes:
    -----------
    nodes, beams, materials, sections : model definition
    forces : (3N,) applied nodal loads [Fx0, Fy0, Mz0, Fx1, ...]
    displacement : (3N,) solved [ux0, uy0, rz0, ux1, ...]
    reactions : (3N,) R = K·d - F
    global_k : (3N, 3N) assembled stiffness from the last solve
    member_results : one MemberResult per beam
    multipliers : slider Lagrange multipliers (one per slider node)
    condition_number : advisory condition number of the saddle system
    min_stress, max_stress : extremes of the combined stress over all beams
    status : SolveStatus of the last solve attempt, None before any solve
    solved : True only while outputs match the current model
    """
    nodes: List[Node] = field(default_factory=list)
    beams: List[BeamElement] = field(default_factory=list)
    materials: List[MaterialProfile] = field(default_factory=list)
    sections: List[SectionProfile] = field(default_factory=list)
    forces: Optional[np.ndarray] = None

    displacement: Optional[np.ndarray] = None
    reactions: Optional[np.ndarray] = None
    global_k: Optional[np.ndarray] = None
    member_results: List[MemberResult] = field(default_factory=list)
    multipliers: Optional[np.ndarray] = None
    condition_number: Optional[float] = None
    min_stress: float = 0.0
    max_stress: float = 0.0
    status: Optional[int] = None
    solved: bool = False

    def __post_init__(self):
        n = self.ndof
        if self.forces is None:
            self.forces = _zeros(n)
        else:
            self.forces = np.asarray(self.forces, dtype=float).copy()
            if self.forces.shape != (n,):
                raise ValueError(f"forces must have shape ({n},), got {self.forces.shape}")
        if self.displacement is None:
            self.displacement = _zeros(n)
        if self.reactions is None:
            self.reactions = _zeros(n)

    @property
    def ndof(self) -> int:
        return DOF_PER_NODE * len(self.nodes)

    def resize_vectors(self) -> None:
        """
        Match forces/displacement/reactions to the node count, keeping existing
        leading entries and zero-filling new ones.
        """
        n = self.ndof
        for name in ("forces", "displacement", "reactions"):
            vec = getattr(self, name)
            if vec.shape == (n,):
                continue
            resized = _zeros(n)
            m = min(n, vec.shape[0])
            resized[:m] = vec[:m]
            setattr(self, name, resized)

    def invalidate(self) -> None:
        """Mark outputs stale after an edit."""
        self.solved = False

    def node_displacement(self, index: int) -> np.ndarray:
        base = DOF_PER_NODE * index
        return self.displacement[base:base + DOF_PER_NODE].copy()

    def node_reaction(self, index: int) -> np.ndarray:
        base = DOF_PER_NODE * index
        return self.reactions[base:base + DOF_PER_NODE].copy()

    def beam_problems(self, beam: BeamElement) -> List[str]:
        """Every topology problem of `beam` against this system, empty if valid."""
        problems = []
        n_nodes = len(self.nodes)
        for end in (beam.ni, beam.nj):
            if not 0 <= end < n_nodes:
                problems.append(f"node index {end} out of range (0..{n_nodes - 1})")
        if beam.ni == beam.nj:
            problems.append(f"both ends reference node {beam.ni}")
        if not 0 <= beam.material < len(self.materials):
            problems.append(f"material index {beam.material} out of range")
        if not 0 <= beam.section < len(self.sections):
            problems.append(f"section index {beam.section} out of range")
        return problems

    def validate(self) -> None:
        """
        Check the invariants the solver assumes.

        Raises:
        -------
        TopologyError
            On a dangling or duplicate node reference or a catalog index out of
            range.
        """
        for i, beam in enumerate(self.beams):
            problems = self.beam_problems(beam)
            if problems:
                raise TopologyError(f"Beam {i} ({beam.ni}-{beam.nj}): " + "; ".join(problems))
        if self.forces.shape != (self.ndof,):
            raise TopologyError(
                f"forces has {self.forces.shape[0]} entries, expected {self.ndof}"
            )
