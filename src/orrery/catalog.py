'''Orbital mechanics core for a solar-system orrery
Body and BodyCatalog definitions'''

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .orbital_elements import OrbitalElements


# define an enumerated list of body types
class BodyType(Enum):
    STAR = 'star'
    PLANET = 'planet'
    DWARF_PLANET = 'dwarf_planet'
    MOON = 'moon'
    COMET = 'comet'


@dataclass(frozen=True)
class Body:
    """
    Immutable catalog entry for one celestial body.

    Attributes
    ----------
    id : str
        Unique catalog key (e.g. 'earth')
    name : str
        Display name
    body_type : BodyType
        Star, planet, dwarf planet, moon or comet
    elements : OrbitalElements, optional
        Orbit about `elements.parent`; None for bodies fixed at their
        parent's position (the Sun at the origin)
    radius : float
        Mean radius [m]
    mass : float, optional
        Mass [kg]
    color : int
        Display color as 0xRRGGBB
    moons : tuple of str
        Ids of confirmed satellites, in display order
    """
    id: str
    name: str
    body_type: BodyType
    elements: Optional[OrbitalElements] = None
    radius: float = 0.0
    mass: Optional[float] = None
    color: int = 0xFFFFFF
    moons: Tuple[str, ...] = ()

    def __post_init__(self):
        #Validate parameters
        if not self.id:
            raise ValueError("Body id must be a non-empty string")
        if not isinstance(self.body_type, BodyType):
            object.__setattr__(self, 'body_type', BodyType(self.body_type))
        if self.radius < 0:
            raise ValueError(f"Radius must be non-negative, got {self.radius}")
        if self.mass is not None and self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if not 0 <= self.color <= 0xFFFFFF:
            raise ValueError(f"Color must be a 24-bit RGB value, got {self.color:#x}")
        object.__setattr__(self, 'moons', tuple(self.moons))

    @property
    def parent(self) -> Optional[str]:
        """Id of the primary this body orbits, None for the origin"""
        if self.elements is None:
            return None
        return self.elements.parent

    @property
    def color_hex(self) -> str:
        """Color as a CSS hex string"""
        return f"#{self.color:06x}"


class BodyCatalog:
    """
    Read-only collection of bodies keyed by id.

    The parent linkage is checked on construction: every parent must exist
    and following parents from any body must reach a root (a body without a
    parent) without revisiting a body.

    Parameters
    ----------
    bodies : iterable of Body

    Raises
    ------
    ValueError
        On duplicate ids, unknown parents or moons, or a parent cycle
    """
    def __init__(self, bodies: Iterable[Body]):
        self._bodies: Dict[str, Body] = {}
        for body in bodies:
            if body.id in self._bodies:
                raise ValueError(f"Duplicate body id '{body.id}'")
            self._bodies[body.id] = body
        self._validate_hierarchy()

    # ========== VALIDATION ==========
    def _validate_hierarchy(self):
        for body in self._bodies.values():
            if body.parent is not None and body.parent not in self._bodies:
                raise ValueError(
                    f"Body '{body.id}' references unknown parent '{body.parent}'")
            for moon in body.moons:
                if moon not in self._bodies:
                    raise ValueError(
                        f"Body '{body.id}' lists unknown moon '{moon}'")

        for body in self._bodies.values():
            seen = [body.id]
            current = body
            while current.parent is not None:
                if current.parent in seen:
                    chain = " -> ".join(seen + [current.parent])
                    raise ValueError(f"Parent cycle in catalog: {chain}")
                seen.append(current.parent)
                current = self._bodies[current.parent]

    # ========== LOOKUP ==========
    def get(self, body_id: str) -> Optional[Body]:
        """Body with the given id, or None"""
        return self._bodies.get(body_id)

    def parent_of(self, body_id: str) -> Optional[Body]:
        """Parent body of `body_id`, or None for roots"""
        parent = self[body_id].parent
        return None if parent is None else self._bodies[parent]

    def children_of(self, body_id: str) -> List[Body]:
        """Bodies whose parent is `body_id`, in catalog order"""
        return [b for b in self._bodies.values() if b.parent == body_id]

    def moons_for(self, body_id: str) -> List[Body]:
        """Listed moons of `body_id`; empty for unknown ids"""
        body = self._bodies.get(body_id)
        if body is None:
            return []
        return [self._bodies[m] for m in body.moons]

    def of_type(self, body_type) -> List[Body]:
        """All bodies of a given BodyType (enum or value string)"""
        body_type = BodyType(body_type)
        return [b for b in self._bodies.values() if b.body_type == body_type]

    def ancestors(self, body_id: str) -> List[Body]:
        """Chain of parents from the immediate parent up to the root"""
        chain = []
        parent = self.parent_of(body_id)
        while parent is not None:
            chain.append(parent)
            parent = self.parent_of(parent.id)
        return chain

    @property
    def ids(self) -> List[str]:
        return list(self._bodies)

    # ========== SPECIAL METHODS ==========
    def __getitem__(self, body_id: str) -> Body:
        try:
            return self._bodies[body_id]
        except KeyError:
            raise KeyError(f"Unknown body '{body_id}'") from None

    def __contains__(self, body_id) -> bool:
        return body_id in self._bodies

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    def __repr__(self):
        return f"BodyCatalog({len(self)} bodies)"
