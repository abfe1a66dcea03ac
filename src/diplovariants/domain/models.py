"""Dataclasses describing variants, their topology and game phases.

These types are engine independent.  Engine adapters build :class:`Variant`
records whose callables translate to and from the engine's own objects, so
the services never touch an engine directly.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import NewType

from .enums import OrderType, PhaseType, Season, UnitType

Province = NewType("Province", str)
Nation = NewType("Nation", str)

# nation -> province -> order tokens, e.g. {"England": {"lon": ["Move", "nth"]}}
Orders = Mapping[str, Mapping[str, list[str]]]


@dataclass(frozen=True, slots=True)
class Unit:
    """A unit standing in a province."""

    type: UnitType
    nation: Nation


@dataclass(slots=True)
class Phase:
    """Engine-native snapshot of a single turn."""

    year: int
    season: Season
    type: PhaseType
    supply_centers: dict[Province, Nation] = field(default_factory=dict)
    units: dict[Province, Unit] = field(default_factory=dict)
    dislodged: dict[Province, Unit] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Edge:
    """Adjacency from one province to another."""

    target: Province
    unit_types: frozenset[UnitType]


@dataclass(frozen=True, slots=True)
class ProvinceNode:
    """Graph node for a single province or coast."""

    name: Province
    kind: str
    supply_center: bool
    edges: tuple[Edge, ...] = ()


@dataclass(frozen=True, slots=True)
class Graph:
    """Map topology: provinces and the moves between them."""

    nodes: Mapping[Province, ProvinceNode]

    def __iter__(self) -> Iterator[ProvinceNode]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)

    def neighbours(self, province: Province, unit_type: UnitType | None = None) -> list[Province]:
        """Return provinces reachable from ``province``, optionally for one unit type."""

        node = self.nodes.get(province)
        if node is None:
            return []
        return [
            edge.target
            for edge in node.edges
            if unit_type is None or unit_type in edge.unit_types
        ]


@dataclass(frozen=True, slots=True)
class Variant:
    """A complete playable rule-set and map.

    Behaviour is supplied by the engine adapter through the callable fields.
    """

    name: str
    description: str
    nations: tuple[Nation, ...]
    supply_centers: tuple[Province, ...]
    order_types: tuple[OrderType, ...]
    graph: Graph
    svg_version: str
    start: Callable[[], Phase]
    resolve: Callable[[Phase, Orders], Phase]
    svg_map: Callable[[], bytes]
    render: Callable[[Phase], str]
