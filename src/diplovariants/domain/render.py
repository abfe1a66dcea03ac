"""Transport projections of phases and variants.

The render models are what clients see.  They are derived one way from the
domain dataclasses and carry no behaviour of their own.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from diplovariants.domain.enums import OrderType, PhaseType, Season, UnitType
from diplovariants.domain.models import Graph, Phase, Unit, Variant


class RenderUnit(BaseModel):
    type: UnitType
    nation: str


class PhaseState(BaseModel):
    """Phase fields as exchanged with clients."""

    year: int
    season: Season
    type: PhaseType
    supply_centers: dict[str, str] = Field(default_factory=dict)
    units: dict[str, RenderUnit] = Field(default_factory=dict)
    dislodged: dict[str, RenderUnit] = Field(default_factory=dict)


class RenderPhase(PhaseState):
    """A phase tagged with the map of the variant that produced it."""

    map: str


class RenderProvince(BaseModel):
    kind: str
    supply_center: bool
    edges: dict[str, list[UnitType]]


class Link(BaseModel):
    rel: str
    href: str
    method: str = "GET"


class RenderVariant(BaseModel):
    """Catalog entry for a single variant."""

    name: str
    description: str
    nations: list[str]
    supply_centers: list[str]
    order_types: list[OrderType]
    svg_version: str
    start: RenderPhase
    graph: dict[str, RenderProvince]
    links: list[Link] = Field(default_factory=list)


def _render_units(units: dict[str, Unit]) -> dict[str, RenderUnit]:
    return {
        str(province): RenderUnit(type=unit.type, nation=unit.nation)
        for province, unit in units.items()
    }


def render_phase(phase: Phase, map_name: str) -> RenderPhase:
    """Flatten an engine phase into its transport shape."""

    return RenderPhase(
        year=phase.year,
        season=phase.season,
        type=phase.type,
        supply_centers={str(p): str(n) for p, n in phase.supply_centers.items()},
        units=_render_units(phase.units),
        dislodged=_render_units(phase.dislodged),
        map=map_name,
    )


def render_graph(graph: Graph) -> dict[str, RenderProvince]:
    return {
        str(node.name): RenderProvince(
            kind=node.kind,
            supply_center=node.supply_center,
            edges={
                str(edge.target): sorted(edge.unit_types) for edge in node.edges
            },
        )
        for node in graph
    }


def render_variant(variant: Variant, start: Phase) -> RenderVariant:
    """Assemble the catalog entry for ``variant`` from its starting phase."""

    return RenderVariant(
        name=variant.name,
        description=variant.description,
        nations=[str(nation) for nation in variant.nations],
        supply_centers=[str(province) for province in variant.supply_centers],
        order_types=list(variant.order_types),
        svg_version=variant.svg_version,
        start=render_phase(start, variant.name),
        graph=render_graph(variant.graph),
    )
