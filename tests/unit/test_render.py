"""Tests for the phase and variant render adapter."""

from __future__ import annotations

from diplovariants.domain.enums import OrderType, PhaseType, Season, UnitType
from diplovariants.domain.models import Nation, Phase, Province, Unit
from diplovariants.domain.render import render_graph, render_phase, render_variant
from diplovariants.engines import build_variant


def _phase() -> Phase:
    return Phase(
        year=1901,
        season=Season.SPRING,
        type=PhaseType.MOVEMENT,
        supply_centers={Province("lon"): Nation("England"), Province("par"): Nation("France")},
        units={
            Province("lon"): Unit(UnitType.FLEET, Nation("England")),
            Province("par"): Unit(UnitType.ARMY, Nation("France")),
        },
    )


def test_render_phase_preserves_fields():
    rendered = render_phase(_phase(), "standard")

    assert rendered.year == 1901
    assert rendered.season == Season.SPRING
    assert rendered.type == PhaseType.MOVEMENT
    assert rendered.supply_centers == {"lon": "England", "par": "France"}
    assert {p: (u.type, u.nation) for p, u in rendered.units.items()} == {
        "lon": (UnitType.FLEET, "England"),
        "par": (UnitType.ARMY, "France"),
    }
    assert rendered.dislodged == {}
    assert rendered.map == "standard"


def test_render_phase_serializes_to_plain_json():
    payload = render_phase(_phase(), "standard").model_dump(mode="json")

    assert payload == {
        "year": 1901,
        "season": "spring",
        "type": "movement",
        "supply_centers": {"lon": "England", "par": "France"},
        "units": {
            "lon": {"type": "fleet", "nation": "England"},
            "par": {"type": "army", "nation": "France"},
        },
        "dislodged": {},
        "map": "standard",
    }


def test_render_phase_keeps_dislodged_units():
    phase = _phase()
    phase.type = PhaseType.RETREAT
    phase.dislodged = {Province("bre"): Unit(UnitType.FLEET, Nation("France"))}

    rendered = render_phase(phase, "standard")

    assert rendered.dislodged["bre"].nation == "France"
    assert rendered.type == PhaseType.RETREAT


def test_render_graph_flattens_edges(fake_engine_factory):
    graph = render_graph(fake_engine_factory().graph())

    assert set(graph) == {"lon", "nth", "bre", "par"}
    assert graph["nth"].kind == "water"
    assert graph["nth"].supply_center is False
    assert graph["bre"].edges == {"nth": [UnitType.FLEET], "par": [UnitType.ARMY]}


def test_render_variant_assembles_catalog_entry(fake_engine_factory):
    engine = fake_engine_factory("alpha")
    variant = build_variant(engine)

    rendered = render_variant(variant, engine.start())

    assert rendered.name == "alpha"
    assert rendered.nations == ["England", "France"]
    assert rendered.order_types == [OrderType.HOLD, OrderType.MOVE]
    assert rendered.start.map == "alpha"
    assert rendered.svg_version == variant.svg_version
    assert rendered.links == []
