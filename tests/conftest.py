"""Pytest configuration and synthetic variants shared by the test suite.

This adds the `src/` directory to `sys.path` so tests can import the
`diplovariants` package without requiring an editable install in CI.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from diplovariants.domain.enums import OrderType, PhaseType, Season, UnitType  # noqa: E402
from diplovariants.domain.models import (  # noqa: E402
    Edge,
    Graph,
    Nation,
    Phase,
    Province,
    ProvinceNode,
    Unit,
)
from diplovariants.domain.registry import VariantRegistry  # noqa: E402
from diplovariants.engines import build_variant  # noqa: E402

ENGLAND = Nation("England")
FRANCE = Nation("France")
LON = Province("lon")
NTH = Province("nth")
PAR = Province("par")
BRE = Province("bre")

FLEET_ONLY = frozenset({UnitType.FLEET})
BOTH = frozenset({UnitType.ARMY, UnitType.FLEET})
ARMY_ONLY = frozenset({UnitType.ARMY})


class FakeEngine:
    """Tiny two-nation engine; moves always succeed and seasons alternate."""

    def __init__(
        self,
        name: str = "testmap",
        *,
        artwork: bytes = b"<svg><g id='testmap'/></svg>",
        fail_start: bool = False,
        fail_resolve: bool = False,
    ) -> None:
        self.name = name
        self.description = f"Synthetic variant {name}"
        self.nations = (ENGLAND, FRANCE)
        self.supply_centers = (BRE, LON, PAR)
        self.artwork = artwork
        self.fail_start = fail_start
        self.fail_resolve = fail_resolve
        self.resolve_calls: list[tuple[Phase, object]] = []

    def order_types(self):
        return (OrderType.HOLD, OrderType.MOVE)

    def graph(self) -> Graph:
        return Graph(
            nodes={
                LON: ProvinceNode(LON, "coast", True, (Edge(NTH, FLEET_ONLY),)),
                NTH: ProvinceNode(NTH, "water", False, (Edge(LON, FLEET_ONLY), Edge(BRE, FLEET_ONLY))),
                BRE: ProvinceNode(BRE, "coast", True, (Edge(NTH, FLEET_ONLY), Edge(PAR, ARMY_ONLY))),
                PAR: ProvinceNode(PAR, "land", True, (Edge(BRE, ARMY_ONLY),)),
            }
        )

    def start(self) -> Phase:
        if self.fail_start:
            raise RuntimeError("broken topology")
        return Phase(
            year=1901,
            season=Season.SPRING,
            type=PhaseType.MOVEMENT,
            supply_centers={LON: ENGLAND, PAR: FRANCE},
            units={LON: Unit(UnitType.FLEET, ENGLAND), PAR: Unit(UnitType.ARMY, FRANCE)},
        )

    def resolve(self, phase: Phase, orders) -> Phase:
        if self.fail_resolve:
            raise RuntimeError("engine exploded")
        self.resolve_calls.append((phase, orders))
        units = dict(phase.units)
        for by_province in orders.values():
            for province, tokens in by_province.items():
                if tokens[0] == "Move":
                    units[Province(tokens[1])] = units.pop(Province(province))
        if phase.season is Season.SPRING:
            season, year = Season.FALL, phase.year
        else:
            season, year = Season.SPRING, phase.year + 1
        return Phase(
            year=year,
            season=season,
            type=PhaseType.MOVEMENT,
            supply_centers=dict(phase.supply_centers),
            units=units,
        )

    def svg_map(self) -> bytes:
        return self.artwork

    def render(self, phase: Phase) -> str:
        pieces = "".join(f"<text>{province}</text>" for province in phase.units)
        return f'<?xml version="1.0" encoding="utf-8"?>\n<svg>{pieces}</svg>'


@pytest.fixture
def fake_engine_factory():
    return FakeEngine


@pytest.fixture
def registry() -> VariantRegistry:
    """Registry with three synthetic variants: alpha, beta, gamma."""

    return VariantRegistry(
        build_variant(FakeEngine(name, artwork=f"<svg id='{name}'/>".encode()))
        for name in ("alpha", "beta", "gamma")
    )
