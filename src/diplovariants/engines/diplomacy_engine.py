"""Adapter exposing maps of the ``diplomacy`` package as variants.

Each call builds a fresh ``diplomacy.Game`` from the submitted phase, so the
adapter keeps no game state between requests.  Province keys are the
engine's location names in lower case (``lon``, ``stp/sc``) and nations are
title-cased power names (``England``).
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

from diplomacy import Game

from diplovariants.domain.enums import OrderType, PhaseType, Season, UnitType
from diplovariants.domain.models import (
    Edge,
    Graph,
    Nation,
    Orders,
    Phase,
    Province,
    ProvinceNode,
    Unit,
)
from diplovariants.errors import MalformedRequestError

logger = logging.getLogger(__name__)

SEASON_CODES: dict[str, Season] = {
    "S": Season.SPRING,
    "F": Season.FALL,
    "W": Season.WINTER,
}
PHASE_TYPE_CODES: dict[str, PhaseType] = {
    "M": PhaseType.MOVEMENT,
    "R": PhaseType.RETREAT,
    "A": PhaseType.ADJUSTMENT,
}
UNIT_CODES: dict[str, UnitType] = {"A": UnitType.ARMY, "F": UnitType.FLEET}

# Winter only hosts adjustments; spring and fall host movement and retreats.
VALID_PHASES: frozenset[tuple[Season, PhaseType]] = frozenset(
    {
        (Season.SPRING, PhaseType.MOVEMENT),
        (Season.SPRING, PhaseType.RETREAT),
        (Season.FALL, PhaseType.MOVEMENT),
        (Season.FALL, PhaseType.RETREAT),
        (Season.WINTER, PhaseType.ADJUSTMENT),
    }
)

SUPPORTED_ORDER_TYPES: tuple[OrderType, ...] = tuple(OrderType)

_ARGUMENT_COUNTS: dict[OrderType, tuple[int, ...]] = {
    OrderType.HOLD: (0,),
    OrderType.MOVE: (1,),
    OrderType.MOVE_VIA_CONVOY: (1,),
    OrderType.SUPPORT: (1, 2),
    OrderType.CONVOY: (2,),
    OrderType.BUILD: (1,),
    OrderType.DISBAND: (0,),
}


def province_key(location: str) -> Province:
    return Province(location.lower())


def nation_name(power_name: str) -> Nation:
    return Nation(power_name.title())


def _unit_code(unit_type: UnitType) -> str:
    return "A" if unit_type is UnitType.ARMY else "F"


def _parse_unit(unit: str, power_name: str) -> tuple[Province, Unit]:
    code, location = unit.lstrip("*").split()
    return province_key(location), Unit(type=UNIT_CODES[code], nation=nation_name(power_name))


def phase_code(phase: Phase) -> str:
    """Return the engine's short phase name, e.g. ``S1901M``."""

    if (phase.season, phase.type) not in VALID_PHASES:
        raise MalformedRequestError(f"{phase.season} has no {phase.type} phase")
    season = next(code for code, season in SEASON_CODES.items() if season is phase.season)
    kind = next(code for code, kind in PHASE_TYPE_CODES.items() if kind is phase.type)
    return f"{season}{phase.year}{kind}"


def phase_from_game(game: Game) -> Phase:
    """Read the current phase of ``game`` into a domain :class:`Phase`."""

    current = game.get_current_phase()
    if current in ("FORMING", "COMPLETED"):
        raise ValueError(f"engine reported non-playable phase {current!r}")

    phase = Phase(
        year=int(current[1:-1]),
        season=SEASON_CODES[current[0]],
        type=PHASE_TYPE_CODES[current[-1]],
    )
    for power_name, power in sorted(game.powers.items()):
        nation = nation_name(power_name)
        for center in power.centers:
            phase.supply_centers[province_key(center)] = nation
        for unit in power.units:
            province, parsed = _parse_unit(unit, power_name)
            phase.units[province] = parsed
        for unit in power.retreats:
            province, parsed = _parse_unit(unit, power_name)
            phase.dislodged[province] = parsed
    return phase


def _order_unit(phase: Phase, province: str) -> Unit:
    units = phase.dislodged if phase.type is PhaseType.RETREAT else phase.units
    unit = units.get(Province(province))
    if unit is None:
        raise MalformedRequestError(f"No unit in {province!r} to receive an order")
    return unit


def translate_order(phase: Phase, province: str, tokens: list[str]) -> str:
    """Translate one province's order tokens into the engine's order syntax.

    Args:
        phase: Phase the order is issued in, used to look up unit types
        province: Province key of the ordered unit
        tokens: Verb followed by its province or unit-type arguments

    Returns:
        Engine order string such as ``"F LON - NTH"``

    Raises:
        MalformedRequestError: If the verb, its arguments or the unit are invalid
    """

    if not tokens:
        raise MalformedRequestError(f"Empty order for {province!r}")
    verb, *args = tokens
    try:
        order_type = OrderType(verb)
    except ValueError:
        raise MalformedRequestError(f"Unknown order type {verb!r}") from None
    if len(args) not in _ARGUMENT_COUNTS[order_type]:
        raise MalformedRequestError(
            f"{order_type} for {province!r} takes {_ARGUMENT_COUNTS[order_type]} arguments"
        )

    location = province.upper()
    if order_type is OrderType.BUILD:
        try:
            unit_type = UnitType(args[0].lower())
        except ValueError:
            raise MalformedRequestError(f"Cannot build unit type {args[0]!r}") from None
        return f"{_unit_code(unit_type)} {location} B"

    unit = _order_unit(phase, province)
    prefix = f"{_unit_code(unit.type)} {location}"
    targets = [arg.upper() for arg in args]

    if order_type is OrderType.HOLD:
        return f"{prefix} H"
    if order_type is OrderType.DISBAND:
        return f"{prefix} D"
    if order_type is OrderType.MOVE:
        if phase.type is PhaseType.RETREAT:
            return f"{prefix} R {targets[0]}"
        return f"{prefix} - {targets[0]}"
    if order_type is OrderType.MOVE_VIA_CONVOY:
        return f"{prefix} - {targets[0]} VIA"

    supported = phase.units.get(province_key(targets[0]))
    supported_code = _unit_code(supported.type) if supported is not None else "A"
    if order_type is OrderType.CONVOY:
        return f"{prefix} C {supported_code} {targets[0]} - {targets[1]}"
    if len(targets) == 1 or targets[0] == targets[1]:
        return f"{prefix} S {supported_code} {targets[0]}"
    return f"{prefix} S {supported_code} {targets[0]} - {targets[1]}"


def translate_orders(
    phase: Phase, orders: Orders, powers: Collection[str] | None = None
) -> dict[str, list[str]]:
    """Translate a nation/province order map into per-power engine orders.

    When ``powers`` is given, orders from any other nation are rejected.
    """

    seen: set[str] = set()
    translated: dict[str, list[str]] = {}
    for nation, by_province in orders.items():
        power_name = nation.upper()
        if powers is not None and power_name not in powers:
            raise MalformedRequestError(f"Nation {nation!r} does not play this variant")
        for province, tokens in by_province.items():
            key = province.lower()
            if key in seen:
                raise MalformedRequestError(f"More than one order for {province!r}")
            seen.add(key)
            translated.setdefault(power_name, []).append(translate_order(phase, key, tokens))
    return translated


class DiplomacyVariantEngine:
    """A single ``diplomacy`` map exposed through :class:`IVariantEngine`."""

    def __init__(self, map_name: str, description: str) -> None:
        self.name = map_name
        self.description = description
        self._map = Game(map_name=map_name).map
        self._locations = frozenset(province_key(loc) for loc in self._map.locs)

    @property
    def nations(self) -> tuple[Nation, ...]:
        return tuple(nation_name(power) for power in sorted(self._map.powers))

    @property
    def supply_centers(self) -> tuple[Province, ...]:
        return tuple(province_key(center) for center in sorted(self._map.scs))

    def order_types(self) -> tuple[OrderType, ...]:
        return SUPPORTED_ORDER_TYPES

    def graph(self) -> Graph:
        centers = {center.upper() for center in self._map.scs}
        nodes: dict[Province, ProvinceNode] = {}
        for location in sorted({loc.upper() for loc in self._map.locs}):
            edges: list[Edge] = []
            neighbours = {loc.upper() for loc in self._map.abut_list(location, incl_no_coast=True)}
            for other in sorted(neighbours):
                unit_types = frozenset(
                    unit_type
                    for code, unit_type in UNIT_CODES.items()
                    if self._map.abuts(code, location, "-", other)
                )
                if unit_types:
                    edges.append(Edge(target=province_key(other), unit_types=unit_types))
            key = province_key(location)
            nodes[key] = ProvinceNode(
                name=key,
                kind=(self._map.area_type(location) or "").lower(),
                supply_center=location[:3] in centers,
                edges=tuple(edges),
            )
        return Graph(nodes=nodes)

    def start(self) -> Phase:
        return phase_from_game(Game(map_name=self.name))

    def resolve(self, phase: Phase, orders: Orders) -> Phase:
        engine_orders = translate_orders(phase, orders, self._map.powers)
        game = self._game_for(phase)
        for power_name, power_orders in engine_orders.items():
            game.set_orders(power_name, power_orders)
        logger.debug(
            "processing %s %s with %d orders",
            self.name,
            game.get_current_phase(),
            sum(len(o) for o in engine_orders.values()),
        )
        game.process()
        return phase_from_game(game)

    def svg_map(self) -> bytes:
        svg_path = self._map.svg_path
        if not svg_path:
            raise FileNotFoundError(f"No SVG artwork shipped for map {self.name!r}")
        return Path(svg_path).read_bytes()

    def render(self, phase: Phase) -> str:
        game = self._game_for(phase)
        return game.render(incl_orders=False, incl_abbrev=True)

    def _game_for(self, phase: Phase) -> Game:
        """Build an engine game positioned at ``phase``."""

        code = phase_code(phase)
        game = Game(map_name=self.name)
        units: dict[str, list[str]] = {power_name: [] for power_name in game.powers}
        centers: dict[str, list[str]] = {power_name: [] for power_name in game.powers}

        def _power(nation: str) -> str:
            power_name = nation.upper()
            if power_name not in units:
                raise MalformedRequestError(f"Nation {nation!r} does not play {self.name!r}")
            return power_name

        for province, nation in phase.supply_centers.items():
            centers[_power(nation)].append(province.upper())
        for prefix, placed in (("", phase.units), ("*", phase.dislodged)):
            for province, unit in placed.items():
                if province_key(province) not in self._locations:
                    raise MalformedRequestError(f"Province {province!r} is not on {self.name!r}")
                units[_power(unit.nation)].append(
                    f"{prefix}{_unit_code(unit.type)} {province.upper()}"
                )

        game.set_current_phase(code)
        for power_name in game.powers:
            game.set_centers(power_name, centers[power_name], reset=True)
            game.set_units(power_name, units[power_name], reset=True)
        return game

