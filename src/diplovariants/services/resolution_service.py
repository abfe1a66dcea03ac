"""Resolution bridge between client phases and the variant engine."""

from __future__ import annotations

import logging

from diplovariants.domain.models import Nation, Orders, Phase, Province, Unit
from diplovariants.domain.registry import VariantRegistry
from diplovariants.domain.render import PhaseState, RenderPhase, RenderUnit, render_phase
from diplovariants.errors import MalformedRequestError
from diplovariants.services.engine_guard import engine_call

logger = logging.getLogger(__name__)


def _units(units: dict[str, RenderUnit]) -> dict[Province, Unit]:
    return {
        Province(province): Unit(type=unit.type, nation=Nation(unit.nation))
        for province, unit in units.items()
    }


def phase_from_state(state: PhaseState) -> Phase:
    """Rebuild an engine-native phase from a client-submitted state."""

    return Phase(
        year=state.year,
        season=state.season,
        type=state.type,
        supply_centers={Province(p): Nation(n) for p, n in state.supply_centers.items()},
        units=_units(state.units),
        dislodged=_units(state.dislodged),
    )


def validate_orders(orders: Orders) -> None:
    """Check the shape of an order submission before any engine call.

    Each province may carry at most one order across all nations and every
    order needs at least a verb.
    """

    ordered: dict[str, str] = {}
    for nation, by_province in orders.items():
        for province, tokens in by_province.items():
            if not tokens or not all(tokens):
                raise MalformedRequestError(f"Order for {province!r} by {nation!r} is empty")
            previous = ordered.setdefault(province.lower(), nation)
            if previous != nation:
                raise MalformedRequestError(
                    f"Province {province!r} ordered by both {previous!r} and {nation!r}"
                )


class ResolutionService:
    """Stateless adjudication of a phase and its orders."""

    def __init__(self, registry: VariantRegistry) -> None:
        self.registry = registry

    def resolve_variant(self, name: str, state: PhaseState, orders: Orders) -> RenderPhase:
        """Resolve ``orders`` against ``state`` with the named variant's engine.

        Args:
            name: Registered variant name
            state: Phase the orders were issued in
            orders: Order tokens keyed by nation, then province

        Returns:
            The next phase as produced by the engine, tagged with ``name``

        Raises:
            VariantNotFoundError: If ``name`` is not registered
            MalformedRequestError: If the orders cannot be interpreted
            EngineFailureError: If the engine fails to adjudicate
        """
        variant = self.registry.lookup(name)
        validate_orders(orders)
        phase = phase_from_state(state)
        logger.info(
            "resolving %s %s %d %s",
            name,
            phase.season,
            phase.year,
            phase.type,
        )
        with engine_call(name, "resolve"):
            resolved = variant.resolve(phase, orders)
        return render_phase(resolved, variant.name)
