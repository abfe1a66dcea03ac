"""Variant Engine Protocol Interface.

This module defines the contract an external adjudication engine must meet
to be exposed as a variant.  The service never inspects the engine beyond
these methods.
"""

from typing import Protocol

from diplovariants.domain.enums import OrderType
from diplovariants.domain.models import Graph, Nation, Orders, Phase, Province


class IVariantEngine(Protocol):
    """Protocol for a single playable variant backed by an engine."""

    name: str
    description: str

    @property
    def nations(self) -> tuple[Nation, ...]: ...

    @property
    def supply_centers(self) -> tuple[Province, ...]: ...

    def order_types(self) -> tuple[OrderType, ...]: ...

    def graph(self) -> Graph:
        """Return the map topology.

        Returns:
            Graph of every province and coast with movement annotations
        """
        ...

    def start(self) -> Phase:
        """Create the opening phase of a new game."""
        ...

    def resolve(self, phase: Phase, orders: Orders) -> Phase:
        """Adjudicate ``orders`` against ``phase``.

        Args:
            phase: Phase the orders were issued in
            orders: Order tokens keyed by nation, then province

        Returns:
            The phase that follows once the orders are resolved

        Raises:
            MalformedRequestError: If the phase or orders cannot be translated
        """
        ...

    def svg_map(self) -> bytes:
        """Return the unadorned map artwork as SVG."""
        ...

    def render(self, phase: Phase) -> str:
        """Return an SVG drawing of ``phase``."""
        ...
