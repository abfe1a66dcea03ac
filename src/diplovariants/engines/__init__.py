"""Variant engines and the factory that turns them into registry entries.

Example:
    # Production usage
    from diplovariants.engines import build_registry
    registry = build_registry()

    # Testing usage
    from diplovariants.domain.registry import VariantRegistry
    from diplovariants.engines import build_variant

    registry = VariantRegistry([build_variant(FakeEngine())])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from diplovariants.domain.models import Variant
from diplovariants.domain.registry import VariantRegistry
from diplovariants.engines.diplomacy_engine import DiplomacyVariantEngine
from diplovariants.interfaces import IVariantEngine
from diplovariants.utils.versioning import content_version

logger = logging.getLogger(__name__)

BUILTIN_MAPS: tuple[tuple[str, str], ...] = (
    ("standard", "The classic map of 1901 Europe for seven great powers."),
    ("pure", "Seven powers, seven supply centers, every power bordering every other."),
    ("ancmed", "Five powers contest the Mediterranean of the ancient world."),
    ("modern", "Ten powers on a map of modern Europe and the Middle East."),
)


def builtin_engines() -> list[IVariantEngine]:
    """Create an engine for every statically known variant."""

    return [DiplomacyVariantEngine(name, description) for name, description in BUILTIN_MAPS]


def build_variant(engine: IVariantEngine) -> Variant:
    """Snapshot the static parts of ``engine`` into an immutable :class:`Variant`.

    The map artwork is read once here; its version tag is derived from the
    bytes so it only changes when the artwork does.
    """

    artwork = engine.svg_map()

    def svg_map() -> bytes:
        return artwork

    return Variant(
        name=engine.name,
        description=engine.description,
        nations=tuple(engine.nations),
        supply_centers=tuple(engine.supply_centers),
        order_types=tuple(engine.order_types()),
        graph=engine.graph(),
        svg_version=content_version(artwork),
        start=engine.start,
        resolve=engine.resolve,
        svg_map=svg_map,
        render=engine.render,
    )


def build_registry(engines: Iterable[IVariantEngine] | None = None) -> VariantRegistry:
    """Build the process-wide registry from ``engines`` (builtin maps by default)."""

    if engines is None:
        engines = builtin_engines()
    variants = [build_variant(engine) for engine in engines]
    logger.info("registered %d variants: %s", len(variants), ", ".join(v.name for v in variants))
    return VariantRegistry(variants)
