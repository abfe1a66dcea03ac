"""Catalog Service for the variant API.

Lists the variants a caller may discover and produces their starting
states.  Gating only decides what is listed: a variant fetched by name is
always served.
"""

from __future__ import annotations

import logging

from diplovariants.domain.models import Variant
from diplovariants.domain.registry import LaunchSchedule, VariantRegistry
from diplovariants.domain.render import RenderVariant, render_variant
from diplovariants.services.engine_guard import engine_call

logger = logging.getLogger(__name__)


class CatalogService:
    """Service composing the registry, launch schedule and render adapter."""

    def __init__(self, registry: VariantRegistry, schedule: LaunchSchedule) -> None:
        self.registry = registry
        self.schedule = schedule

    def list_variants(self, api_level: int) -> list[RenderVariant]:
        """Return every variant visible at ``api_level``, ordered by name.

        Args:
            api_level: Capability level of the caller

        Returns:
            Catalog entries including each variant's start state

        Raises:
            EngineFailureError: If any visible variant cannot produce a start
                state; a broken definition fails the whole listing
        """
        visible = self.schedule.visible(self.registry, api_level)
        logger.debug(
            "listing %d of %d variants for api level %d",
            len(visible),
            len(self.registry),
            api_level,
        )
        return [self._render(variant) for variant in visible]

    def start_variant(self, name: str) -> RenderVariant:
        """Return the catalog entry for ``name`` regardless of launch level.

        Raises:
            VariantNotFoundError: If ``name`` is not registered
        """
        return self._render(self.registry.lookup(name))

    @staticmethod
    def _render(variant: Variant) -> RenderVariant:
        with engine_call(variant.name, "start"):
            start = variant.start()
        return render_variant(variant, start)
