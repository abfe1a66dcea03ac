"""Runtime primitives backing the variant HTTP API."""

from __future__ import annotations

import logging

from diplovariants.config import Settings, get_settings
from diplovariants.domain.registry import LaunchSchedule, VariantRegistry
from diplovariants.engines import build_registry
from diplovariants.services import CatalogService, MapService, ResolutionService

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer.

    The registry and launch schedule are built here, once, before the app
    accepts traffic.  A schedule naming an unregistered variant raises
    ``ConfigurationError`` and the app never starts.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        registry: VariantRegistry | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else build_registry()
        self.schedule = LaunchSchedule.from_pairs(self.settings.launch_schedule, self.registry)
        self.catalog = CatalogService(self.registry, self.schedule)
        self.resolution = ResolutionService(self.registry)
        self.maps = MapService(
            self.registry,
            max_age_seconds=self.settings.map_max_age_seconds,
        )

    @property
    def html_api_level(self) -> int:
        """Minimum API level a client needs to use the HTML views."""

        return self.schedule.html_api_level


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
