"""Service layer for the variant catalog.

Services receive the registry and launch schedule explicitly, so tests can
wire them to synthetic variants instead of the builtin engines:

    - CatalogService: variant listing gated by API level, start states
    - ResolutionService: stateless adjudication of a phase plus orders
    - MapService: map artwork with content-derived cache validators

Production Usage:
    from diplovariants.engines import build_registry
    registry = build_registry()
    catalog = CatalogService(registry, LaunchSchedule.from_pairs(pairs, registry))

Testing Usage:
    from diplovariants.engines import build_variant

    registry = VariantRegistry([build_variant(FakeEngine())])
    catalog = CatalogService(registry, LaunchSchedule())
"""

from diplovariants.services.catalog_service import CatalogService
from diplovariants.services.map_service import MapImage, MapService
from diplovariants.services.resolution_service import ResolutionService

__all__ = [
    "CatalogService",
    "MapImage",
    "MapService",
    "ResolutionService",
]
