"""HTTP routes for the variant API."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from diplovariants.api.runtime import ApiState
from diplovariants.domain.models import Variant
from diplovariants.domain.render import Link, PhaseState, RenderPhase, RenderVariant
from diplovariants.services.map_service import SVG_MEDIA_TYPE

router = APIRouter()

LIST_VARIANTS_ROUTE = "ListVariants"
VARIANT_START_ROUTE = "StartVariant"
VARIANT_RESOLVE_ROUTE = "ResolveVariant"
VARIANT_MAP_ROUTE = "VariantMap"
RENDER_MAP_ROUTE = "RenderMap"

API_LEVEL_HEADER = "X-Api-Level"
API_LEVEL_QUERY = "api-level"

LISTING_DESCRIPTION = [
    [
        "Variants",
        "This lists the supported variants on the server. Graph logically represents "
        "the map, while the rest of the fields should be fairly self explanatory.",
    ],
    [
        "Variant services",
        "Variants provide clients with a start state via the `start-state` link.",
        "To get the resolved result of a state plus some orders, `POST` the same state "
        "plus the orders to the `resolve-state` link as "
        "`{ 'phase': STATE, 'orders': { NATION: { PROVINCE: [WORD] } } }`, e.g. "
        "`{ 'England': { 'lon': ['Move', 'nth'] } }` for the orders.",
    ],
    [
        "Phase types",
        "The variant service targets independent developers and only provides simple "
        "start-state and resolve-state functionality; it keeps no games or history.",
    ],
]


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def get_api_level(request: Request, state: ApiStateDep) -> int:
    """Capability level declared by the caller, or the configured default."""

    raw = request.headers.get(API_LEVEL_HEADER) or request.query_params.get(API_LEVEL_QUERY)
    if raw is None:
        return state.settings.default_api_level
    try:
        return int(raw)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid API level {raw!r}"
        ) from exc


ApiLevelDep = Annotated[int, Depends(get_api_level)]


def get_variant(name: str, state: ApiStateDep) -> Variant:
    """Resolve the ``{name}`` path segment before any request body is read."""

    return state.registry.lookup(name)


VariantDep = Annotated[Variant, Depends(get_variant)]


class VariantListing(BaseModel):
    name: str = "variants"
    description: list[list[str]]
    links: list[Link]
    variants: list[RenderVariant]


class ResolveRequest(BaseModel):
    phase: PhaseState
    orders: dict[str, dict[str, list[str]]] = Field(default_factory=dict)


def _with_links(request: Request, variant: RenderVariant) -> RenderVariant:
    def href(route: str) -> str:
        return str(request.url_for(route, name=variant.name))

    variant.links = [
        Link(rel="start-state", href=href(VARIANT_START_ROUTE)),
        Link(rel="resolve-state", href=href(VARIANT_RESOLVE_ROUTE), method="POST"),
        Link(rel="map", href=href(VARIANT_MAP_ROUTE)),
        Link(rel="render", href=href(RENDER_MAP_ROUTE)),
    ]
    return variant


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "variants": len(state.registry),
        "html_api_level": state.html_api_level,
    }


@router.get("/Variants", name=LIST_VARIANTS_ROUTE, response_model=VariantListing)
async def list_variants(
    request: Request, state: ApiStateDep, api_level: ApiLevelDep
) -> VariantListing:
    variants = await asyncio.to_thread(state.catalog.list_variants, api_level)
    return VariantListing(
        description=LISTING_DESCRIPTION,
        links=[Link(rel="self", href=str(request.url_for(LIST_VARIANTS_ROUTE)))],
        variants=[_with_links(request, variant) for variant in variants],
    )


@router.get("/Variant/{name}/Start", name=VARIANT_START_ROUTE, response_model=RenderVariant)
async def start_variant(name: str, request: Request, state: ApiStateDep) -> RenderVariant:
    variant = await asyncio.to_thread(state.catalog.start_variant, name)
    return _with_links(request, variant)


@router.post("/Variant/{name}/Resolve", name=VARIANT_RESOLVE_ROUTE, response_model=RenderPhase)
async def resolve_variant(
    variant: VariantDep, request: ResolveRequest, state: ApiStateDep
) -> RenderPhase:
    return await asyncio.to_thread(
        state.resolution.resolve_variant, variant.name, request.phase, request.orders
    )


@router.get("/Variant/{name}/Map.svg", name=VARIANT_MAP_ROUTE)
async def variant_map(
    name: str,
    state: ApiStateDep,
    if_none_match: Annotated[str | None, Header()] = None,
) -> Response:
    # artwork is snapshotted when the registry is built; no engine call here
    image = state.maps.get_map(name)
    if image.is_fresh(if_none_match):
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=image.headers)
    return Response(content=image.content, media_type=SVG_MEDIA_TYPE, headers=image.headers)


@router.get("/Variant/{name}/Render", name=RENDER_MAP_ROUTE, response_class=HTMLResponse)
async def render_map(name: str, state: ApiStateDep) -> HTMLResponse:
    page = await asyncio.to_thread(state.maps.render_map, name)
    return HTMLResponse(page)
