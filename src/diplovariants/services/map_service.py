"""Map artwork service with content-derived cache validation.

Map bytes are fixed once the registry is built, so the ETag is simply the
variant's ``svg_version`` and conditional requests can be answered without
touching the engine.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass

from diplovariants.domain.registry import VariantRegistry
from diplovariants.services.engine_guard import engine_call

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"

RENDER_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
<p>{description}</p>
{svg}
</body>
</html>
"""


def etag_matches(if_none_match: str | None, version: str) -> bool:
    """Return whether an ``If-None-Match`` header names ``version``.

    Accepts strong, weak (``W/``) and unquoted tags as well as ``*``.
    """

    if not if_none_match:
        return False
    for candidate in if_none_match.split(","):
        tag = candidate.strip()
        if tag == "*":
            return True
        if tag.startswith("W/"):
            tag = tag[2:]
        if tag.strip('"') == version:
            return True
    return False


@dataclass(frozen=True, slots=True)
class MapImage:
    """Map artwork plus the validators sent alongside it."""

    content: bytes
    version: str
    max_age_seconds: int

    @property
    def etag(self) -> str:
        return f'"{self.version}"'

    @property
    def headers(self) -> dict[str, str]:
        return {
            "ETag": self.etag,
            "Cache-Control": f"max-age={self.max_age_seconds}",
        }

    def is_fresh(self, if_none_match: str | None) -> bool:
        """True when the client's cached copy is current."""

        return etag_matches(if_none_match, self.version)


class MapService:
    """Serve variant maps and rendered start-state views."""

    def __init__(self, registry: VariantRegistry, *, max_age_seconds: int = 3600) -> None:
        self.registry = registry
        self.max_age_seconds = max_age_seconds

    def get_map(self, name: str) -> MapImage:
        """Return the artwork of ``name``.

        Raises:
            VariantNotFoundError: If ``name`` is not registered
        """
        variant = self.registry.lookup(name)
        with engine_call(name, "load the map of"):
            content = variant.svg_map()
        return MapImage(
            content=content,
            version=variant.svg_version,
            max_age_seconds=self.max_age_seconds,
        )

    def render_map(self, name: str) -> str:
        """Return an HTML page showing the start state of ``name``."""

        variant = self.registry.lookup(name)
        with engine_call(name, "render"):
            svg = variant.render(variant.start())
        if svg.startswith("<?xml"):
            svg = svg.split("?>", 1)[1].lstrip()
        logger.debug("rendered start state of %s (%d bytes)", name, len(svg))
        return RENDER_PAGE.format(
            title=html.escape(variant.name),
            description=html.escape(variant.description),
            svg=svg,
        )
