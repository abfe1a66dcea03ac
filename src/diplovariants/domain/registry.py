"""Variant registry and the API-level launch schedule.

Both objects are built once while the application starts and are read-only
afterwards, so concurrent requests can share them without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from diplovariants.domain.models import Variant
from diplovariants.errors import ConfigurationError, VariantNotFoundError

logger = logging.getLogger(__name__)


class VariantRegistry:
    """Immutable mapping of variant name to :class:`Variant`."""

    def __init__(self, variants: Iterable[Variant]) -> None:
        table: dict[str, Variant] = {}
        for variant in variants:
            if variant.name in table:
                raise ConfigurationError(f"Variant {variant.name!r} registered twice")
            table[variant.name] = variant
        self._variants: Mapping[str, Variant] = MappingProxyType(table)

    def lookup(self, name: str) -> Variant:
        """Return the named variant or raise ``VariantNotFoundError``."""

        try:
            return self._variants[name]
        except KeyError:
            raise VariantNotFoundError(name) from None

    def names(self) -> frozenset[str]:
        return frozenset(self._variants)

    def __contains__(self, name: object) -> bool:
        return name in self._variants

    def __iter__(self) -> Iterator[Variant]:
        for name in sorted(self._variants):
            yield self._variants[name]

    def __len__(self) -> int:
        return len(self._variants)


class LaunchSchedule:
    """Minimum API level a caller needs before a variant is listed.

    Variants without an entry are visible to every caller (level 0).
    """

    def __init__(self, levels: Mapping[str, int] | None = None) -> None:
        self._levels: Mapping[str, int] = MappingProxyType(dict(levels or {}))
        self._html_api_level = max(self._levels.values(), default=0)

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[tuple[str, int]], registry: VariantRegistry
    ) -> LaunchSchedule:
        """Build a schedule, failing fast on names the registry does not know."""

        levels: dict[str, int] = {}
        for name, level in pairs:
            if name not in registry:
                raise ConfigurationError(f"Launch schedule names unknown variant {name!r}")
            if name in levels:
                raise ConfigurationError(f"Variant {name!r} scheduled more than once")
            if level < 0:
                raise ConfigurationError(f"Launch level for {name!r} must be non-negative")
            levels[name] = level
        schedule = cls(levels)
        logger.info(
            "launch schedule covers %d variants, html api level %d",
            len(levels),
            schedule.html_api_level,
        )
        return schedule

    @property
    def html_api_level(self) -> int:
        """Lowest API level that can see every scheduled variant."""

        return self._html_api_level

    def min_level(self, name: str) -> int:
        return self._levels.get(name, 0)

    def is_visible(self, name: str, api_level: int) -> bool:
        """Return whether ``name`` is listed for a caller at ``api_level``."""

        return self.min_level(name) <= api_level

    def visible(self, registry: VariantRegistry, api_level: int) -> list[Variant]:
        """Registered variants a caller at ``api_level`` may discover, by name."""

        return [variant for variant in registry if self.is_visible(variant.name, api_level)]

    def items(self) -> list[tuple[str, int]]:
        return list(self._levels.items())
