"""Translate failures of the external engine into the service error taxonomy."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from diplovariants.errors import EngineFailureError, VariantServiceError

logger = logging.getLogger(__name__)


@contextmanager
def engine_call(variant: str, operation: str) -> Iterator[None]:
    """Wrap a delegated engine call.

    Errors the service raises itself pass through untouched; anything else
    the engine raises becomes an ``EngineFailureError``.
    """

    try:
        yield
    except VariantServiceError:
        raise
    except Exception as exc:
        logger.exception("variant engine failed to %s %s", operation, variant)
        raise EngineFailureError(variant, operation) from exc
