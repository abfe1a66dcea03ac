"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations


class VariantServiceError(Exception):
    """Base class for every error raised by the variant service."""


class ConfigurationError(VariantServiceError):
    """Startup configuration is inconsistent; the service must not start."""


class VariantNotFoundError(VariantServiceError, LookupError):
    """The requested variant name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Variant {name!r} not found")
        self.name = name


class MalformedRequestError(VariantServiceError, ValueError):
    """A submitted phase or order set cannot be interpreted by the service."""


class EngineFailureError(VariantServiceError):
    """The external variant engine failed to start, resolve or render."""

    def __init__(self, variant: str, operation: str) -> None:
        super().__init__(f"Variant engine failed to {operation} {variant!r}")
        self.variant = variant
        self.operation = operation
