"""Protocol-based interfaces for variant engines."""

from diplovariants.interfaces.engine import IVariantEngine

__all__ = ["IVariantEngine"]
