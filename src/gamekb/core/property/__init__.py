"""Property cell functionality."""

from gamekb.core.property.cell import PropertyCell

__all__ = [
    "PropertyCell",
]
