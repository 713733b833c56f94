"""Host glue wiring editor events to the history manager."""

from .eligibility import DocumentFilter
from .recorder import LocationRecorder

__all__ = ["DocumentFilter", "LocationRecorder"]
