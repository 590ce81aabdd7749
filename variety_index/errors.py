"""Exceptions raised by the variety index pipeline.

Every error here is fatal for a run: the indexes are compared across the
whole panel, so a region-year that cannot be computed stops the pipeline
instead of being dropped.
"""


class VarietyIndexError(Exception):
    """Base class for pipeline errors."""


class MalformedGroupError(VarietyIndexError, ValueError):
    """A (year, region) group has no members or zero total employment."""


class DegenerateIndustryLabelError(VarietyIndexError, ValueError):
    """An industry label is too short to derive any taxonomy code from."""


class MissingMeasureError(VarietyIndexError):
    """A measure is absent for a (year, region) key present in another measure."""
