"""Exceptions raised by the ski planning pipeline and HTTP layer."""


class SkiPlannerError(Exception):
    """Base class for all Ski Planner errors."""


class GenerationError(SkiPlannerError):
    """The text generation capability could not produce a response.

    Covers missing credentials, provider faults (network, quota, throttling)
    and malformed model output. The original exception, if any, is kept as
    ``__cause__``.
    """


class ValidationError(SkiPlannerError):
    """An incoming request body is missing required fields or is malformed."""
