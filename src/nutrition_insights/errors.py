"""Exception types raised inside the insights engine."""


class InsightsError(Exception):
    """Base class for recoverable insights engine errors."""


class PromptBuildError(InsightsError):
    """Raised when a model prompt cannot be built from an analysis result."""


class InsightGenerationError(InsightsError):
    """Raised when the language model cannot produce a usable narrative."""
