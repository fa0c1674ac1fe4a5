"""Exception types raised by the matching engine and its collaborators."""


class CareerMatchError(Exception):
    """Base class for all Career Match AI errors."""


class MatchGenerationFailed(CareerMatchError):
    """Match generation could not produce a ranking (no partial result)."""


class NoCareersAvailable(MatchGenerationFailed):
    """The catalog returned no active careers."""


class ProviderError(CareerMatchError):
    """A single embedding provider failed to produce a vector."""


class AllEmbeddingProvidersFailed(CareerMatchError):
    """Every configured embedding provider failed (or none is configured)."""


class DimensionMismatch(CareerMatchError, ValueError):
    """Two vectors of different length were compared."""


class CareerNotFound(CareerMatchError):
    """A career id does not exist in the catalog."""
