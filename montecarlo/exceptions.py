"""Typed failures raised by the Monte Carlo engine."""


class MonteCarloError(Exception):
    """Base class for engine failures."""


class CapacityExceeded(MonteCarloError):
    """Requested polynomial capacity or degree is beyond the available table."""


class FunctionEvaluationFailure(MonteCarloError):
    """A process evolution step failed to produce a valid value."""


class DeviateSourceExhausted(MonteCarloError):
    """A finite deviate source has no more values to hand out."""
