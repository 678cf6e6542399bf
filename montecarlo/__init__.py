"""Monte Carlo engine for single-factor stochastic processes.

Generates discretized sample paths, accumulates empirical histograms over
many paths, and exposes the factory protocol an external optimizer uses to
calibrate process parameters. Also serves the table of primitive polynomials
modulo two that low-discrepancy generators are seeded from.
"""

from montecarlo.accumulator import HistogramAccumulator
from montecarlo.calibration import (
    CalibrationFactory,
    GbmCalibrationFactory,
    OrnsteinUhlenbeckCalibrationFactory,
    SimulatedLikelihood,
    estimate_gbm_parameters,
)
from montecarlo.config import SimulationConfig
from montecarlo.exceptions import (
    CapacityExceeded,
    DeviateSourceExhausted,
    FunctionEvaluationFailure,
    MonteCarloError,
)
from montecarlo.polynomials import PolynomialTable, PolynomialTier
from montecarlo.process import GeometricBrownianMotion, OrnsteinUhlenbeck, StochasticProcess
from montecarlo.simulation import (
    GaussianDeviates,
    Path,
    PathEnsemble,
    PathGenerator,
    SequenceDeviates,
    UniformDeviates,
)

__version__ = "1.0.0"
__all__ = [
    "HistogramAccumulator",
    "CalibrationFactory",
    "GbmCalibrationFactory",
    "OrnsteinUhlenbeckCalibrationFactory",
    "SimulatedLikelihood",
    "estimate_gbm_parameters",
    "SimulationConfig",
    "CapacityExceeded",
    "DeviateSourceExhausted",
    "FunctionEvaluationFailure",
    "MonteCarloError",
    "PolynomialTable",
    "PolynomialTier",
    "GeometricBrownianMotion",
    "OrnsteinUhlenbeck",
    "StochasticProcess",
    "GaussianDeviates",
    "Path",
    "PathEnsemble",
    "PathGenerator",
    "SequenceDeviates",
    "UniformDeviates",
]
