"""Calibration protocol between external optimizers and processes."""

from montecarlo.calibration.estimation import estimate_gbm_parameters
from montecarlo.calibration.factory import (
    CalibrationFactory,
    GbmCalibrationFactory,
    OrnsteinUhlenbeckCalibrationFactory,
)
from montecarlo.calibration.objective import SimulatedLikelihood

__all__ = [
    "CalibrationFactory",
    "GbmCalibrationFactory",
    "OrnsteinUhlenbeckCalibrationFactory",
    "SimulatedLikelihood",
    "estimate_gbm_parameters",
]
