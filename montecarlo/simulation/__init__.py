"""Simulation engine for generating and collecting Monte Carlo paths."""

from montecarlo.simulation.deviates import (
    DeviateSource,
    GaussianDeviates,
    SequenceDeviates,
    UniformDeviates,
)
from montecarlo.simulation.ensemble import PathEnsemble
from montecarlo.simulation.path import Path
from montecarlo.simulation.path_generator import PathGenerator

__all__ = [
    "DeviateSource",
    "GaussianDeviates",
    "SequenceDeviates",
    "UniformDeviates",
    "Path",
    "PathEnsemble",
    "PathGenerator",
]
