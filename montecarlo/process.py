"""
Single-factor stochastic processes.

Every process exposes the same small capability set: an initial value, a
parameter vector, the drift and diffusion terms of its SDE, and a pure
one-step ``evolve`` rule. ``evolve`` never draws random numbers itself; the
caller supplies the normalized deviate, so replaying the same inputs always
reproduces the same path.
"""

import math
from dataclasses import dataclass
from typing import Protocol, Tuple, runtime_checkable


@runtime_checkable
class StochasticProcess(Protocol):
    """Capability interface shared by all process variants."""

    @property
    def initial_value(self) -> float:
        ...

    @property
    def parameters(self) -> Tuple[float, ...]:
        ...

    def drift(self, t: float, x: float) -> float:
        ...

    def diffusion(self, t: float, x: float) -> float:
        ...

    def evolve(self, t: float, x: float, dt: float, dw: float) -> float:
        ...


@dataclass(frozen=True)
class GeometricBrownianMotion:
    """
    Geometric Brownian motion ``dX = mu X dt + sigma X dW``.

    ``evolve`` uses the exact log-normal transition, so the discretization
    carries no bias regardless of the step size:

        X(t+dt) = X(t) * exp((mu - 0.5*sigma²)*dt + sigma*sqrt(dt)*dw)

    Parameters
    ----------
    x0 : float
        Initial value
    mu : float
        Drift coefficient
    sigma : float
        Volatility coefficient
    """

    x0: float
    mu: float
    sigma: float

    @property
    def initial_value(self) -> float:
        return self.x0

    @property
    def parameters(self) -> Tuple[float, ...]:
        return (self.mu, self.sigma)

    def drift(self, t: float, x: float) -> float:
        return self.mu * x

    def diffusion(self, t: float, x: float) -> float:
        return self.sigma * x

    def evolve(self, t: float, x: float, dt: float, dw: float) -> float:
        drift_term = (self.mu - 0.5 * self.sigma ** 2) * dt
        diffusion_term = self.sigma * math.sqrt(dt) * dw
        return x * math.exp(drift_term + diffusion_term)


@dataclass(frozen=True)
class OrnsteinUhlenbeck:
    """
    Mean-reverting Ornstein-Uhlenbeck process
    ``dX = theta (mean - X) dt + sigma dW``.

    ``evolve`` samples the exact Gaussian transition. With ``theta == 0`` the
    process is an arithmetic Brownian motion.

    Parameters
    ----------
    x0 : float
        Initial value
    theta : float
        Speed of mean reversion
    mean : float
        Long-run level
    sigma : float
        Volatility coefficient
    """

    x0: float
    theta: float
    mean: float
    sigma: float

    @property
    def initial_value(self) -> float:
        return self.x0

    @property
    def parameters(self) -> Tuple[float, ...]:
        return (self.theta, self.mean, self.sigma)

    def drift(self, t: float, x: float) -> float:
        return self.theta * (self.mean - x)

    def diffusion(self, t: float, x: float) -> float:
        return self.sigma

    def evolve(self, t: float, x: float, dt: float, dw: float) -> float:
        if self.theta == 0.0:
            return x + self.sigma * math.sqrt(dt) * dw
        decay = math.exp(-self.theta * dt)
        # stdev of the exact transition
        scale = self.sigma * math.sqrt(-math.expm1(-2.0 * self.theta * dt) / (2.0 * self.theta))
        return self.mean + (x - self.mean) * decay + scale * dw
