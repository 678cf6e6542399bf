"""Moment-based parameter estimates used to seed calibration."""

from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd


def estimate_gbm_parameters(
    prices: Union[pd.Series, Sequence[float]],
    periods_per_year: int = 252,
) -> Tuple[float, float]:
    """
    Calculate annualized mean return (mu) and volatility (sigma).

    Parameters
    ----------
    prices : pd.Series or sequence of float
        Observed prices, oldest first, one per period
    periods_per_year : int, default=252
        Number of observation periods per year (trading days by default)

    Returns
    -------
    Tuple[float, float]
        Annualized drift and volatility

    Raises
    ------
    ValueError
        If fewer than three prices are given
    """
    prices = pd.Series(prices, dtype=float).dropna()
    if len(prices) < 3:
        raise ValueError("At least three prices are required to estimate parameters")

    returns = prices.pct_change(1).dropna()
    mu = float(returns.mean() * periods_per_year)
    sigma = float(returns.std() * np.sqrt(periods_per_year))
    return mu, sigma
