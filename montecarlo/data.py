"""Loading observed price series for calibration."""

import logging
from pathlib import Path
from typing import Union

import pandas as pd
import yfinance as yf

logger = logging.getLogger(__name__)


def fetch_closes(ticker: str, history_period: str = "100d") -> pd.Series:
    """
    Fetch historical closing prices from Yahoo Finance.

    Parameters
    ----------
    ticker : str
        Ticker symbol (e.g., 'MSFT', 'AMZN')
    history_period : str, default='100d'
        Time period to look back (e.g., '100d', '1y')

    Returns
    -------
    pd.Series
        Closing prices, oldest first

    Raises
    ------
    ValueError
        If the ticker is invalid or data cannot be fetched
    """
    try:
        history = yf.Ticker(ticker).history(history_period)
    except Exception as e:
        raise ValueError(f"Error fetching data for '{ticker}': {str(e)}") from e

    if history.empty or "Close" not in history.columns:
        raise ValueError(
            f"No data found for ticker '{ticker}'. Please check the ticker symbol."
        )

    closes = history["Close"].dropna()
    logger.info("Fetched %d closes for %s over %s", len(closes), ticker, history_period)
    return closes


def load_closes(csv_path: Union[str, Path], column: str = "Close") -> pd.Series:
    """
    Load closing prices from a CSV file.

    Parameters
    ----------
    csv_path : str or Path
        CSV file with a header row
    column : str, default='Close'
        Column holding the prices

    Returns
    -------
    pd.Series
        Prices in file order with missing values removed

    Raises
    ------
    ValueError
        If the file lacks the column or holds no prices
    """
    frame = pd.read_csv(csv_path)
    if column not in frame.columns:
        raise ValueError(f"Column '{column}' not found in {csv_path}")

    closes = pd.to_numeric(frame[column], errors="coerce").dropna()
    if closes.empty:
        raise ValueError(f"No prices found in column '{column}' of {csv_path}")

    logger.info("Loaded %d closes from %s", len(closes), csv_path)
    return closes.reset_index(drop=True)
