"""
Tests for loading observed price series.
"""

import pytest
import numpy as np
import pandas as pd
from unittest.mock import Mock, patch

from montecarlo.data import fetch_closes, load_closes


class TestFetchCloses:
    """Test suite for fetch_closes."""

    @pytest.fixture
    def sample_stock_data(self):
        """Create sample stock price data for testing."""
        dates = pd.date_range('2023-01-01', periods=100, freq='D')
        prices = 100 + np.cumsum(np.random.default_rng(0).standard_normal(100) * 0.5)
        return pd.DataFrame({
            'Close': prices,
            'Open': prices * 0.99,
            'High': prices * 1.01,
            'Low': prices * 0.98,
        }, index=dates)

    @patch('montecarlo.data.yf.Ticker')
    def test_fetch_success(self, mock_ticker, sample_stock_data):
        """Test successful price fetching."""
        mock_ticker_instance = Mock()
        mock_ticker_instance.history.return_value = sample_stock_data
        mock_ticker.return_value = mock_ticker_instance

        closes = fetch_closes('TEST', '100d')

        mock_ticker.assert_called_once_with('TEST')
        mock_ticker_instance.history.assert_called_once_with('100d')
        assert len(closes) == 100
        np.testing.assert_array_equal(closes.to_numpy(), sample_stock_data['Close'].to_numpy())

    @patch('montecarlo.data.yf.Ticker')
    def test_fetch_drops_missing_closes(self, mock_ticker, sample_stock_data):
        """Test that missing closes are removed."""
        sample_stock_data.iloc[3, 0] = np.nan
        mock_ticker.return_value.history.return_value = sample_stock_data

        assert len(fetch_closes('TEST')) == 99

    @patch('montecarlo.data.yf.Ticker')
    def test_fetch_empty_data(self, mock_ticker):
        """Test handling of empty stock data."""
        mock_ticker_instance = Mock()
        mock_ticker_instance.history.return_value = pd.DataFrame()
        mock_ticker.return_value = mock_ticker_instance

        with pytest.raises(ValueError, match="No data found"):
            fetch_closes('TEST')

    @patch('montecarlo.data.yf.Ticker')
    def test_fetch_invalid_ticker(self, mock_ticker):
        """Test handling of invalid ticker."""
        mock_ticker.side_effect = Exception("Ticker not found")

        with pytest.raises(ValueError, match="Error fetching data"):
            fetch_closes('TEST')


class TestLoadCloses:
    """Test suite for load_closes."""

    def test_load_csv(self, tmp_path):
        """Test reading prices in file order."""
        csv_path = tmp_path / "prices.csv"
        csv_path.write_text("Date,Close\n2024-01-01,100.0\n2024-01-02,\n2024-01-03,101.5\n")

        closes = load_closes(csv_path)

        assert list(closes) == [100.0, 101.5]
        assert list(closes.index) == [0, 1]

    def test_custom_column(self, tmp_path):
        """Test reading a differently named column."""
        csv_path = tmp_path / "prices.csv"
        csv_path.write_text("price\n1.0\n2.0\nbad\n3.0\n")

        assert list(load_closes(csv_path, column="price")) == [1.0, 2.0, 3.0]

    def test_missing_column(self, tmp_path):
        """Test that an absent column is reported."""
        csv_path = tmp_path / "prices.csv"
        csv_path.write_text("Open\n1.0\n")

        with pytest.raises(ValueError, match="Column 'Close' not found"):
            load_closes(csv_path)

    def test_no_prices(self, tmp_path):
        """Test that a column without numbers is rejected."""
        csv_path = tmp_path / "prices.csv"
        csv_path.write_text("Close\nn/a\n")

        with pytest.raises(ValueError, match="No prices found"):
            load_closes(csv_path)
