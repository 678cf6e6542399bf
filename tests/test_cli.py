"""
Tests for the command-line interface.
"""

import pytest
import numpy as np
from unittest.mock import patch

from montecarlo.cli import main, parse_args, validate_args


class TestParseArgs:
    """Test suite for argument parsing and validation."""

    def test_simulate_defaults(self):
        """Test the defaults of the simulate command."""
        args = parse_args(["simulate"])

        assert args.process == "gbm"
        assert args.time_steps == 252
        assert args.num_paths == 500
        assert args.seed == 20
        assert args.duration == 1.0

    def test_calibrate_defaults(self):
        """Test the defaults of the calibrate command."""
        args = parse_args(["calibrate", "MSFT"])

        assert args.ticker == "MSFT"
        assert args.time_steps == 2
        assert args.num_paths == 200
        assert args.history_period == "100d"
        assert not hasattr(args, "duration")

    def test_calibrate_needs_one_source(self):
        """Test that exactly one of ticker and CSV is required."""
        with pytest.raises(ValueError, match="either a ticker or --csv"):
            validate_args(parse_args(["calibrate"]))
        with pytest.raises(ValueError, match="either a ticker or --csv"):
            validate_args(parse_args(["calibrate", "MSFT", "--csv", "prices.csv"]))

    def test_simulate_rejects_bad_config(self):
        """Test validation of run parameters."""
        with pytest.raises(ValueError):
            validate_args(parse_args(["simulate", "--num-paths", "0"]))
        with pytest.raises(ValueError, match="top"):
            validate_args(parse_args(["simulate", "--top", "-1"]))
        with pytest.raises(ValueError, match="Output directory"):
            validate_args(parse_args(["simulate", "--output", "/nonexistent/dir/plot.png"]))


class TestMain:
    """Test suite for the CLI entry point."""

    def test_table(self, capsys):
        """Test inspecting a small polynomial table."""
        assert main(["table", "--capacity", "5", "--degree", "4"]) == 0

        out = capsys.readouterr().out
        assert "Tier: 4 | Capacity: 6" in out
        assert "degree  4: 2 polynomials" in out
        assert "1 4" in out

    def test_table_capacity_too_large(self, capsys):
        """Test that an unsupported capacity exits with an error."""
        assert main(["table", "--capacity", "9000000"]) == 1

        assert "Error:" in capsys.readouterr().err

    def test_simulate_without_plot(self, capsys):
        """Test a small headless simulation."""
        code = main([
            "simulate", "--num-paths", "20", "--time-steps", "10", "--top", "3", "--no-plot",
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "Terminal mean" in out
        assert "Most populated buckets" in out

    @patch('montecarlo.visualization.plt.savefig')
    def test_simulate_saves_plot(self, mock_savefig, tmp_path, capsys):
        """Test that an output path triggers a saved plot."""
        output = tmp_path / "paths.png"

        code = main([
            "simulate", "--process", "ou", "--x0", "0.5", "--num-paths", "5",
            "--time-steps", "10", "--no-plot", "--output", str(output),
        ])

        assert code == 0
        mock_savefig.assert_called_once()
        assert "Plot saved to" in capsys.readouterr().out

    def test_calibrate_from_csv(self, tmp_path, capsys):
        """Test evaluating the likelihood on prices from a file."""
        prices = 100.0 * np.exp(np.cumsum(np.random.default_rng(1).normal(0.0, 0.01, 30)))
        csv_path = tmp_path / "prices.csv"
        csv_path.write_text("Close\n" + "\n".join(f"{p:.4f}" for p in prices) + "\n")

        code = main([
            "calibrate", "--csv", str(csv_path), "--num-paths", "20", "--bandwidth", "1.0",
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "Observations: 30 prices" in out
        assert "Moment estimates" in out
        assert "Negative log-likelihood at start point [0.1, 0.1]" in out

    @patch('montecarlo.data.yf.Ticker')
    def test_calibrate_fetch_failure(self, mock_ticker, capsys):
        """Test that a failed download exits with an error."""
        mock_ticker.side_effect = Exception("Ticker not found")

        assert main(["calibrate", "TEST"]) == 1

        assert "Error fetching data" in capsys.readouterr().err
