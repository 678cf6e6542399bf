"""
Tests for plotting paths and histograms.
"""

import pytest
from pathlib import Path
from unittest.mock import patch

from montecarlo.accumulator import HistogramAccumulator
from montecarlo.process import GeometricBrownianMotion
from montecarlo.simulation import GaussianDeviates, PathEnsemble, PathGenerator
from montecarlo.visualization import plot_ensemble, plot_histogram


class TestVisualization:
    """Test suite for the plotting helpers."""

    @pytest.fixture
    def ensemble(self):
        """Simulate a small GBM ensemble."""
        generator = PathGenerator(
            GeometricBrownianMotion(100.0, 0.05, 0.2), 30, 1.0, GaussianDeviates(4)
        )
        return PathEnsemble.simulate(generator, 8)

    @patch('montecarlo.visualization.plt.show')
    def test_plot_ensemble_show(self, mock_show, ensemble):
        """Test displaying the ensemble plot."""
        plot_ensemble(ensemble, show_plot=True)

        mock_show.assert_called_once()

    @patch('montecarlo.visualization.plt.savefig')
    @patch('montecarlo.visualization.plt.close')
    def test_plot_ensemble_save_output(self, mock_close, mock_savefig, ensemble, tmp_path):
        """Test saving the ensemble plot to file."""
        output = tmp_path / "plots" / "paths.png"

        plot_ensemble(ensemble, output_path=str(output), show_plot=False, max_paths=3)

        mock_savefig.assert_called_once_with(
            str(Path(output).resolve()), dpi=300, bbox_inches='tight'
        )
        mock_close.assert_called_once()
        assert output.parent.is_dir()

    @patch('montecarlo.visualization.plt.show')
    @patch('montecarlo.visualization.plt.close')
    def test_plot_histogram(self, mock_close, mock_show):
        """Test plotting bucket counts without displaying."""
        accumulator = HistogramAccumulator(precision=1)
        accumulator.add_values([0.1, 0.1, 0.2, 0.5])

        plot_histogram(accumulator, show_plot=False, title="buckets")

        mock_show.assert_not_called()
        mock_close.assert_called_once()
