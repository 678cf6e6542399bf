"""Setup script for montecarlo-engine package."""

from setuptools import setup, find_packages

setup(
    name="montecarlo-engine",
    version="1.0.0",
    description="Monte Carlo simulation and calibration of single-factor stochastic processes",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Monte Carlo Engine Contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "yfinance>=0.2.0",
        "matplotlib>=3.3.0",
        "pandas>=1.3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "montecarlo=montecarlo.cli:main",
        ],
    },
)
