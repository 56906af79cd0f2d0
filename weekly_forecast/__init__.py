"""Weekly SMA and Holt-Winters forecasting with rolling and holdout evaluation."""

__version__ = "0.1.0"
