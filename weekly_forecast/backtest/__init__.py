"""
Forecast evaluation framework.

Modules
-------
metrics     MAPE, RMSE, pair filtering and the MetricResult type.
splits      Holdout train/test split with horizon clamping.
evaluator   Rolling and holdout evaluation of the SMA and Holt-Winters engines.
"""
