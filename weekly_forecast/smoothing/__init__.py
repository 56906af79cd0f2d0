"""
Smoothing engines.

Modules
-------
sma           Simple moving average: historical fit, one-step-ahead, flat forecast.
holt_winters  Additive Holt-Winters: level/trend/seasonal recursion and forecast.

Every function is pure: series and parameters in, fresh lists out.
Positions without a value are ``None``.
"""
