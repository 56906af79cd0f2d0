"""
Reporting helpers for the CLI.

Modules
-------
formatters  ASCII tables for series, forecasts and evaluations.
export      JSON-ready dict views of pipeline results.
"""
