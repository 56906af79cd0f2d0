"""
Ingestion layer: where weekly series come from.

Submodules:
  synthetic: reproducible flat / trend / season_trend generator
  series_csv: CSV loader (date, value columns)
  provider: picks CSV or synthetic from DataConfig
"""
