"""fragstats - track daily shooter stats and a derived skill rating."""

__version__ = "0.1.0"
