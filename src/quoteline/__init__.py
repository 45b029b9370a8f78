"""quoteline: ticker, end-of-day and spot metal price lookups."""

__version__ = "0.1.0"
