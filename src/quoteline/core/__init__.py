"""Core fetch orchestration."""

from quoteline.core.fetcher import FetchReport, QuoteFetcher, build_fetcher

__all__ = ["FetchReport", "QuoteFetcher", "build_fetcher"]
