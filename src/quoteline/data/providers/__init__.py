"""Data provider implementations."""

from .goldapi import GoldApiProvider
from .marketstack import MarketstackProvider

__all__ = ["GoldApiProvider", "MarketstackProvider"]
