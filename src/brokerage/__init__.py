"""Brokerage portfolio accounting and valuation engine."""

__version__ = "0.1.0"
