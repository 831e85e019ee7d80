"""
Triangular Arbitrage Scanner.

Enumerates closed currency-conversion cycles from an exchange's pair
graph and revalues them against live top-of-book data, alerting when
the compounded, fee-adjusted return crosses a threshold.
"""

__version__ = "1.0.0"
