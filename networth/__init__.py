"""
Net Worth Tracker - Source Package

Tracks a household's assets and liabilities, derives summary metrics
and projects future net worth under loan amortization and recurring
expense assumptions.

DESIGN PRINCIPLES:
1. The Portfolio is the only owner of assets, liabilities and snapshots
2. Derived values are recomputed at the single point of mutation
3. Missing data is a normal state, broken data is an error
4. Every mutation is written through to storage
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Net Worth Tracker Team"
