"""
Family Budget - Ledger & Analytics Core

A personal finance tracker core: it records income/expense transactions
and savings goals, persists them locally and derives the analytics a
dashboard needs (balance, category breakdown, financial health).

DESIGN PRINCIPLES:
1. Stores own their collections - nobody else mutates them
2. Validate before mutating, persist before returning
3. Persistence failures are surfaced, never swallowed
4. Analytics are pure functions over a snapshot
5. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Family Budget Team"
