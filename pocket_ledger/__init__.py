"""
Pocket Ledger - Source Package

A personal finance tracker for logging income and expenses,
reviewing monthly summaries and exporting reports.

DESIGN PRINCIPLES:
1. Aggregation is pure and repeatable
2. Reject bad input at the entry gate, never silently fix it
3. Storage failures degrade to an empty ledger, never a crash
4. Premium features are gated at a single boundary
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Pocket Ledger Team"
