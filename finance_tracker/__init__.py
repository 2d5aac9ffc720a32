"""
Finance Tracker Core

Data-access core of a personal finance tracker: the tag registry that
categorizes expenses and gains, and the monthly cycle keys that group
mandatory expenses month over month.

DESIGN PRINCIPLES:
1. Storage is injected, never global
2. Repository calls return results, they don't raise
3. Time comes from an injectable clock
4. Every change is auditable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
