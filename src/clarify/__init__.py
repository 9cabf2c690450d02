"""
Clarify - user-facing error messages for failed spreadsheet tax formulas.
"""

__version__ = "0.1.0"
