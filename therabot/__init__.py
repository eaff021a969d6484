"""
TheraBot - disease prescription documents.
"""

__version__ = "0.1.0"
