"""Promptkeeper server - prompt library with folders"""

__version__ = "0.1.0"
