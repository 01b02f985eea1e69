"""
Command Line Interface Package

Entry point ``findash`` for importing transactions and viewing the dashboard
figures from a terminal.
"""

from .main import main

__all__ = ["main"]
