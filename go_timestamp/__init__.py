"""
Go Binary Timestamp Tool

Estimates the earliest possible build time of a Go binary from the release
dates of its embedded dependencies.
"""

__version__ = "0.1.0"
__author__ = "Imranur Rahman"

from .cli import main

__all__ = ["main"]
