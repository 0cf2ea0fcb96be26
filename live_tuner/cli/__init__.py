"""Command-line interface for live_tuner."""

from .main import main

__all__ = ["main"]
