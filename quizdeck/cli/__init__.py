"""Command-line entry points for quizdeck."""

from .main import main

__all__ = ["main"]
