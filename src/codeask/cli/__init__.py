"""Command line interface for codeask."""

from .app import app, main

__all__ = ["app", "main"]
