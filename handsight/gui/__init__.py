"""PySide6 front-end for the analysis workflow."""

from .app import run_app

__all__ = ["run_app"]
