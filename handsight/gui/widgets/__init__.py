"""Widgets composing the main window."""
