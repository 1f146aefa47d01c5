"""Keymarket CLI — Typer-based command-line interface.

Provides the ``keymarket`` command with a scripted end-to-end demo and a
fee split preview.  All output uses Rich for formatted terminal display.
"""
