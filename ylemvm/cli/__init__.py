"""ylemvm CLI — Typer-based driver for the build step.

Provides the ``ylemvm`` command with subcommands for compiling the
embedded release constants, refreshing release list snapshots, and
inspecting platforms and download URLs.

All output uses Rich for formatted terminal display.
"""
