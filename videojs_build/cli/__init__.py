"""Command-line entry points, one per build profile."""
