"""Command line interface for capacity-ratio."""
