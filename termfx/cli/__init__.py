"""Command line interface for termfx."""
