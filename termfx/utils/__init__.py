"""Shared utilities for termfx."""
