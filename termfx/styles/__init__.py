"""Decorative layouts built from the formatting helpers."""

from __future__ import annotations

from termfx.styles.banners import Banner, Position, create_banner

__all__ = ["Banner", "Position", "create_banner"]
