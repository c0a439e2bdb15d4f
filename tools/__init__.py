"""Lime-soda softening tools."""
