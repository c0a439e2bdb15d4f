"""Shared constants, settings and exceptions."""
