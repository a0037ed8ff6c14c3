"""Variation operators (real encoding only)."""
