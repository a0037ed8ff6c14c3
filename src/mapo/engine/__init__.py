"""Evolutionary engines."""
