"""Utility modules for coltypes."""
