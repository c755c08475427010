"""Utility modules shared across check-report."""
