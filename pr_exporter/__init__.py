"""Prometheus exporter for open GitHub pull requests."""

__version__ = "1.0.0"
