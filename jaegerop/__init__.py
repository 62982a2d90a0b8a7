"""Jaeger instance types, resource builders, settings and cluster capability detection."""

__version__ = "0.1.0"