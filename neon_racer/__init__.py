"""Neon Racer -- frame-driven arcade racing simulation engine."""

__version__ = "0.4.0"
