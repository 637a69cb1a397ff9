"""Synthetic e-commerce log generator for exercising log-analytics pipelines."""

__version__ = "1.0.0"
