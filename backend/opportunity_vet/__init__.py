"""Deterministic decision core for vetting business ideas."""

__version__ = "0.1.0"
