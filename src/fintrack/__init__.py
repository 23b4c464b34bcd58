"""Fintrack - personal finance tracker with a unified activity feed."""

__version__ = "0.1.0"
