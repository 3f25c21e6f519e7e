"""Utility functions for the visibility graph analysis."""

from .time import IntervalTimer

__all__ = ["IntervalTimer"]
