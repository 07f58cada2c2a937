"""Interpolation algorithms: monotone cubic splines.

This package hosts the spline construction and evaluation routines.
"""

from .monotone_spline import (
    InvalidInput,
    MonotoneSpline,
    create_monotone_cubic_spline,
    monotone_cubic_interpolate,
    resample_uniform,
    spline_from_dataframe,
)

__all__ = [
    "InvalidInput",
    "MonotoneSpline",
    "create_monotone_cubic_spline",
    "monotone_cubic_interpolate",
    "resample_uniform",
    "spline_from_dataframe",
]
