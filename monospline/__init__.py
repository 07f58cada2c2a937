"""Monotone cubic spline interpolation."""

from .algorithms import (
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

__version__ = "0.1.0"
