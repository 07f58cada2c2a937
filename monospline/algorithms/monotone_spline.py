"""Monotone cubic spline interpolation (Fritsch-Carlson).

The spline passes through every control point exactly. When the control
points are monotonic (y non-decreasing or non-increasing) the interpolated
curve is monotonic as well, so it never overshoots between samples. This
makes it a good fit for animation curves, response curves and smoothing of
sparse lookup tables.

Notes
-----
- Tangents start as the average of the neighbouring secants and are then
  limited so that (m[i]/d[i], m[i+1]/d[i]) lies inside the circle of radius
  `MONOTONICITY_RADIUS`. See Fritsch & Carlson (1980),
  https://en.wikipedia.org/wiki/Monotone_cubic_interpolation
- Evaluation never extrapolates: queries outside [x[0], x[-1]] are clamped
  to the end values and NaN queries return NaN.
- Invalid control points raise `InvalidInput` (a `ValueError`).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)

MONOTONICITY_RADIUS = 3.0

__all__ = [
    'InvalidInput',
    'MonotoneSpline',
    'create_monotone_cubic_spline',
    'monotone_cubic_interpolate',
    'resample_uniform',
    'spline_from_dataframe',
    'MONOTONICITY_RADIUS',
]


class InvalidInput(ValueError):
    """Control points that cannot define a monotone cubic spline."""


# ---------------------
# small private helpers
# ---------------------

def _as_1d_float(a: Optional[ArrayLike], name: str) -> NDArray[np.float64]:
    if a is None:
        raise InvalidInput(f"{name} is missing")
    try:
        arr = np.array(a, dtype=float).reshape(-1)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{name} is not numeric: {e}") from e
    if arr.size == 0:
        raise InvalidInput(f"{name} is empty")
    return arr


def _require_strictly_increasing(x: NDArray[np.float64]) -> None:
    if not np.all(np.isfinite(x)):
        raise InvalidInput("x contains non-finite values")
    with np.errstate(over='ignore'):
        dx = np.diff(x)
    bad = np.flatnonzero(dx <= 0)
    if bad.size:
        i = int(bad[0])
        raise InvalidInput(
            f"x must be strictly increasing, got x[{i}]={float(x[i])!r} and x[{i + 1}]={float(x[i + 1])!r}"
        )
    if not np.all(np.isfinite(dx)):
        raise InvalidInput("x spacing too large for float64")


def _require_finite_slopes(y: NDArray[np.float64], d: NDArray[np.float64]) -> None:
    # Non-finite y is allowed to propagate; only overflow from finite points is rejected.
    bad = np.flatnonzero(~np.isfinite(d) & np.isfinite(y[:-1]) & np.isfinite(y[1:]))
    if bad.size:
        i = int(bad[0])
        raise InvalidInput(
            f"slope between x[{i}] and x[{i + 1}] overflows float64 (x spacing too small or y step too large)"
        )


def _prepare_xy(x: Optional[ArrayLike],
                y: Optional[ArrayLike]) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    x = _as_1d_float(x, 'x')
    y = _as_1d_float(y, 'y')
    if x.size != y.size:
        raise InvalidInput(f"x and y must have the same length, got {x.size} and {y.size}")
    if x.size < 2:
        raise InvalidInput(f"At least 2 control points are required, got {x.size}")
    _require_strictly_increasing(x)
    return x, y


def _secant_slopes(x: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
    # Overflow shows up as inf and is rejected by _require_finite_slopes.
    with np.errstate(over='ignore'):
        return np.diff(y) / np.diff(x)


def _initial_tangents(d: NDArray[np.float64]) -> NDArray[np.float64]:
    """Average of the secants on either side; one-sided at the ends."""
    m = np.empty(d.size + 1, dtype=float)
    m[0] = d[0]
    m[1:-1] = 0.5 * d[:-1] + 0.5 * d[1:]
    m[-1] = d[-1]
    return m


def _limit_tangents(d: NDArray[np.float64], m: NDArray[np.float64]) -> Tuple[int, int]:
    """Apply the Fritsch-Carlson correction to `m` in place.

    Segments are visited left to right; a rescale on segment i also changes
    the left tangent of segment i+1, so the order matters.

    Returns
    -------
    (flat, rescaled) : tuple of int
        Number of flat segments whose tangents were zeroed, and number of
        segments whose tangents were pulled back onto the circle.
    """
    flat = rescaled = 0
    for i in range(d.size):
        di = d[i]
        if di == 0.0:
            m[i] = 0.0
            m[i + 1] = 0.0
            flat += 1
            continue
        a = m[i] / di
        b = m[i + 1] / di
        h = math.hypot(a, b)
        if h > MONOTONICITY_RADIUS:
            # t * m equals t * a * d; it stays finite when a or b overflows.
            t = MONOTONICITY_RADIUS / h
            m[i] = t * m[i]
            m[i + 1] = t * m[i + 1]
            rescaled += 1
    return flat, rescaled


def _frozen_copy(a: ArrayLike) -> NDArray[np.float64]:
    arr = np.array(a, dtype=float).reshape(-1)
    arr.setflags(write=False)
    return arr


# ---------------------
# public API
# ---------------------

@dataclass(frozen=True, eq=False)
class MonotoneSpline:
    """A monotone cubic Hermite spline through fixed control points.

    Build instances with `create_monotone_cubic_spline` (or
    `MonotoneSpline.from_points`); the constructor only validates the
    arrays and does not compute tangents.

    Attributes
    ----------
    x : ndarray
        Control point abscissae, strictly increasing, read-only.
    y : ndarray
        Control point ordinates, read-only.
    m : ndarray
        Tangent at each control point, read-only.
    """

    x: NDArray[np.float64]
    y: NDArray[np.float64]
    m: NDArray[np.float64]

    def __post_init__(self) -> None:
        # Own private read-only copies so callers cannot break the invariants.
        for name in ('x', 'y', 'm'):
            object.__setattr__(self, name, _frozen_copy(getattr(self, name)))
        if not (self.x.size == self.y.size == self.m.size):
            raise InvalidInput(
                f"x, y and m must have the same length, got {self.x.size}, {self.y.size} and {self.m.size}"
            )
        if self.x.size < 2:
            raise InvalidInput(f"At least 2 control points are required, got {self.x.size}")
        _require_strictly_increasing(self.x)

    @classmethod
    def from_points(cls, points: ArrayLike) -> 'MonotoneSpline':
        """Build a spline from a sequence of (x, y) pairs."""
        if points is None:
            raise InvalidInput("points is missing")
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise InvalidInput(f"points must have shape (n, 2), got {pts.shape}")
        return create_monotone_cubic_spline(pts[:, 0], pts[:, 1])

    @property
    def n_points(self) -> int:
        return int(self.x.size)

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self.x[0]), float(self.x[-1])

    def control_points(self) -> NDArray[np.float64]:
        """Return an (n, 2) copy of the control points."""
        return np.column_stack((self.x, self.y))

    def interpolate(self, t: float) -> float:
        """Interpolate Y = f(t), clamping t to the domain of the spline.

        NaN is returned unchanged.
        """
        t = float(t)
        if math.isnan(t):
            return t
        x, y, m = self.x, self.y, self.m
        n = x.size
        if t <= x[0]:
            return float(y[0])
        if t >= x[n - 1]:
            return float(y[n - 1])

        # Index of the last control point left of t; the boundary tests
        # above keep i + 1 inside the arrays.
        i = 0
        while t >= x[i + 1]:
            i += 1
            if t == x[i]:
                return float(y[i])

        h = x[i + 1] - x[i]
        u = (t - x[i]) / h
        return float(
            (y[i] * (1 + 2 * u) + h * m[i] * u) * (1 - u) * (1 - u)
            + (y[i + 1] * (3 - 2 * u) + h * m[i + 1] * (u - 1)) * u * u
        )

    def __call__(self, x_new: ArrayLike):
        """Vectorized `interpolate`.

        Returns a float for scalar input and an array of the input's shape
        otherwise.
        """
        t = np.asarray(x_new, dtype=float)
        scalar_input = t.ndim == 0
        tt = np.atleast_1d(t)

        x, y, m = self.x, self.y, self.m
        tc = np.clip(tt, x[0], x[-1])
        i = np.clip(np.searchsorted(x, tc, side='right') - 1, 0, x.size - 2)
        x0, x1 = x[i], x[i + 1]
        h = x1 - x0
        u = (tc - x0) / h
        out = ((y[i] * (1 + 2 * u) + h * m[i] * u) * (1 - u) ** 2
               + (y[i + 1] * (3 - 2 * u) + h * m[i + 1] * (u - 1)) * u ** 2)

        out[tt <= x[0]] = y[0]
        out[tt >= x[-1]] = y[-1]
        nan_mask = np.isnan(tt)
        out[nan_mask] = tt[nan_mask]

        if scalar_input:
            return float(out[0])
        return out.reshape(t.shape)

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        lo, hi = self.domain
        return f"MonotoneSpline(n_points={self.n_points}, domain=({lo!r}, {hi!r}))"


def create_monotone_cubic_spline(x: ArrayLike, y: ArrayLike) -> MonotoneSpline:
    """Create a monotone cubic spline from a set of control points.

    The spline passes through each control point exactly. If the control
    points are monotonic, the interpolated values are monotonic too.

    Parameters
    ----------
    x : array_like
        X components of the control points, strictly increasing and finite.
    y : array_like
        Y components of the control points, same length as `x`.

    Returns
    -------
    MonotoneSpline
        The spline; it holds its own copies of `x` and `y`.

    Raises
    ------
    InvalidInput
        If x or y is missing, their lengths differ, there are fewer than
        2 points, or x is not strictly increasing.
    """
    x, y = _prepare_xy(x, y)
    d = _secant_slopes(x, y)
    _require_finite_slopes(y, d)
    m = _initial_tangents(d)
    flat, rescaled = _limit_tangents(d, m)
    logger.debug(
        f"Built monotone spline over {x.size} points "
        f"({flat} flat segments, {rescaled} tangent pairs rescaled)"
    )
    return MonotoneSpline(x, y, m)


def monotone_cubic_interpolate(x: ArrayLike, y: ArrayLike, x_new: ArrayLike) -> NDArray[np.float64]:
    """Monotone cubic interpolation of (x, y) at `x_new`, clamped outside [x[0], x[-1]]."""
    spline = create_monotone_cubic_spline(x, y)
    return np.asarray(spline(x_new), dtype=float)


def resample_uniform(
    x: ArrayLike,
    y: ArrayLike,
    num_points: int,
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Resample (x, y) onto `num_points` evenly spaced points within [x[0], x[-1]].

    Parameters
    ----------
    num_points : int
        Size of the output grid, at least 2.

    Returns
    -------
    (x_uniform, y_uniform) : tuple of ndarray
    """
    if num_points < 2:
        raise ValueError("num_points must be at least 2")
    spline = create_monotone_cubic_spline(x, y)
    lo, hi = spline.domain
    x_new = np.linspace(lo, hi, int(num_points), dtype=float)
    return x_new, spline(x_new)


def spline_from_dataframe(
    df: pd.DataFrame,
    x_column: str = 'x',
    y_column: str = 'y',
    *,
    sort: bool = False,
) -> MonotoneSpline:
    """
    Convenience function to build a spline from two DataFrame columns.

    Parameters
    ----------
    df : pd.DataFrame
        Table holding the control points, one per row
    x_column : str
        Name of the abscissa column
    y_column : str
        Name of the ordinate column
    sort : bool
        Order rows by `x_column` before building. Duplicate x values are
        still rejected.

    Returns
    -------
    MonotoneSpline
    """
    for col in (x_column, y_column):
        if col not in df.columns:
            raise InvalidInput(f"Column '{col}' not found in DataFrame")

    xs = pd.to_numeric(df[x_column], errors='coerce')
    ys = pd.to_numeric(df[y_column], errors='coerce')
    if xs.isna().any() or ys.isna().any():
        raise InvalidInput("DataFrame contains non-numeric or NaN values")

    x = xs.to_numpy(dtype=float)
    y = ys.to_numpy(dtype=float)
    if sort:
        order = np.argsort(x, kind='stable')
        if np.any(order != np.arange(order.size)):
            logger.debug(f"Reordered {order.size} rows of '{x_column}' into ascending order")
        x, y = x[order], y[order]
    return create_monotone_cubic_spline(x, y)
