"""Pytest configuration and fixtures for spline tests."""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def peak_data():
    """Non-monotonic data with a single peak."""
    x = np.array([1.0, 2.0, 3.0])
    y = np.array([1.0, 4.0, 2.0])
    return x, y


@pytest.fixture
def step_data():
    """Monotonic data with a flat run in the middle."""
    x = np.array([0.0, 1.0, 2.0, 3.0])
    y = np.array([0.0, 1.0, 1.0, 2.0])
    return x, y


@pytest.fixture
def monotonic_data():
    """Generate monotonic data for monotonicity-preserving tests."""
    x = np.array([0, 1, 2, 3, 4])
    y = np.array([0, 0.5, 0.8, 0.9, 1.0])
    return x, y


@pytest.fixture
def decreasing_data():
    """Non-increasing data with a sharp drop."""
    x = np.array([0.0, 1.0, 1.5, 4.0, 5.0])
    y = np.array([10.0, 9.5, 2.0, 1.9, 0.0])
    return x, y


@pytest.fixture
def steep_data():
    """Data whose averaged tangents violate the Fritsch-Carlson bound."""
    x = np.array([0.0, 1.0, 2.0])
    y = np.array([0.0, 1.0, 11.0])
    return x, y


@pytest.fixture
def sparse_quadratic():
    """Generate sparse quadratic data for interpolation tests."""
    x = np.array([0, 1, 2, 3, 4, 5])
    y = x ** 2  # y = x^2
    return x, y


@pytest.fixture
def dense_grid():
    """Generate dense grid for interpolation."""
    return np.linspace(0, 5, 50)


@pytest.fixture
def small_dataset():
    """Smallest valid dataset."""
    x = np.array([1, 2])
    y = np.array([1, 4])
    return x, y


@pytest.fixture
def empty_dataset():
    """Empty dataset for error testing."""
    return np.array([]), np.array([])


@pytest.fixture
def unsorted_data():
    """Unsorted data for error testing."""
    x = np.array([1, 3, 2, 4])
    y = np.array([1, 9, 4, 16])
    return x, y


@pytest.fixture
def duplicate_data():
    """Sorted data with a repeated x value."""
    x = np.array([0, 1, 1, 2])
    y = np.array([0, 1, 2, 3])
    return x, y


@pytest.fixture
def lookup_table():
    """Response curve stored as a table, rows out of order."""
    return pd.DataFrame({
        'input': [0.75, 0.0, 1.0, 0.25, 0.5],
        'gain': [0.9, 0.0, 1.0, 0.2, 0.6],
    })

