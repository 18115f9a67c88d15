"""Pytest fixtures for seeder tests."""

import random
from datetime import date

import pytest

from app.shared.seeder.config import SeederConfig


@pytest.fixture
def rng():
    """Create a seeded random number generator."""
    return random.Random(42)


@pytest.fixture
def small_config():
    """Create a small seeder config for fast tests."""
    return SeederConfig(
        seed=42,
        customers=5,
        products=4,
        orders=20,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
        categories=["Books", "Toys"],
        batch_size=10,
    )
