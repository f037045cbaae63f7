# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import pytest
from datetime import date
from itertools import count

from dateutil.relativedelta import relativedelta

from fcc_capacity.models.entities import CapacityConfig, Child
from fcc_capacity.models.enums import ProgramType

# Set test environment
os.environ['ENVIRONMENT'] = 'test'


@pytest.fixture
def as_of():
    """Fixed evaluation date used across tests."""
    return date(2026, 6, 15)


@pytest.fixture
def make_child(as_of):
    """Factory building a Child aged ``months`` (and ``days``) at the fixture date."""
    ids = count(1)

    def _make(months: int = 36, days: int = 0, **overrides) -> Child:
        index = next(ids)
        dob = as_of - relativedelta(months=months, days=days)
        data = {
            "id": f"child-{index}",
            "first_name": "Child",
            "last_name": str(index),
            "date_of_birth": dob,
            "enrollment_date": max(dob, date(2025, 1, 6)),
        }
        data.update(overrides)
        return Child(**data)

    return _make


@pytest.fixture
def small_config():
    """Small family program at its licensed maximum of 8."""
    return CapacityConfig(program_type=ProgramType.SMALL_FAMILY, total_capacity=8)


@pytest.fixture
def large_config():
    """Large family program at its licensed maximum of 14."""
    return CapacityConfig(program_type=ProgramType.LARGE_FAMILY, total_capacity=14)


@pytest.fixture
def sample_child_payload():
    """Raw roster record as delivered by the roster store."""
    return {
        "id": "c-100",
        "first_name": "Ana",
        "last_name": "Lima",
        "date_of_birth": "2025-03-10",
        "enrollment_date": "2025-09-02",
        "expected_departure_date": None,
        "notes": "Naps after lunch"
    }
