# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Calendar date helpers shared by models and domain logic.
"""

import re
from datetime import date, datetime
from typing import Any

from dateutil.relativedelta import relativedelta

from ..exceptions import InvalidInputError

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_iso_date(value: Any, field_name: str = "date") -> date:
    """
    Coerce a boundary value into a calendar date.

    Args:
        value: A ``date`` or an ISO-8601 ``YYYY-MM-DD`` string
        field_name: Name used in the error message

    Returns:
        Parsed date

    Raises:
        InvalidInputError: If the value is not a date or a valid ISO date string
    """
    if isinstance(value, datetime):
        raise InvalidInputError(f"{field_name} must be a calendar date, not a timestamp")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not ISO_DATE_PATTERN.match(text):
            raise InvalidInputError(f"{field_name} must be an ISO date (YYYY-MM-DD), got {value!r}")
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise InvalidInputError(f"{field_name} is not a valid calendar date: {value!r}") from e
    raise InvalidInputError(f"{field_name} must be a date or ISO date string, got {type(value).__name__}")


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping to the last day of shorter months."""
    return start + relativedelta(months=months)
