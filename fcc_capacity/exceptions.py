# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Exceptions raised when engine input is malformed.

Regulatory violations are never raised; they are reported as findings on
the compliance status.
"""

from typing import Any, Dict, List, Optional


class InvalidInputError(ValueError):
    """Raised when an argument is outside the engine's input domain."""
    pass


class RosterValidationError(InvalidInputError):
    """Raised when a raw roster or capacity payload fails validation."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []
