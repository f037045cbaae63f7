# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Base models with common configuration.
"""

from pydantic import BaseModel, ConfigDict


class EngineModel(BaseModel):
    """Immutable base model for engine inputs and results."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Snapshots are never mutated after construction
        frozen=True,
        str_strip_whitespace=True
    )


class EngineResult(EngineModel):
    """Base model for derived, non-persisted results."""

    def to_payload(self) -> dict:
        """Render as a JSON-ready dict with ISO-8601 dates."""
        return self.model_dump(mode="json")
