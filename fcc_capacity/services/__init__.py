# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - Logging, tracing and payload validation around the domain.
"""

from .capacity_engine import CapacityEngineService, EngineConfig, create_capacity_engine

__all__ = [
    "CapacityEngineService",
    "EngineConfig",
    "create_capacity_engine"
]
