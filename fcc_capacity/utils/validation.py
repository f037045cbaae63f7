# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Payload validation helpers using Pydantic models.
Turns raw roster store records into validated, immutable engine inputs.
"""

from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import RosterValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(validation_error: ValidationError, prefix: str = "") -> List[Dict[str, Any]]:
    """
    Format Pydantic validation errors for callers.

    Args:
        validation_error: Pydantic ValidationError
        prefix: Path prepended to each field (e.g. ``children.3``)

    Returns:
        List of formatted error dictionaries
    """
    errors = []

    for error in validation_error.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        if prefix:
            field_path = f"{prefix}.{field_path}" if field_path else prefix
        errors.append({
            "field": field_path,
            "message": error["msg"],
            "type": error["type"],
            "input": error.get("input")
        })

    return errors


def validate_payload(model_class: Type[ModelT], payload: Any, prefix: str = "") -> ModelT:
    """
    Validate one raw payload against a model.

    Raises:
        RosterValidationError: If the payload does not validate
    """
    if isinstance(payload, model_class):
        return payload
    try:
        return model_class.model_validate(payload)
    except ValidationError as e:
        raise RosterValidationError(
            f"Invalid {model_class.__name__} payload",
            format_validation_errors(e, prefix)
        ) from e


def validate_many(model_class: Type[ModelT], payloads: Iterable[Any], prefix: str) -> List[ModelT]:
    """
    Validate a collection, reporting every failing item at once.

    Raises:
        RosterValidationError: If any item does not validate
    """
    items: List[ModelT] = []
    errors: List[Dict[str, Any]] = []

    for index, payload in enumerate(payloads):
        try:
            items.append(validate_payload(model_class, payload, f"{prefix}.{index}"))
        except RosterValidationError as e:
            errors.extend(e.errors)

    if errors:
        raise RosterValidationError(f"Invalid {model_class.__name__} payloads", errors)
    return items
