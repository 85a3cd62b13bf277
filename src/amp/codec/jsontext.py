"""Conversion between JSON text and structured JSON values.

JSON fields travel as minified UTF-8 text. pydantic_core's JSON parser and
serializer provide both directions.
"""

from __future__ import annotations

from typing import Any

import pydantic_core

from ..exceptions import FieldValueError, MalformedJsonError


def dump_json(value: Any) -> bytes:
    """Render a structured value as canonical minified JSON text.

    Raises:
        FieldValueError: If the value holds something JSON cannot represent
    """
    try:
        return pydantic_core.to_json(value)
    except pydantic_core.PydanticSerializationError as e:
        raise FieldValueError(f"Value is not JSON serializable: {e}") from e


def load_json(text: bytes | memoryview) -> Any:
    """Parse JSON text into plain Python objects.

    Raises:
        MalformedJsonError: If the text is not a single valid JSON document,
            including the non-standard NaN and Infinity literals
    """
    try:
        return pydantic_core.from_json(bytes(text), allow_inf_nan=False)
    except ValueError as e:
        raise MalformedJsonError(f"Invalid JSON text: {e}") from e
