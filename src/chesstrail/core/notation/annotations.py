"""Annotation payload decoding.

Annotations are brace comments in movetext.  In structured mode the text
between the braces is a JSON document (``\\}`` lets it contain closing
braces); it is parsed as data and validated, never evaluated.
"""

from __future__ import annotations

from typing import TypeAlias

from pydantic import JsonValue, TypeAdapter, ValidationError

from chesstrail.core.errors import AnnotationFormatError

Annotation: TypeAlias = JsonValue

_JSON_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


def unescape(text: str) -> str:
    """Resolve the ``\\{`` and ``\\}`` escapes allowed inside a comment."""
    return text.replace("\\{", "{").replace("\\}", "}")


def decode_annotation(text: str, *, structured: bool = False) -> Annotation:
    """Turn raw comment text into an annotation payload."""
    if not structured:
        return text
    try:
        return _JSON_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise AnnotationFormatError(
            f"Invalid structured annotation {text!r}: {exc.errors()[0]['msg']}"
        ) from exc
