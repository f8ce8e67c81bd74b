"""
Rendering of structured metadata into ``key = value`` text.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

MetadataValue = Union[str, list["MetadataValue"], dict[str, "MetadataValue"], Any]
Metadata = dict[str, MetadataValue]

REDACTED_PLACEHOLDER = "<private>"


class ContentMode(str, Enum):
    """Whether structured metadata is rendered or replaced with a placeholder."""

    REDACTED = "redacted"
    EXPOSED = "exposed"


def render_value(value: MetadataValue) -> str:
    """Render a single metadata value. Nested lists and dicts use bracket notation."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return "[" + ", ".join(f"{k}: {render_value(v)}" for k, v in value.items()) + "]"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(v) for v in value) + "]"
    return str(value)


def prettify(metadata: Mapping[str, MetadataValue]) -> str | None:
    """Join ``key = value`` pairs with a single space, in iteration order. Empty gives ``None``."""
    if not metadata:
        return None
    return " ".join(f"{key} = {render_value(value)}" for key, value in metadata.items())
