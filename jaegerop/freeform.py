"""Free-form options that keep their hierarchical JSON structure."""

from __future__ import annotations

import json
from typing import Any, Mapping

from .options import _decode_text, _marshal_json


class FreeForm:
    """A JSON document kept as written, unlike :class:`Options` which flattens it."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._raw = ""
        if data is not None:
            try:
                self._raw = _marshal_json(data)
            except (TypeError, ValueError):
                self._raw = ""

    @classmethod
    def from_json(cls, raw: str | bytes | bytearray) -> "FreeForm":
        form = cls()
        form._raw = _decode_text(raw)
        return form

    def to_json(self) -> str:
        return self._raw or "{}"

    def is_empty(self) -> bool:
        return not self._raw or self._raw == "{}"

    def get_map(self) -> dict[str, Any]:
        """Decode the document into a dictionary."""
        if not self._raw:
            raise ValueError("unexpected end of JSON input")
        data = json.loads(self._raw)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(
                f"cannot unmarshal {type(data).__name__} into a map: a JSON object is required"
            )
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FreeForm):
            return NotImplemented
        return self._raw == other._raw

    def __repr__(self) -> str:
        return f"FreeForm({self._raw!r})"