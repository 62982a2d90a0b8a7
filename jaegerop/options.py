"""Flattened command-line options for the Jaeger components."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterator


def _format_float(value: float) -> str:
    """Format a float the way the shortest general ('%v') representation does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    mantissa = "".join(str(d) for d in digits)
    point = exponent + len(mantissa)
    prefix = "-" if sign else ""
    exp10 = point - 1

    if exp10 < -4 or exp10 >= 6:
        body = mantissa[0] + ("." + mantissa[1:] if len(mantissa) > 1 else "")
        return f"{prefix}{body}e{'-' if exp10 < 0 else '+'}{abs(exp10):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{mantissa}"
    if point >= len(mantissa):
        return f"{prefix}{mantissa}{'0' * (point - len(mantissa))}"
    return f"{prefix}{mantissa[:point]}.{mantissa[point:]}"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(v) for v in value) + "]"
    if isinstance(value, Mapping):
        items = sorted((str(k), v) for k, v in value.items())
        return "map[" + " ".join(f"{k}:{_format_value(v)}" for k, v in items) + "]"
    return str(value)


def _flatten(entries: Mapping[str, Any], prefix: str | None = None) -> Iterator[tuple[str, str]]:
    for key, value in entries.items():
        full = str(key) if prefix is None else f"{prefix}.{key}"
        if isinstance(value, Mapping):
            yield from _flatten(value, full)
        elif value is not None:
            yield full, _format_value(value)


def _normalize(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def _marshal_json(value: Any) -> str:
    """Compact JSON with sorted keys and HTML-sensitive characters escaped."""
    text = json.dumps(
        _normalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name!r}")


def _decode_text(raw: str | bytes | bytearray) -> str:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8")
    return raw


class Options:
    """Options whose nested keys are flattened into dot-separated names."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        self._opts: dict[str, str] = dict(_flatten(entries or {}))
        self._raw: str = ""

    @classmethod
    def from_json(cls, raw: str | bytes | bytearray) -> "Options":
        """Parse a JSON object, keeping numbers exactly as written."""
        text = _decode_text(raw)
        entries = json.loads(
            text, parse_int=str, parse_float=str, parse_constant=_reject_constant
        )
        if entries is None:
            entries = {}
        if not isinstance(entries, dict):
            raise ValueError(
                f"cannot unmarshal {type(entries).__name__} into options: a JSON object is required"
            )
        options = cls(entries)
        options._raw = text
        return options

    def filter(self, prefix: str) -> "Options":
        """Keep only the entries under ``prefix.`` or ``prefix-archive.``."""
        wanted = (f"{prefix}.", f"{prefix}-archive.")
        filtered = Options()
        filtered._opts = {k: v for k, v in self._opts.items() if k.startswith(wanted)}
        return filtered

    def to_json(self) -> str:
        if self._raw:
            return self._raw
        if not self._opts:
            return "{}"
        return _marshal_json(self._opts)

    def to_args(self) -> list[str]:
        return [f"--{key}={value}" for key, value in self._opts.items()]

    def as_map(self) -> dict[str, str]:
        return dict(self._opts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Options):
            return NotImplemented
        return self._opts == other._opts and self._raw == other._raw

    def __repr__(self) -> str:
        return f"Options({self._opts!r})"