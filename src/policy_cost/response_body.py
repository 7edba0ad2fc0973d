# This file renders response payloads as pretty-printed JSON strings.
# It exists so every entry point emits byte-identical bodies for existing consumers.
# Layout follows JavaScript JSON.stringify(value, null, 2): insertion key order, two-space indent, `[]`/`{}` when empty.
# Numbers use the JavaScript Number-to-string rules, so shares like 2.79e-05 print as plain decimals.

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

INDENT = "  "

# JavaScript prints plain digits for decimal exponents in (-6, 21] and exponent form outside.
_MIN_PLAIN_EXPONENT = -6
_MAX_PLAIN_EXPONENT = 21


def format_number(value: float | int) -> str:
    """Format a number the way JavaScript's `String(number)` does."""

    if isinstance(value, float) and not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr gives the shortest digits that round-trip, as JavaScript does.
    magnitude = abs(value)
    exact = Decimal(repr(magnitude)) if isinstance(magnitude, float) else Decimal(magnitude)
    _, digit_tuple, exponent = exact.as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k

    if k <= n <= _MAX_PLAIN_EXPONENT:
        text = digits + "0" * (n - k)
    elif 0 < n <= _MAX_PLAIN_EXPONENT:
        text = f"{digits[:n]}.{digits[n:]}"
    elif _MIN_PLAIN_EXPONENT < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        mantissa = digits[0] if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return sign + text


def _render(value: Any, depth: int) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)

    inner = INDENT * (depth + 1)
    closing = INDENT * depth
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        items = [
            f"{inner}{json.dumps(str(key), ensure_ascii=False)}: {_render(item, depth + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(items) + "\n" + closing + "}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [f"{inner}{_render(item, depth + 1)}" for item in value]
        return "[\n" + ",\n".join(items) + "\n" + closing + "]"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_body(payload: Mapping[str, Any]) -> str:
    return _render(payload, 0)
