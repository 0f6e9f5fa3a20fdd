"""Helper functions exposed to templates.

Each helper checks its own argument types and raises
:class:`HelperArgumentError` on a mismatch; the renderer turns that
into a ``PARAM_TYPE_MISMATCH`` render error.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from tinct.core.color import Color

UINT_MAX = 2**32 - 1


class HelperArgumentError(TypeError):
    """A helper received an argument of the wrong type."""

    def __init__(self, helper: str, param: str, expected: str) -> None:
        super().__init__(f"helper '{helper}' expected '{expected}' value for param '{param}'")
        self.helper = helper
        self.param = param
        self.expected = expected


def _number(helper: str, param: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise HelperArgumentError(helper, param, "number")
    return float(value)


def _string(helper: str, param: str, value: Any) -> str:
    if not isinstance(value, str):
        raise HelperArgumentError(helper, param, "string")
    return value


def hex_byte(number: Any) -> str:
    if isinstance(number, bool) or not isinstance(number, int) or not 0 <= number <= 255:
        raise HelperArgumentError("hex", "number", "u8")
    return format(number, "x")


def div(dividend: Any, divisor: Any) -> float:
    a = _number("div", "dividend", dividend)
    b = _number("div", "divisor", divisor)
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def mul(multiplicand: Any, multiplier: Any) -> float:
    return _number("mul", "multiplicand", multiplicand) * _number("mul", "multiplier", multiplier)


def to_uint(number: Any) -> int:
    value = _number("int", "number", number)
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return UINT_MAX
    return min(math.trunc(value), UINT_MAX)


def lighten(color: Any, amount: Any) -> str:
    hex_color = _string("lighten", "color", color)
    return Color.from_hex(hex_color).lighten(_number("lighten", "amount", amount)).to_hex()


def darken(color: Any, amount: Any) -> str:
    hex_color = _string("darken", "color", color)
    return Color.from_hex(hex_color).darken(_number("darken", "amount", amount)).to_hex()


HELPERS: dict[str, Callable[..., Any]] = {
    "hex": hex_byte,
    "div": div,
    "mul": mul,
    "int": to_uint,
    "lighten": lighten,
    "darken": darken,
}
