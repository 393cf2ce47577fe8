"""
String-to-value converters used for typed option retrieval.

Option values are always stored as strings. ``convert`` turns such a
string into a scalar according to a ScalarType tag (or one of the
builtins ``bool``, ``int``, ``float`` and ``str``).
"""

import enum
import re
import struct
import types
from typing import Any, Callable, Union


class ScalarType(enum.Enum):
    """The closed set of scalar types with a default converter."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    CHAR = "char"
    STRING = "string"


Converter = Callable[[str], Any]
TypeSpec = Union[ScalarType, type]

_INTEGER_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*")


def _strict_bool(value: str) -> bool:
    """
    Parse a string to a boolean value strictly.

    Accepts 'true' and 'false' in any letter case (surrounding whitespace
    ignored), as well as '1' and '0'. Raises ValueError for anything else.
    """
    text = value.strip().lower()
    if text in ("true", "1"):
        return True
    elif text in ("false", "0"):
        return False
    else:
        raise ValueError(
            f"Invalid boolean value: '{value}'. Must be one of: True, true, False, false, 1, 0"
        )


def _ranged_int(bits: int, signed: bool) -> Converter:
    """Return a converter that parses an integer and checks it fits the width."""
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1

    def parse_int(value: str) -> int:
        if not _INTEGER_PATTERN.fullmatch(value):
            raise ValueError(f"Invalid integer value: {value!r}")
        result = int(value)
        if not low <= result <= high:
            raise ValueError(
                f"Value {value!r} is out of range for a {bits}-bit "
                f"{'signed' if signed else 'unsigned'} integer [{low}, {high}]"
            )
        return result

    return parse_int


def _float32(value: str) -> float:
    try:
        return struct.unpack("f", struct.pack("f", float(value)))[0]
    except OverflowError:
        raise ValueError(f"Value {value!r} is out of range for a 32-bit float") from None


def _char(value: str) -> str:
    if len(value) != 1:
        raise ValueError(f"Expected a single character, got {value!r}")
    return value


def _identity(value: str) -> str:
    return value


DEFAULT_CONVERTERS: types.MappingProxyType[ScalarType, Converter] = types.MappingProxyType(
    {
        ScalarType.BOOL: _strict_bool,
        ScalarType.INT8: _ranged_int(8, signed=True),
        ScalarType.INT16: _ranged_int(16, signed=True),
        ScalarType.INT32: _ranged_int(32, signed=True),
        ScalarType.INT64: _ranged_int(64, signed=True),
        ScalarType.UINT8: _ranged_int(8, signed=False),
        ScalarType.UINT16: _ranged_int(16, signed=False),
        ScalarType.UINT32: _ranged_int(32, signed=False),
        ScalarType.UINT64: _ranged_int(64, signed=False),
        ScalarType.FLOAT32: _float32,
        ScalarType.FLOAT64: float,
        ScalarType.CHAR: _char,
        ScalarType.STRING: _identity,
    }
)

_BUILTIN_TYPES: dict[type, ScalarType] = {
    bool: ScalarType.BOOL,
    int: ScalarType.INT64,
    float: ScalarType.FLOAT64,
    str: ScalarType.STRING,
}


def get_converter(type_: TypeSpec) -> Converter:
    """
    Look up the default converter for a scalar type.

    Args:
        type_: A ScalarType tag, or one of bool, int, float, str.

    Returns:
        Converter: Function turning an option's string value into ``type_``.

    Raises:
        TypeError: If no default converter exists for ``type_``.
    """
    if isinstance(type_, type) and type_ in _BUILTIN_TYPES:
        type_ = _BUILTIN_TYPES[type_]
    if isinstance(type_, ScalarType):
        return DEFAULT_CONVERTERS[type_]
    name = getattr(type_, "__name__", repr(type_))
    raise TypeError(
        f"No default converter for type {name}. Pass a converter function instead"
    )


def convert(value: str, type_: TypeSpec) -> Any:
    """Convert ``value`` with the default converter for ``type_``."""
    return get_converter(type_)(value)
