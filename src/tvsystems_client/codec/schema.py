"""
Declarative canonical byte schema.

Each transaction variant declares an ordered tuple of :class:`FieldSpec`
entries. The order is the order the node hashes and verifies; changing it
changes every signature and transaction id.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..enums import FieldKind, StringEncoding


@dataclass(frozen=True)
class FieldSpec:
    """
    One entry of a canonical byte schema.

    Attributes:
        name: Wire name of the field (used in error messages)
        attr: Model attribute holding the value
        kind: Semantic value type
        encoding: Rendering policy for STRING fields
    """

    name: str
    attr: str
    kind: FieldKind
    encoding: Optional[StringEncoding] = None

    def __post_init__(self):
        if self.kind is FieldKind.STRING and self.encoding is None:
            object.__setattr__(self, "encoding", StringEncoding.RAW_UTF8)


def int8(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.INT8)


def uint8(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.UINT8)


def int16(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.INT16)


def int32(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.INT32)


def int64(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.INT64)


def base58_fixed(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.STRING, StringEncoding.BASE58_FIXED)


def base58_sized(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.STRING, StringEncoding.BASE58_LENGTH_PREFIXED)


def raw_string(name: str, attr: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, attr or name, FieldKind.STRING, StringEncoding.RAW_UTF8)


# Fields shared by every variant
TYPE = uint8("type")
FEE = int64("fee")
FEE_SCALE = int16("feeScale", "fee_scale")
TIMESTAMP = int64("timestamp")
