"""
Canonical byte encoder for transaction records.

Walks a record's declared ``BYTE_SERIALIZED_FIELDS`` in order and renders each
value by its declared kind. The output is the exact input to signing and to
transaction id derivation.
"""

from __future__ import annotations
import logging
import struct
from typing import Any, Callable, Dict, Iterable

from ..enums import FieldKind, StringEncoding
from ..runtime.errors import SerializationError
from .schema import FieldSpec
from .writer import BinaryWriter

logger = logging.getLogger(__name__)

_INTEGER_WRITERS: Dict[FieldKind, Callable[[BinaryWriter, int], None]] = {
    FieldKind.INT8: BinaryWriter.int8,
    FieldKind.UINT8: BinaryWriter.uint8,
    FieldKind.INT16: BinaryWriter.int16,
    FieldKind.UINT16: BinaryWriter.uint16,
    FieldKind.INT32: BinaryWriter.int32,
    FieldKind.UINT32: BinaryWriter.uint32,
    FieldKind.INT64: BinaryWriter.int64,
    FieldKind.UINT64: BinaryWriter.uint64,
}

_STRING_WRITERS: Dict[StringEncoding, Callable[[BinaryWriter, str], None]] = {
    StringEncoding.RAW_UTF8: BinaryWriter.string_utf8,
    StringEncoding.BASE58_FIXED: BinaryWriter.base58,
    StringEncoding.BASE58_LENGTH_PREFIXED: BinaryWriter.base58_with_size,
}


def _read_field(record: Any, spec: FieldSpec) -> Any:
    fields = getattr(type(record), "model_fields", None)
    if fields is not None:
        declared = spec.attr in fields
    else:
        declared = hasattr(record, spec.attr)
    if not declared:
        raise SerializationError(f"Cannot find field '{spec.name}'")

    value = getattr(record, spec.attr)
    if value is None:
        raise SerializationError(f"The value of field '{spec.name}' is null")
    return value


def encode_field(writer: BinaryWriter, spec: FieldSpec, value: Any) -> None:
    """
    Encode one value according to its schema entry.

    Args:
        writer: Destination writer
        spec: Schema entry
        value: Field value

    Raises:
        SerializationError: If the kind has no encoding rule or the value does not fit it
    """
    if spec.kind in _INTEGER_WRITERS:
        if not isinstance(value, int) or isinstance(value, bool):
            raise SerializationError(
                f"Field '{spec.name}' expects an integer, got {type(value).__name__}"
            )
        try:
            _INTEGER_WRITERS[spec.kind](writer, value)
        except struct.error as e:
            raise SerializationError(
                f"Value {value} of field '{spec.name}' does not fit {spec.kind.value}", cause=e
            ) from e
        return

    if spec.kind is FieldKind.STRING:
        if not isinstance(value, str):
            raise SerializationError(
                f"Field '{spec.name}' expects a string, got {type(value).__name__}"
            )
        string_writer = _STRING_WRITERS.get(spec.encoding)
        if string_writer is None:
            raise SerializationError(f"Unable to serialize field: {spec.name}")
        try:
            string_writer(writer, value)
        except (ValueError, struct.error) as e:
            raise SerializationError(
                f"Field '{spec.name}' cannot be encoded as {spec.encoding.value}", cause=e
            ) from e
        return

    raise SerializationError(f"Unable to serialize field: {spec.name}")


def encode_fields(record: Any, schema: Iterable[FieldSpec]) -> bytes:
    """
    Encode a record against an explicit schema.

    Args:
        record: Object exposing the schema's attributes
        schema: Ordered schema entries

    Returns:
        Canonical bytes

    Raises:
        SerializationError: If a field is missing, unset or unencodable
    """
    writer = BinaryWriter()
    for spec in schema:
        encode_field(writer, spec, _read_field(record, spec))
    return writer.to_bytes()


def encode_transaction(transaction: Any) -> bytes:
    """
    Encode a transaction record into its canonical bytes.

    Args:
        transaction: Record declaring ``BYTE_SERIALIZED_FIELDS``

    Returns:
        Canonical bytes

    Raises:
        SerializationError: If the record has no schema or a field cannot be encoded
    """
    schema = getattr(transaction, "BYTE_SERIALIZED_FIELDS", None)
    if not schema:
        raise SerializationError(
            f"{type(transaction).__name__} declares no byte serialized fields"
        )
    data = encode_fields(transaction, schema)
    logger.debug("Encoded %s into %d bytes", type(transaction).__name__, len(data))
    return data
