"""Hex-encoded primitives and pydantic base models used by test fixtures."""

from re import sub
from typing import Any, ClassVar, SupportsBytes, Type, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic_core.core_schema import (
    PlainValidatorFunctionSchema,
    no_info_plain_validator_function,
    to_string_ser_schema,
)

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | list[int]
NumberConvertible: TypeAlias = str | bytes | SupportsBytes | int


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """Convert multiple types into bytes."""
    if input_bytes is None:
        raise ValueError("Cannot convert `None` input to bytes")

    if isinstance(input_bytes, (bytes, list, SupportsBytes)):
        return bytes(input_bytes)

    if isinstance(input_bytes, str):
        # Fixtures sometimes split long hex strings with whitespace
        input_bytes = sub(r"\s+", "", input_bytes)
        if input_bytes.startswith(("0x", "0X")):
            input_bytes = input_bytes[2:]
        if len(input_bytes) % 2 == 1:
            input_bytes = "0" + input_bytes
        return bytes.fromhex(input_bytes)

    raise ValueError("invalid type for `bytes`")


def to_number(input_number: NumberConvertible) -> int:
    """
    Convert multiple types into a number.

    Strings are hexadecimal when prefixed with `0x` and decimal otherwise.
    """
    if isinstance(input_number, bool):
        raise ValueError("invalid type for `number`")
    if isinstance(input_number, int):
        return input_number
    if isinstance(input_number, str):
        if input_number.startswith(("0x", "0X")):
            return int(input_number[2:], 16)
        return int(input_number, 10)
    if isinstance(input_number, (bytes, SupportsBytes)):
        return int.from_bytes(bytes(input_number), byteorder="big")
    raise ValueError("invalid type for `number`")


class ToStringSchema:
    """
    Type converter to add a simple pydantic schema that correctly
    parses and serializes the type.
    """

    @staticmethod
    def __get_pydantic_core_schema__(
        source_type: Any, handler: GetCoreSchemaHandler
    ) -> PlainValidatorFunctionSchema:
        """Call the class constructor and append the serialization schema."""
        return no_info_plain_validator_function(
            source_type,
            serialization=to_string_ser_schema(),
        )


class HexNumber(int, ToStringSchema):
    """
    Non-negative integer read from a hexadecimal or decimal string, like the
    `intrinsicGas` field of a transaction test.
    """

    def __new__(cls, input_number: NumberConvertible):
        """Create a new HexNumber object."""
        value = to_number(input_number)
        if value < 0:
            raise ValueError(f"negative number {value}")
        return super(HexNumber, cls).__new__(cls, value)

    def __str__(self) -> str:
        """Return the hexadecimal representation of the number."""
        return self.hex()

    def hex(self) -> str:
        """Return the hexadecimal representation of the number."""
        return hex(self)


class Bytes(bytes, ToStringSchema):
    """Bytes of variable length, read from and written as hex strings."""

    def __new__(cls, input_bytes: BytesConvertible = b""):
        """Create a new Bytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(Bytes, cls).__new__(cls, to_bytes(input_bytes))

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(Bytes, self).__hash__()

    def __str__(self) -> str:
        """Return the hexadecimal representation of the bytes."""
        return self.hex()

    def hex(self, *args, **kwargs) -> str:
        """Return the hexadecimal representation of the bytes."""
        return "0x" + super().hex(*args, **kwargs)


T = TypeVar("T", bound="FixedSizeBytes")


class FixedSizeBytes(Bytes):
    """Bytes of a fixed length, read from and written as hex strings."""

    byte_length: ClassVar[int]

    def __class_getitem__(cls, length: int) -> Type["FixedSizeBytes"]:
        """Create a new FixedSizeBytes class with the given length."""

        class Sized(cls):  # type: ignore
            byte_length = length

        return Sized

    def __new__(cls: Type[T], input_bytes: BytesConvertible) -> T:
        """Create a new FixedSizeBytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        value = to_bytes(input_bytes)
        if len(value) != cls.byte_length:
            raise ValueError(
                f"expected {cls.byte_length} bytes but got {len(value)}"
            )
        return bytes.__new__(cls, value)

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(FixedSizeBytes, self).__hash__()


class Address(FixedSizeBytes[20]):  # type: ignore
    """An account address, with or without the `0x` prefix."""

    pass


class Hash(FixedSizeBytes[32]):  # type: ignore
    """A 32-byte digest, with or without the `0x` prefix."""

    pass


class CamelModel(BaseModel):
    """
    A base model that converts field names to camel case when serializing.

    For example, the field name `homestead_block` in a Python model will be
    represented as `homesteadBlock` when it is serialized to json.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )
