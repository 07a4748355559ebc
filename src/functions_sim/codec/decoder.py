"""Decoding of raw script responses into typed values."""

from __future__ import annotations

import re
from typing import Union

from ..simulation.interfaces import DecodedValue, ReturnType

INTEGER_BITS = 256

_HEX_PAYLOAD = re.compile(r"[0-9a-fA-F]*")


class DecodeError(ValueError):
    """Raised when a response cannot be decoded under the requested type."""


def _resolve_return_type(return_type: Union[ReturnType, str]) -> ReturnType:
    try:
        return ReturnType.parse(return_type)
    except ValueError:
        valid = ",".join(member.value for member in ReturnType)
        raise DecodeError(
            f"'{return_type}' is not valid. Must be one of the following: {valid}"
        ) from None


def _hex_payload(hex_string: str) -> str:
    if not isinstance(hex_string, str) or not hex_string.startswith("0x"):
        raise DecodeError(f"'{hex_string}' is not a valid hexadecimal string")
    payload = hex_string[2:]
    if not _HEX_PAYLOAD.fullmatch(payload):
        raise DecodeError(f"'{hex_string}' is not a valid hexadecimal string")
    return payload


def decode_result(hex_string: str, return_type: Union[ReturnType, str]) -> DecodedValue:
    """Decode ``hex_string`` (``0x``-prefixed) as ``return_type``.

    Integers are big-endian and at most 256 bits; ``int256`` is read as two's
    complement. ``string`` is UTF-8 text and ``bytes`` is returned unchanged.

    Example:
        >>> decode_result("0x2a", "uint256")
        42
    """
    payload = _hex_payload(hex_string)
    resolved = _resolve_return_type(return_type)

    if resolved is ReturnType.BYTES:
        return hex_string

    if resolved is ReturnType.STRING:
        # an unpaired trailing nibble is dropped
        payload = payload[: len(payload) - len(payload) % 2]
        return bytes.fromhex(payload).decode("utf-8", errors="replace")

    bit_length = len(payload) * 4
    if bit_length > INTEGER_BITS:
        raise DecodeError(
            f"'{hex_string}' has '{bit_length}' bits which is too large for {resolved.value}"
        )

    value = int(payload, 16) if payload else 0
    if resolved is ReturnType.INT256 and value >= 1 << (INTEGER_BITS - 1):
        value -= 1 << INTEGER_BITS
    return value


class ResultDecoder:
    """Default ``Decoder`` backed by :func:`decode_result`."""

    def decode(self, hex_string: str, return_type: Union[ReturnType, str]) -> DecodedValue:
        return decode_result(hex_string, return_type)
