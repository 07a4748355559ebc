"""Response decoding."""

from .decoder import DecodeError, ResultDecoder, decode_result

__all__ = ["DecodeError", "ResultDecoder", "decode_result"]
