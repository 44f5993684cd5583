""" Field encoder: turns single value into FRU type/length field. """

import codecs
from typing import Callable, Dict, Optional, Tuple, Union

from .logging import ConfigurationError, EncoderError, LengthExceeded
from .types   import TypeCode, TypedField
from .utils   import Packed # registers packed_ascii codec

__all__ = [
    "StrEncoders", "ENCODINGS", "encode_field", "field_length",
    "decode_packed_ascii",
]

""" Encoding names accepted by configuration and command line. """
ENCODINGS = {
    'packed': TypeCode.SIX_BIT_ASCII,
    'ascii6': TypeCode.SIX_BIT_ASCII,
    'latin1': TypeCode.EIGHT_BIT_ASCII,
    'ascii8': TypeCode.EIGHT_BIT_ASCII,
} # type: Dict[str, int]

class StrEncoders: # {{{
    """ Encodes into various FRU string representations. """
    @staticmethod
    def packed(text): # type: (str) -> bytes
        return codecs.encode(text.upper(), Packed.name)

    @staticmethod
    def latin1(text): # type: (str) -> bytes
        return codecs.encode(text, 'latin1')

    @classmethod
    def getencoder(cls, code): # type: (int) -> Callable[[str], bytes]
        if code == TypeCode.SIX_BIT_ASCII:
            return cls.packed
        if code == TypeCode.EIGHT_BIT_ASCII:
            return cls.latin1
        if code in (TypeCode.BINARY, TypeCode.BCD_PLUS):
            raise EncoderError("encoding %s is reserved, it is not supported by encoder"
                % (TypeCode.name(code),))
        raise EncoderError("unknown encoding 0x%02x" % (code,))
# }}}

def field_length(length): # type: (int) -> int
    """ Validates explicit field width. Full type/length byte of 8-bit
        field (0xc0 | width) is accepted as well. """
    if length < 0:
        raise EncoderError("negative field length %d" % (length,))
    if length & TypeCode.MASK == TypeCode.EIGHT_BIT_ASCII:
        length &= TypeCode.LENGTH_MASK
    if length > TypeCode.LENGTH_MASK:
        raise LengthExceeded("field length %d too big (at most %d allowed)"
            % (length, TypeCode.LENGTH_MASK))
    return length

def encode_field(value, encoding, length = None): # type: (str, int, Optional[int]) -> TypedField
    """ Encodes `value` using `encoding` (TypeCode).

        When `length` is given (and not zero), value is stored in field of
        exactly `length` bytes, right padded by spaces. This is supported
        only by 8-bit encoding. Raises LengthExceeded when value does not fit. """
    if not isinstance(value, str):
        raise EncoderError("invalid type %s, expected string" % (type(value).__name__,))
    encoder = StrEncoders.getencoder(encoding)
    try:
        b = encoder(value)
    except UnicodeError as e:
        raise ConfigurationError("cannot encode string %r with encoding %s: %s"
            % (value, TypeCode.name(encoding), e.reason))
    if length:
        if encoding != TypeCode.EIGHT_BIT_ASCII:
            raise EncoderError("explicit field length is supported only with 8-bit encoding")
        length = field_length(length)
        if len(b) > length:
            raise LengthExceeded("value %r has %d bytes, which does not fit into field of %d bytes"
                % (value, len(b), length))
        b = b + b' ' * (length - len(b))
    if len(b) > TypeCode.LENGTH_MASK:
        raise LengthExceeded("value %r is too long (%d bytes, at most %d allowed)"
            % (value, len(b), TypeCode.LENGTH_MASK))
    return TypedField(encoding, b)

def decode_packed_ascii(payload, count = None): # type: (Union[bytes, bytearray], Optional[int]) -> str
    """ Inverse of 6-bit packing. Packed data do not carry number of characters,
        pass `count` to drop padding character of 3-character tail. """
    ret = codecs.decode(bytes(payload), Packed.name)
    if count is not None:
        ret = ret[:count]
    return ret
