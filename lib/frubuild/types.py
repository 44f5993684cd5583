from typing import Optional, Union

from .logging import LengthExceeded

__all__ = [
    "TypeCode", "TypedField",
    "StrWithEncoding", "PackedAscii", "Latin1String",
]

class TypeCode(object):
    """ Type bits (7:6) of FRU type/length byte. """
    BINARY          = 0x00
    BCD_PLUS        = 0x40
    SIX_BIT_ASCII   = 0x80
    EIGHT_BIT_ASCII = 0xc0

    MASK        = 0xc0
    LENGTH_MASK = 0x3f

    NAMES = {
        BINARY:          'binary',
        BCD_PLUS:        'bcdplus',
        SIX_BIT_ASCII:   'packed',
        EIGHT_BIT_ASCII: 'latin1',
    }

    @classmethod
    def name(cls, code): # type: (int) -> str
        return cls.NAMES[code & cls.MASK]

class TypedField(object):
    """ Type/length byte followed by at most 63 bytes of payload. """
    encoding = None # type: int
    payload  = None # type: bytes

    def __init__(self, encoding, payload = b''): # type: (int, Union[bytes, bytearray]) -> None
        if encoding & ~TypeCode.MASK:
            raise ValueError("Invalid type code 0x%02x" % (encoding,))
        if len(payload) > TypeCode.LENGTH_MASK:
            raise LengthExceeded("%d bytes do not fit into type/length field (at most %d allowed)"
                % (len(payload), TypeCode.LENGTH_MASK))
        self.encoding = encoding
        self.payload  = bytes(payload)

    @classmethod
    def absent(cls): # type: () -> TypedField
        """ Marker of predefined field that has no value. """
        return cls(TypeCode.EIGHT_BIT_ASCII)

    @property
    def length(self): # type: () -> int
        return len(self.payload)

    @property
    def type_length(self): # type: () -> int
        return self.encoding | self.length

    def is_absent(self): # type: () -> bool
        return self.type_length == TypeCode.EIGHT_BIT_ASCII

    def to_bytes(self): # type: () -> bytearray
        return bytearray([self.type_length]) + self.payload

    def __len__(self): # type: () -> int
        return self.length + 1

    def __eq__(self, other): # type: (object) -> bool
        if not isinstance(other, TypedField):
            return NotImplemented
        return (self.encoding, self.payload) == (other.encoding, other.payload)

    def __repr__(self): # type: () -> str
        return "TypedField(%s, %r)" % (TypeCode.name(self.encoding), self.payload)

class StrWithEncoding(str):
    """ Just ordinary python representation of string,
        enhanced with encoding that will be used to encode to. """
    encoding = None # type: Optional[int]

class PackedAscii(StrWithEncoding):
    """ String that will be encoded using 6-bit packed ascii encoding. """
    encoding = TypeCode.SIX_BIT_ASCII

class Latin1String(StrWithEncoding):
    """ String that will be encoded using 8-bit ascii+latin1 encoding. """
    encoding = TypeCode.EIGHT_BIT_ASCII
