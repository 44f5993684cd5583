import codecs
import datetime
from typing import Callable, Tuple, Type, Union

__all__ = ["UTC", "checksum", "div8", "get_aligned_size"]

UTC = datetime.timezone.utc

def checksum(b): # type: (Union[bytes, bytearray]) -> int
    """ Calculate checksum byte c, so that sum(b) + c is zero (modulo 256). """
    return (256 * len(b) - sum(b)) % 256

def div8(i): # type: (int) -> int
    """ Return i/8, raise exception if i is not divisible by 8. """
    assert i % 8 == 0
    return i // 8

def get_aligned_size(size, align = 8): # type: (int, int) -> int
    """ Smallest multiple of `align` that is not lower than `size`. """
    return (size + align - 1) // align * align

# {{{ codecs
class CustomCodec(object):
    """ Simple custom codec. Only stateless encoding and decoding is supported. """
    name = None # type: str # to be filled by @register

    @classmethod
    def charerror(cls, text, pos, msg): # type: (str, int, str) -> UnicodeEncodeError
        """ UnicodeEncodeError helper for error in single character. """
        return UnicodeEncodeError(cls.name, text, pos, pos+1, msg)

def register(codec_name): # type: (str) -> Callable[[Type[CustomCodec]], Type[CustomCodec]]
    """ Registers CustomCodec with name `codec_name`. """
    def decorator(cls): # type: (Type[CustomCodec]) -> Type[CustomCodec]
        cls.name = codec_name
        def search(encoding_name): # type: (str) -> codecs.CodecInfo
            if encoding_name == codec_name:
                return codecs.CodecInfo(cls.encode, cls.decode, name=cls.name) # type: ignore
            else:
                return None # type: ignore
        codecs.register(search)
        return cls
    return decorator

@register('packed_ascii')
class Packed(CustomCodec):
    """ packed_ascii encodes codepoints in range(32,96), packing 4 characters
        in 3 bytes in little endian, i.e. lowest significant bit (bit 0)
        of first character is lowest significant bit (bit 0) of first byte.
        Then bit 0 of second character is bit 6 of first byte, bit 2 of second
        character is bit 0 of second byte and so on.

        Trailing group of 1, 2 or 3 characters takes 1, 2 or 3 bytes. Decoding
        cannot tell 3 characters from 4 characters ending with space, so the
        decoder always returns 4 characters per 3 bytes. """

    @classmethod
    def encode(cls, text, error="strict"): # type: (str, str) -> Tuple[bytes, int]
        error_handler = codecs.lookup_error(error)
        ret = bytearray()
        bits = 0
        for i in range(len(text)):
            c = ord(text[i]) - 32
            if c < 0 or c >= (1 << 6):
                e = cls.charerror(text, i, 'ordinal not in range(32, 96)')
                repl, l = error_handler(e)
                c = ord(repl) - 32
                if c < 0 or c >= (1 << 6) or len(repl) != 1:
                    raise e
            if bits > 0:
                ret[-1] += (c << bits) % 256
                c = c >> (8 - bits)
            if bits != 2:
                ret.append(c)
            else:
                assert c == 0
            bits = (bits + 6) % 8
        return bytes(ret), len(text)

    @staticmethod
    def decode(text, errors="strict"): # type: (Union[bytearray, bytes], str) -> Tuple[str, int]
        bits   = 0
        bitval = 0
        ret = bytearray()
        for b in bytearray(text):
            bitval += b << bits
            bits += 8
            while bits >= 6:
                ret.append((bitval % (1 << 6)) + 32)
                bitval = bitval >> 6
                bits -= 6
        return ret.decode('ascii'), len(text)
# }}}
