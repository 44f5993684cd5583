import pytest

from frubuild import ConfigurationError, EncoderError, LengthExceeded
from frubuild.encoder import decode_packed_ascii, encode_field, field_length
from frubuild.types import TypeCode, TypedField

SIX   = TypeCode.SIX_BIT_ASCII
EIGHT = TypeCode.EIGHT_BIT_ASCII

def test_absent_marker():
    field = TypedField.absent()
    assert field.to_bytes() == bytearray([0xc0])
    assert len(field) == 1
    assert field.is_absent()

def test_six_bit_packing():
    field = encode_field("IPMI", SIX)
    assert field.encoding == SIX
    assert field.length == 3
    assert field.to_bytes() == bytearray([0x83, 0x29, 0xdc, 0xa6])

def test_six_bit_length_is_packed_byte_count():
    for n in range(1, 12):
        field = encode_field("A" * n, SIX)
        assert field.length == (6 * n + 7) // 8
        assert field.type_length == 0x80 | field.length

def test_six_bit_uppercases():
    assert encode_field("rack", SIX) == encode_field("RACK", SIX)
    assert encode_field("RACK", SIX).payload == b"\x72\x38\xae"

def test_six_bit_round_trip():
    for text in ("A", "AB", "ABC", "IPMI", "HELLO WORLD", " !\"#$%&'()*+,-./0123456789:;<=>?@", "[\\]^_"):
        field = encode_field(text, SIX)
        assert decode_packed_ascii(field.payload, len(text)) == text

def test_six_bit_decode_without_count():
    assert decode_packed_ascii(encode_field("ABC", SIX).payload) == "ABC "
    assert decode_packed_ascii(encode_field("ABCD", SIX).payload) == "ABCD"

def test_six_bit_invalid_character():
    with pytest.raises(ConfigurationError):
        encode_field("café", SIX)
    with pytest.raises(ConfigurationError):
        encode_field("a{b}", SIX)

def test_field_comparison():
    assert encode_field("AB", EIGHT) == TypedField(EIGHT, b"AB")
    assert encode_field("AB", EIGHT) != encode_field("AB", SIX)
    assert TypedField.absent() != b"\xc0"

def test_six_bit_too_long():
    assert encode_field("A" * 84, SIX).length == 63
    with pytest.raises(LengthExceeded):
        encode_field("A" * 85, SIX)

def test_eight_bit_free_length():
    field = encode_field("Acme", EIGHT)
    assert field.to_bytes() == bytearray(b"\xc4Acme")

def test_eight_bit_latin1():
    assert encode_field("Café", EIGHT).payload == b"Caf\xe9"
    with pytest.raises(ConfigurationError):
        encode_field("€", EIGHT)

def test_eight_bit_too_long_is_rejected():
    assert encode_field("x" * 63, EIGHT).length == 63
    with pytest.raises(LengthExceeded):
        encode_field("x" * 64, EIGHT)

def test_eight_bit_explicit_length_pads_with_spaces():
    field = encode_field("SN1", EIGHT, 6)
    assert field.to_bytes() == bytearray(b"\xc6SN1   ")

def test_eight_bit_explicit_length_exact():
    assert encode_field("SN1", EIGHT, 3).to_bytes() == bytearray(b"\xc3SN1")

def test_eight_bit_explicit_length_as_type_length_byte():
    assert encode_field("SN1", EIGHT, 0xc8).payload == b"SN1     "

def test_eight_bit_explicit_length_overflow():
    with pytest.raises(LengthExceeded):
        encode_field("SERIAL", EIGHT, 4)
    with pytest.raises(LengthExceeded):
        encode_field("SERIAL", EIGHT, 64)

def test_zero_length_means_free_length():
    assert encode_field("SN1", EIGHT, 0).length == 3

def test_field_length():
    assert field_length(10) == 10
    assert field_length(0xc0 | 10) == 10
    with pytest.raises(LengthExceeded):
        field_length(0x80)
    with pytest.raises(EncoderError):
        field_length(-1)

def test_explicit_length_needs_eight_bit():
    with pytest.raises(EncoderError):
        encode_field("ABC", SIX, 8)

def test_reserved_encodings():
    with pytest.raises(EncoderError):
        encode_field("12", TypeCode.BCD_PLUS)
    with pytest.raises(EncoderError):
        encode_field("12", TypeCode.BINARY)

def test_non_string_value():
    with pytest.raises(EncoderError):
        encode_field(12, EIGHT)

def test_typed_field_limit():
    with pytest.raises(LengthExceeded):
        TypedField(EIGHT, b"x" * 64)
    with pytest.raises(ValueError):
        TypedField(0x12, b"")
