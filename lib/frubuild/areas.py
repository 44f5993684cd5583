""" Builders of Internal Use, Chassis Info, Board Info and Product Info areas. """

import binascii, datetime, re
from typing import Callable, Dict, Optional, Type

from .encoder       import encode_field
from .logging       import *
from .provider      import FieldProvider
from .specification import *
from .types         import StrWithEncoding, TypeCode, TypedField
from .utils         import UTC, checksum, get_aligned_size

__all__ = ["AreaBuilder", "prefixed", "put"]

def prefixed(e, prefix): # type: (EncoderError, str) -> EncoderError
    """ Same error, message prefixed by position in configuration. """
    return type(e)("%s: %s" % (prefix, e.message))

def put(data, offset, chunk): # type: (bytearray, int, bytes) -> int
    """ Copy `chunk` into `data` at `offset`, return offset after it. """
    end = offset + len(chunk)
    assert end <= len(data)
    data[offset:end] = chunk
    return end

def nowhite(s): # type: (str) -> str
    return re.sub(u"\\s", u"", s)

class AreaBuilder(object):
    """ Builds areas with fixed layout. All areas are padded to multiples
        of 8 bytes and end with checksum byte. """
    logger   = None # type: Logger
    encoding = None # type: int
    now      = None # type: Optional[datetime.datetime]

    FRU_EPOCH = datetime.datetime.fromtimestamp(FRU_EPOCH_SEC, UTC)

    # {{{ initialisation
    header_encoders = None # type: Dict[Type[EntrySpec], Callable[[EntrySpec, FieldProvider], bytearray]]

    def __init__(self, logger, encoding = TypeCode.SIX_BIT_ASCII, now = None): # type: (Logger, int, Optional[datetime.datetime]) -> None
        self.logger   = logger
        self.encoding = encoding
        self.now      = now

        self.header_encoders = {}
        self.header_encoders[ChassisType] = self.encode_chassis_type
        self.header_encoders[Lang]        = self.encode_lang
        self.header_encoders[Date]        = self.encode_date

    section = None # type: str
    # }}}

    # {{{ header encoders
    def encode_chassis_type(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytearray
        assert isinstance(spec, ChassisType)
        val = cfg.get_int(self.section, spec.name)
        if not val:
            raise ChassisTypeInvalid("%s.%s: chassis type must be configured and non-zero"
                % (self.section, spec.name))
        if val not in range(256):
            raise ChassisTypeInvalid("%s.%s: only integers in range(1, 256) allowed, got %d"
                % (self.section, spec.name, val))
        if val < spec.minvalue or val > spec.maxvalue:
            self.logger.warning("%s.%s: value %d out of bounds (%d, %d)"
                % (self.section, spec.name, val, spec.minvalue, spec.maxvalue))
        return bytearray([val])

    def encode_lang(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytearray
        assert isinstance(spec, Lang)
        val = cfg.get_int(self.section, spec.name)
        if val is None:
            self.logger.info("%s.%s: language code not specified, defaulting to English"
                % (self.section, spec.name))
            val = spec.default
        if val not in range(256):
            raise LengthExceeded("%s.%s: only integers in range(256) allowed, got %d"
                % (self.section, spec.name, val))
        if val < spec.minvalue or val > spec.maxvalue:
            self.logger.warning("%s.%s: value %d out of bounds (%d, %d)"
                % (self.section, spec.name, val, spec.minvalue, spec.maxvalue))
        return bytearray([val])

    def date_minutes(self, spec, val): # type: (EntrySpec, object) -> int
        if isinstance(val, str):
            try:
                val = int(val.strip(), 0)
            except ValueError:
                try:
                    val = datetime.datetime.fromisoformat(val.strip().replace('Z', '+00:00'))
                except ValueError:
                    raise ConfigurationError("%s.%s: expected minutes or ISO 8601 date, got %r"
                        % (self.section, spec.name, val))
        if isinstance(val, datetime.datetime):
            if val.tzinfo is None:
                val = val.replace(tzinfo=UTC)
            return int((val - self.FRU_EPOCH).total_seconds() // 60)
        if isinstance(val, int) and not isinstance(val, bool):
            return val
        raise ConfigurationError("%s.%s: expected date (or integer) got type %s"
            % (self.section, spec.name, type(val).__name__))

    def encode_date(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytearray
        assert isinstance(spec, Date)
        val = cfg.get_value(self.section, spec.name)
        if val is None:
            val = self.now
            if val is None:
                val = datetime.datetime.now(UTC)
            self.logger.info("%s.%s: manufacturing time not specified, defaulting to %s"
                % (self.section, spec.name, val.isoformat()))
        dt = self.date_minutes(spec, val)
        if dt < 0:
            raise ConfigurationError("%s.%s: date too low (%s is minimum), got %r"
                % (self.section, spec.name, self.FRU_EPOCH.isoformat(), val))
        if dt >= (1 << 24):
            raise LengthExceeded("%s.%s: date too high (%s is maximum), got %r"
                % (self.section, spec.name,
                    datetime.datetime.fromtimestamp(FRU_EPOCH_SEC + (1<<24)*60 - 60, UTC).isoformat(),
                    val))
        return bytearray(dt.to_bytes(3, 'little'))
    # }}}

    # {{{ field encoders
    def encode_typed(self, key, val, encoding, length = None): # type: (str, str, int, Optional[int]) -> TypedField
        try:
            field = encode_field(val, encoding, length)
        except EncoderError as e:
            raise prefixed(e, "%s.%s" % (self.section, key))
        if field.type_length == END_OF_FIELDS:
            self.logger.warning("%s.%s: single character string may be mis-interpreted as end of area"
                % (self.section, key))
        return field

    def encode_predefined(self, spec, cfg): # type: (Str, FieldProvider) -> TypedField
        """ Predefined fields are encoded as 8-bit strings, either of their
            own length or of width given by size key. """
        val = cfg.get_string(self.section, spec.name)
        if not val:
            return TypedField.absent()
        length = cfg.get_int(self.section, spec.size_key)
        encoding = TypeCode.EIGHT_BIT_ASCII
        if isinstance(val, StrWithEncoding) and val.encoding is not None and not length:
            encoding = val.encoding
        return self.encode_typed(spec.name, val, encoding, length)

    def encode_extra(self, key, cfg): # type: (str, FieldProvider) -> Optional[TypedField]
        """ Custom fields use encoding selected for whole build, unless
            value was loaded with its own encoding. """
        val = cfg.get_string(self.section, key)
        if not val:
            return None
        encoding = self.encoding
        if isinstance(val, StrWithEncoding) and val.encoding is not None:
            encoding = val.encoding
        return self.encode_typed(key, val, encoding)
    # }}}

    # {{{ area encoders
    def frame(self, spec, body_size): # type: (AreaOffset, int) -> bytearray
        """ Zeroed area for `body_size` bytes between header and end marker. """
        size = get_aligned_size(2 + body_size + 2, 8)
        if size // 8 > 255:
            raise LengthExceeded("%s: area has %d bytes, at most %d allowed"
                % (spec.section, size, 255 * 8))
        data = bytearray(size)
        data[0] = FORMAT_VERSION
        data[1] = size // 8
        return data

    def close(self, data, offset): # type: (bytearray, int) -> bytearray
        """ Write end marker at `offset` and checksum to last byte. """
        put(data, offset, bytearray([END_OF_FIELDS]))
        data[-1] = checksum(data[:-1])
        return data

    def encode_info_table(self, spec, cfg): # type: (InfoTable, FieldProvider) -> bytearray
        self.section = spec.section
        header = bytearray()
        for entry in spec.header:
            header += self.header_encoders[type(entry)](entry, cfg)

        fields = [self.encode_predefined(entry, cfg) for entry in spec.fields]
        for key in cfg.extra_keys(spec.section, spec.keys()):
            field = self.encode_extra(key, cfg)
            if field is not None:
                fields.append(field)

        data = self.frame(spec, len(header) + sum(len(f) for f in fields))
        offset = put(data, 2, header)
        for field in fields:
            offset = put(data, offset, field.to_bytes())
        self.section = None # type: ignore
        return self.close(data, offset)

    def encode_internal_use(self, spec, cfg): # type: (InternalUse, FieldProvider) -> bytearray
        self.section = spec.section
        val = cfg.get_string(spec.section, spec.data_key)
        if val is None:
            body = bytes(INTERNAL_USE_DATA_SIZE)
        else:
            val = nowhite(val)
            if val[:4] == u'hex:':
                val = val[4:]
            try:
                body = binascii.a2b_hex(val)
            except (binascii.Error, ValueError) as e:
                raise ConfigurationError("%s.%s: failed to interpret hex data: %s"
                    % (spec.section, spec.data_key, e))
        for key in cfg.extra_keys(spec.section, (spec.data_key,)):
            self.logger.warning("%s.%s: unknown key ignored" % (spec.section, key))

        data = self.frame(spec, len(body))
        offset = put(data, 2, body)
        self.section = None # type: ignore
        return self.close(data, offset)
    # }}}
