""" Builders of multi-records (MultiRecord Info Area). """

import binascii, re
from typing import Callable, Dict, Type

from .areas         import put
from .logging       import *
from .provider      import FieldProvider
from .specification import *
from .utils         import checksum

__all__ = ["MultiRecordBuilder", "UUID_RE", "MAC_RE"]

UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
MAC_RE  = re.compile(r"^[0-9a-fA-F]{12}$")

class MultiRecordBuilder(object):
    """ Builds single multi-record: five byte header followed by payload of
        fixed size. Records are neither aligned nor padded. """
    logger  = None # type: Logger

    # {{{ initialisation
    entry_encoders = None # type: Dict[Type[EntrySpec], Callable[[EntrySpec, FieldProvider], bytes]]

    def __init__(self, logger): # type: (Logger) -> None
        self.logger = logger

        self.entry_encoders = {}
        self.entry_encoders[U8]         = self.encode_int
        self.entry_encoders[U16]        = self.encode_int
        self.entry_encoders[U32]        = self.encode_int
        self.entry_encoders[Uuid]       = self.encode_uuid
        self.entry_encoders[MacAddress] = self.encode_mac
        self.entry_encoders[FixedStr]   = self.encode_fixed_str
        self.entry_encoders[Pad]        = self.encode_pad

    section = None # type: str
    # }}}

    # {{{ entry encoders
    def encode_int(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytes
        assert isinstance(spec, Int)
        val = cfg.get_int(self.section, spec.name)
        if val is None:
            val = spec.default
        if val < 0 or val > spec.maxvalue:
            raise LengthExceeded("%s.%s: value %d does not fit into %d byte(s)"
                % (self.section, spec.name, val, spec.size))
        return val.to_bytes(spec.size, 'little')

    def encode_uuid(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytes
        assert isinstance(spec, Uuid)
        val = cfg.get_string(self.section, spec.name)
        if val is None or not UUID_RE.fullmatch(val.strip()):
            raise UuidInvalid("%s.%s: expected UUID as xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx, got %r"
                % (self.section, spec.name, val))
        ret = binascii.a2b_hex(val.strip().replace('-', ''))
        assert len(ret) == spec.size
        return ret

    def encode_mac(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytes
        assert isinstance(spec, MacAddress)
        val = cfg.get_string(self.section, spec.name)
        if val is None or not MAC_RE.fullmatch(val):
            raise MacAddressInvalid("%s.%s: expected exactly 12 hexadecimal digits, got %r"
                % (self.section, spec.name, val))
        return binascii.a2b_hex(val)

    def encode_fixed_str(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytes
        assert isinstance(spec, FixedStr)
        val = cfg.get_string(self.section, spec.name)
        if val is None:
            raise MissingField("%s.%s: value is mandatory" % (self.section, spec.name))
        try:
            b = val.encode('latin1')
        except UnicodeEncodeError as e:
            raise ConfigurationError("%s.%s: cannot encode string %r: %s"
                % (self.section, spec.name, val, e.reason))
        if len(b) > spec.size:
            raise FieldTooLong("%s.%s: %d bytes do not fit into field of %d bytes"
                % (self.section, spec.name, len(b), spec.size))
        return b + bytes(spec.size - len(b))

    def encode_pad(self, spec, cfg): # type: (EntrySpec, FieldProvider) -> bytes
        return bytes(spec.size)
    # }}}

    def encode_header_byte(self, key, default, cfg): # type: (str, int, FieldProvider) -> int
        val = cfg.get_int(self.section, key)
        if val is None:
            return default
        if val not in range(256):
            raise LengthExceeded("%s.%s: only integers in range(256) allowed, got %d"
                % (self.section, key, val))
        return val

    def encode_record(self, spec, cfg): # type: (RecordSpec, FieldProvider) -> bytearray
        """ Header: type id, format version, payload length, payload checksum,
            checksum of preceding four header bytes. """
        self.section = spec.section
        known = set([TYPE_ID, RECORD_FORMAT_VERSION])
        type_id = self.encode_header_byte(TYPE_ID, spec.type_id, cfg)
        if type_id != spec.type_id:
            self.logger.warning("%s.%s: record type 0x%02x differs from 0x%02x used by %s record"
                % (spec.section, TYPE_ID, type_id, spec.type_id, spec.name))
        version = self.encode_header_byte(RECORD_FORMAT_VERSION, MULTI_RECORD_FORMAT_VERSION, cfg)

        size = MULTI_RECORD_HEADER_SIZE + spec.payload_size
        data = bytearray(size)
        offset = MULTI_RECORD_HEADER_SIZE
        for entry in spec.entries:
            known.update(entry.keys())
            offset = put(data, offset, self.entry_encoders[type(entry)](entry, cfg))
        assert offset == size

        for key in cfg.extra_keys(spec.section, known):
            self.logger.warning("%s.%s: unknown key ignored" % (spec.section, key))

        data[0] = type_id
        data[1] = version
        data[2] = spec.payload_size
        data[3] = checksum(data[MULTI_RECORD_HEADER_SIZE:])
        data[4] = checksum(data[:4])
        self.section = None # type: ignore
        return data
