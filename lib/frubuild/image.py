""" Image assembler: common header, areas and multi-record chain. """

import datetime
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple, Union

from .areas         import AreaBuilder, put
from .logging       import *
from .multirecord   import MultiRecordBuilder
from .provider      import DictProvider, FieldProvider
from .specification import *
from .types         import TypeCode
from .utils         import checksum, div8

__all__ = ["Encoder", "EncoderArea", "build", "encode"]

class EncoderArea(object): # {{{
    """ Built area (or multi-record) with its byte offset. """
    offset = None # type: int
    name   = None # type: str
    data   = None # type: bytearray
    def __init__(self, name, offset, data): # type: (str, int, bytearray) -> None
        self.name   = name
        self.offset = offset
        self.data   = data
# }}}

class Encoder(object):
    """ IPMI FRU image encoder """
    logger   = None # type: Logger
    areas    = None # type: AreaBuilder
    records  = None # type: MultiRecordBuilder

    def __init__(self, logger = None, encoding = TypeCode.SIX_BIT_ASCII, now = None): # type: (Optional[Logger], int, Optional[datetime.datetime]) -> None
        if logger is None:
            self.logger = StdErrLogger()
        else:
            self.logger = logger
        if encoding not in (TypeCode.SIX_BIT_ASCII, TypeCode.EIGHT_BIT_ASCII):
            raise EncoderError("default encoding must be 6-bit or 8-bit ascii, got 0x%02x" % (encoding,))
        self.areas   = AreaBuilder(self.logger, encoding, now)
        self.records = MultiRecordBuilder(self.logger)

    def build_area(self, spec, cfg): # type: (AreaOffset, FieldProvider) -> bytearray
        if isinstance(spec, InternalUse):
            return self.areas.encode_internal_use(spec, cfg)
        assert isinstance(spec, InfoTable)
        return self.areas.encode_info_table(spec, cfg)

    def layout(self, cfg): # type: (FieldProvider) -> Tuple[bytearray, List[EncoderArea]]
        """ Builds header and every present area. Offsets of areas are in
            8 byte units up to the multi-record area, records follow each
            other at byte offsets. """
        header = bytearray(len(FRU_SPEC) + 1)
        built  = [] # type: List[EncoderArea]
        offset = len(header)
        for pos in range(len(FRU_SPEC)):
            spec = FRU_SPEC[pos]
            if isinstance(spec, AreaByte):
                header[pos] = spec.value
            elif isinstance(spec, MultiRecordArea):
                present = [r for r in spec.records if cfg.has_section(r.section)]
                if not present:
                    continue
                header[pos] = self.header_offset(spec, offset)
                for record in present:
                    data = self.records.encode_record(record, cfg)
                    built.append(EncoderArea(record.section, offset, data))
                    offset += len(data)
                self.check_end_of_list(built[-1])
            else:
                assert isinstance(spec, AreaOffset)
                if not cfg.has_section(spec.section):
                    continue
                data = self.build_area(spec, cfg)
                header[pos] = self.header_offset(spec, offset)
                built.append(EncoderArea(spec.section, offset, data))
                offset += len(data)
        header[-1] = checksum(header[:-1])
        return header, built

    def header_offset(self, spec, offset): # type: (AreaSpec, int) -> int
        units = div8(offset)
        if units > 255:
            raise LengthExceeded("header.%s: area offset %d bytes exceeds %d bytes"
                % (spec.name, offset, 255 * 8))
        return units

    def check_end_of_list(self, last): # type: (EncoderArea) -> None
        if not last.data[1] & END_OF_LIST:
            self.logger.warning("%s.%s: last multi-record does not have end of list flag (0x%02x) set"
                % (last.name, RECORD_FORMAT_VERSION, END_OF_LIST))

    def encode(self, cfg, max_size = None): # type: (Union[FieldProvider, Mapping[str, Any]], Optional[int]) -> bytearray
        if not isinstance(cfg, FieldProvider):
            cfg = DictProvider(cfg)
        for section in cfg.sections():
            if section not in SECTIONS:
                self.logger.warning("%s: unknown section ignored" % (section,))
        header, built = self.layout(cfg)
        size = len(header)
        if built:
            size = built[-1].offset + len(built[-1].data)
        if max_size and size > max_size:
            raise SizeExceeded("FRU data length (%d bytes) exceeds maximum size (%d bytes)"
                % (size, max_size))
        ret = bytearray(size)
        put(ret, 0, header)
        for area in built:
            put(ret, area.offset, area.data)
        return ret

def build(cfg, logger = None, encoding = TypeCode.SIX_BIT_ASCII, max_size = None, now = None):
    # type: (Union[FieldProvider, Mapping[str, Any]], Optional[Logger], int, Optional[int], Optional[datetime.datetime]) -> bytearray
    """ Builds FRU image from `cfg`, which is FieldProvider or mapping
        {section: {key: value}}. Raises EncoderError (or its subclass)
        and returns nothing when image cannot be built. """
    return Encoder(logger, encoding, now).encode(cfg, max_size)

encode = build
