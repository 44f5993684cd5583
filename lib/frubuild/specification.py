from typing import Optional, Tuple

__all__ = [
    "EntrySpec", "Byte", "ChassisType", "Lang", "Date", "Str",
    "Int", "U8", "U16", "U32", "Uuid", "MacAddress", "FixedStr", "Pad",
    "AreaSpec", "AreaByte", "AreaOffset", "InternalUse", "InfoTable",
    "RecordSpec", "MultiRecordArea",
    "FRU_SPEC", "AREAS", "RECORDS", "SECTIONS",
    "FRU_EPOCH_SEC", "FORMAT_VERSION", "END_OF_FIELDS",
    "MULTI_RECORD_FORMAT_VERSION", "END_OF_LIST",
    "INTERNAL_USE_DATA_SIZE", "MULTI_RECORD_HEADER_SIZE",
    "TYPE_ID", "RECORD_FORMAT_VERSION",
]

FRU_EPOCH_SEC  = 820454400 # 1996-01-01 00:00 UTC
FORMAT_VERSION = 1
END_OF_FIELDS  = 0xc1

MULTI_RECORD_FORMAT_VERSION = 0x02
MULTI_RECORD_HEADER_SIZE    = 5
END_OF_LIST                 = 0x80

INTERNAL_USE_DATA_SIZE = 36

# {{{ Entry types
class EntrySpec(object):
    """ Scalar values in FRU specification. """
    name = None # type: str
    size = None # type: int
    def __init__(self, name): # type: (str) -> None
        self.name = name

    def keys(self): # type: () -> Tuple[str, ...]
        """ Configuration keys consumed by this entry. """
        return (self.name,)

class Byte(EntrySpec):
    """ Single byte value - enumeration with limits. """
    size     = 1
    minvalue = 0    # type: int
    maxvalue = 255  # type: int
    default  = None # type: Optional[int]

class ChassisType(Byte):
    """ Chassis type, see SMBIOS specification for meaning of values.
        Mandatory, zero is illegal. """
    minvalue = 1
    maxvalue = 0x24

class Lang(Byte):
    """ Language, see IPMI FRU specification for meaning of values.
        Values 0 and 25 are English. """
    minvalue = 0
    maxvalue = 136
    default  = 0

class Date(EntrySpec):
    """ Date value (encoded as 3 bytes: minutes since 1996-01-01T00:00:00Z) """
    size = 3

class Str(EntrySpec):
    """ Predefined string field. Its width can be forced by `size_key`. """
    size_key = None # type: str
    def __init__(self, name, size_key = None): # type: (str, Optional[str]) -> None
        super(Str, self).__init__(name)
        if size_key is None:
            size_key = name + "_size"
        self.size_key = size_key

    def keys(self): # type: () -> Tuple[str, ...]
        return (self.name, self.size_key)

class Int(EntrySpec):
    """ Little endian unsigned integer of fixed width. """
    default = 0
    @property
    def maxvalue(self): # type: () -> int
        return (1 << (8 * self.size)) - 1

class U8(Int):
    size = 1

class U16(Int):
    size = 2

class U32(Int):
    size = 4

class Uuid(EntrySpec):
    """ UUID given as xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx, stored as 16 bytes
        in order of appearance. """
    size = 16

class MacAddress(EntrySpec):
    """ MAC address given as 12 hex digits, stored as 6 bytes. """
    size = 6

class FixedStr(EntrySpec):
    """ Mandatory string, zero padded to fixed width. """
    def __init__(self, name, size): # type: (str, int) -> None
        super(FixedStr, self).__init__(name)
        self.size = size

class Pad(EntrySpec):
    """ Reserved zero bytes. Not configurable. """
    def __init__(self, size): # type: (int) -> None
        super(Pad, self).__init__("pad")
        self.size = size

    def keys(self): # type: () -> Tuple[str, ...]
        return ()
# }}}

# {{{ Area types
class AreaSpec(object):
    """ FRU Header entry base class """
    name = None # type: str
    def __init__(self, name): # type: (str) -> None
        self.name = name

class AreaByte(AreaSpec):
    """ FRU Header entry that is not area offset. """
    value = None # type: int
    def __init__(self, name, value): # type: (str, int) -> None
        super(AreaByte, self).__init__(name)
        self.value = value

class AreaOffset(AreaSpec):
    """ Area base class. This FRU Header entry is interpreted as offset. """
    section = None # type: str
    def __init__(self, name, section): # type: (str, str) -> None
        super(AreaOffset, self).__init__(name)
        self.section = section

class InternalUse(AreaOffset):
    """ Internal Use Area. Two byte header, opaque data, end marker and checksum. """
    data_key = "data"

class InfoTable(AreaOffset):
    """ Area with information about chassis, board or product. I.e., area with predefined entries. """
    header = None # type: Tuple[EntrySpec, ...]
    fields = None # type: Tuple[Str, ...]
    def __init__(self, name, section, header, fields): # type: (str, str, Tuple[EntrySpec, ...], Tuple[Str, ...]) -> None
        super(InfoTable, self).__init__(name, section)
        self.header = header
        self.fields = fields

    def keys(self): # type: () -> Tuple[str, ...]
        """ Keys that are not extra fields. """
        ret = () # type: Tuple[str, ...]
        for entry in self.header + self.fields:
            ret += entry.keys()
        return ret

class RecordSpec(object):
    """ One multi-record type: type id and fixed layout of its payload. """
    name    = None # type: str
    section = None # type: str
    type_id = None # type: int
    entries = None # type: Tuple[EntrySpec, ...]
    def __init__(self, name, section, type_id, entries): # type: (str, str, int, Tuple[EntrySpec, ...]) -> None
        self.name    = name
        self.section = section
        self.type_id = type_id
        self.entries = entries

    @property
    def payload_size(self): # type: () -> int
        return sum(entry.size for entry in self.entries)

class MultiRecordArea(AreaOffset):
    """ Chain of multi-records. Records are not aligned to 8 bytes. """
    records = None # type: Tuple[RecordSpec, ...]
    def __init__(self, name, records): # type: (str, Tuple[RecordSpec, ...]) -> None
        super(MultiRecordArea, self).__init__(name, None) # type: ignore
        self.records = records
# }}}

TYPE_ID               = "type_id"
RECORD_FORMAT_VERSION = "format_version"

""" Multi-records, in order of placement. """
RECORDS = (
    RecordSpec("management_access", "mia_mar", 0x03, (
        U8("sub_type"),
        Uuid("record_data"),
        Pad(2),
    )),
    RecordSpec("oem_vpd_version", "mia_ver", 0xc0, (
        U8("oem_vpd_major_version"),
        U8("oem_vpd_minor_version"),
        Pad(1),
    )),
    RecordSpec("mac_address", "mia_mac", 0xc1, (
        U8("host_mac_address_count"),
        MacAddress("host_base_mac_address"),
        U8("bmc_mac_address_count"),
        MacAddress("bmc_base_mac_address"),
        U16("switch_mac_address_count"),
        MacAddress("switch_base_mac_address"),
        Pad(5),
    )),
    RecordSpec("fan_speed_control", "mia_fan", 0xc2, (
        U16("max_fan_speed"),
        U8("fan_airflow"),
    )),
    RecordSpec("board_controller_info", "mia_bci", 0xc3, (
        FixedStr("vendor_id", 16),
        FixedStr("family", 16),
        FixedStr("controller_type", 16),
        Pad(3),
    )),
    RecordSpec("system_configuration", "mia_sc", 0xc4, (
        U32("customer_id"),
        Pad(7),
    )),
) # type: Tuple[RecordSpec, ...]

""" FRU Specification. """
FRU_SPEC = (
    AreaByte("version", FORMAT_VERSION),
    InternalUse("internal", "iua"),
    InfoTable("chassis", "cia", (
            ChassisType("chassis_type"),
        ), (
            Str("part_number"),
            Str("serial_number"),
            Str("product_name"),
            Str("sku_id"),
            Str("manufacturer"),
            Str("version"),
            Str("asset_tag"),
        )),
    InfoTable("board", "bia", (
            Lang("language_code"),
            Date("mfg_datetime"),
        ), (
            Str("manufacturer"),
            Str("product_name"),
            Str("serial_number"),
            Str("part_number"),
            Str("fru_file_id"),
            Str("version"),
            Str("asset_tag"),
        )),
    InfoTable("product", "pia", (
            Lang("language_code"),
        ), (
            Str("manufacturer"),
            Str("product_name"),
            Str("part_number"),
            Str("version"),
            Str("serial_number"),
            Str("asset_tag"),
            Str("fru_file_id"),
            Str("product_family", "family_size"),
            Str("sku_id"),
        )),
    MultiRecordArea("multirecord", RECORDS),
    AreaByte("pad", 0),
) # type: Tuple[AreaSpec, ...]

assert (len(FRU_SPEC) + 1) % 8 == 0

""" Areas by name. """
AREAS = dict((a.name, a) for a in FRU_SPEC if isinstance(a, AreaOffset))

""" All configuration sections understood by encoder. """
SECTIONS = tuple(
    [a.section for a in FRU_SPEC if isinstance(a, (InternalUse, InfoTable))] +
    [r.section for r in RECORDS])
