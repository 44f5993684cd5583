from .image    import Encoder, build, encode
from .encoder  import encode_field, decode_packed_ascii
from .provider import FieldProvider, DictProvider
from .types    import TypeCode, TypedField, PackedAscii, Latin1String
from .utils    import checksum, get_aligned_size
from .logging  import *
from .config   import load

__version__ = "0.2.0"
