""" frubuild command line: builds FRU image file from TOML or YAML configuration.

    Example:
        frubuild -s 2048 -c fru.toml -o FRU.bin -a
"""

import argparse, sys
from typing import List, Optional

from .         import __version__
from .config   import FORMATS, guess_format, load
from .encoder  import ENCODINGS
from .image    import build
from .logging  import EncoderError, Logger, StdErrLogger
from .types    import TypeCode

__all__ = ["main", "parser"]

def encoding_name(s): # type: (str) -> int
    try:
        return ENCODINGS[s]
    except KeyError:
        raise argparse.ArgumentTypeError("unknown encoding %r" % (s,))

def parser(): # type: () -> argparse.ArgumentParser
    p = argparse.ArgumentParser(prog="frubuild",
        description="Generate IPMI FRU data file from configuration.")
    p.add_argument("-v", "--version", action="version", version="%(prog)s " + __version__)
    p.add_argument("-r", "--read", action="store_true",
        help="read FRU data from file specified by -i (not implemented)")
    p.add_argument("-i", "--input", metavar="FILE",
        help="FRU data file (use with -r, not implemented)")
    p.add_argument("-c", "--config", metavar="FILE",
        help="FRU configuration file (default: stdin)")
    p.add_argument("-f", "--format", choices=sorted(FORMATS.keys()),
        help="configuration format (default: guessed from file extension, toml for stdin)")
    p.add_argument("-o", "--output", metavar="FILE",
        help="output FRU data file (default: stdout)")
    p.add_argument("-s", "--size", metavar="SIZE", type=int, default=0,
        help="maximum size (in bytes) allowed for the FRU data file")
    p.add_argument("-a", "--ascii8", dest="encoding", action="store_const",
        const=TypeCode.EIGHT_BIT_ASCII, default=TypeCode.SIX_BIT_ASCII,
        help="use 8-bit ascii for custom fields (default: 6-bit packed ascii)")
    p.add_argument("-e", "--encoding", dest="encoding", type=encoding_name,
        default=TypeCode.SIX_BIT_ASCII,
        help="encoding of custom fields, one of: %s" % (", ".join(sorted(ENCODINGS.keys())),))
    return p

def error(msg): # type: (str) -> int
    sys.stderr.write("Err: %s\n" % (msg,))
    return 1

def read_input(path): # type: (Optional[str]) -> bytes
    if path is None:
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()

def write_output(path, data_out): # type: (Optional[str], bytes) -> None
    if path is not None:
        with open(path, "wb") as f:
            f.write(data_out)
    elif sys.stdout.isatty():
        raise EncoderError("Stdout is terminal, refusing to print binary file")
    else:
        sys.stdout.buffer.write(data_out)
        sys.stdout.flush()

def main(argv = None, logger = None): # type: (Optional[List[str]], Optional[Logger]) -> int
    args = parser().parse_args(argv)
    if logger is None:
        logger = StdErrLogger()
    if args.read or args.input:
        return error("Option not implemented: reading FRU data is not supported")
    if args.size < 0:
        return error("Invalid maximum file size (-s %d)" % (args.size,))
    fmt = args.format
    if fmt is None:
        fmt = guess_format(args.config) if args.config else 'toml'
    try:
        cfg = load(read_input(args.config), fmt)
        data_out = build(cfg, logger, args.encoding, args.size)
        write_output(args.output, bytes(data_out))
    except EncoderError as e:
        return error(e.message)
    except (IOError, OSError) as e:
        return error(str(e))
    logger.info("FRU data (%d bytes) written to %s" % (len(data_out), args.output or "stdout"))
    return 0
