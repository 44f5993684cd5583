from collections import OrderedDict
from typing import Any, Dict

import toml

from .types import *

__all__ = ["load", "FruTomlDecoder"]

class FruTomlDecoder(toml.TomlDecoder):
    """ TOML decoder with encoding-tagged strings: p"..." is stored
        as 6-bit packed ascii, a"..." as 8-bit ascii+latin1. """
    FruTypes = {
        'p': PackedAscii,
        'a': Latin1String,
    }
    def __init__(self, _dict = OrderedDict):
        super(FruTomlDecoder, self).__init__(_dict)

    def load_value(self, v, strictly_valid = True):
        sv = v.strip()
        if len(sv) > 2 and sv[1] in u"\"'" and sv[0] in self.FruTypes:
            retv, rett = super(FruTomlDecoder, self).load_value(sv[1:], strictly_valid)
            assert rett == "str"
            return self.FruTypes[sv[0]](retv), rett
        return super(FruTomlDecoder, self).load_value(v, strictly_valid)

    def load_inline_object(self, line, currentlevel, multikey=False,
                           multibackslash=False):
        candidate_groups = line[1:-1].split(",")
        groups = []
        if len(candidate_groups) == 1 and not candidate_groups[0].strip():
            candidate_groups.pop()
        while len(candidate_groups) > 0:
            candidate_group = candidate_groups.pop(0)
            try:
                _, value = candidate_group.split('=', 1)
            except ValueError:
                raise ValueError("Invalid inline table encountered")
            value = value.strip()
            if ((value[0] == value[-1] and value[0] in ('"', "'")) or
                value[0] in '-0123456789' or
                value in ('true', 'false') or
                (value[0] == "[" and value[-1] == "]") or
                (value[0] == '{' and value[-1] == '}') or
                (value[0] in self.FruTypes and value[1:2] == value[-1]
                    and value[-1] in ('"', "'")) ):
                groups.append(candidate_group)
            elif len(candidate_groups) > 0:
                candidate_groups[0] = (candidate_group + "," +
                                       candidate_groups[0])
            else:
                raise ValueError("Invalid inline table value encountered")
        for group in groups:
            status = self.load_line(group, currentlevel, multikey,
                                    multibackslash)
            if status is not None:
                break

def load(data): # type: (bytes) -> Dict[str, Any]
    """ Loads enhanced TOML (bytes, utf-8 encoded) into something, that can be encoded. """
    return toml.loads(data.decode("utf8"), decoder = FruTomlDecoder())
