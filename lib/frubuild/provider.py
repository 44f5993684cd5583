""" Read-only access to configured field values. """

import datetime
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from .logging import ConfigurationError

__all__ = ["FieldProvider", "DictProvider"]

class FieldProvider(object):
    """ Field-value provider consumed by Encoder. Section and key names are
        those of frubuild.specification. Encoder never modifies provider. """

    def has_section(self, section): # type: (str) -> bool
        raise NotImplementedError()

    def get_value(self, section, key): # type: (str, str) -> Any
        """ Raw configured value, None if not configured. """
        raise NotImplementedError()

    def keys(self, section): # type: (str) -> List[str]
        """ All keys of `section` in configuration order. """
        raise NotImplementedError()

    def sections(self): # type: () -> List[str]
        """ Configured section names, used only for diagnostics. """
        return []

    def get_string(self, section, key): # type: (str, str) -> Optional[str]
        val = self.get_value(section, key)
        if val is None:
            return None
        if isinstance(val, str):
            return val
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ConfigurationError("%s.%s: expected string, got type %s"
                % (section, key, type(val).__name__))
        return str(val)

    def get_int(self, section, key): # type: (str, str) -> Optional[int]
        val = self.get_value(section, key)
        if val is None:
            return None
        if isinstance(val, bool):
            raise ConfigurationError("%s.%s: expected integer, got boolean" % (section, key))
        if isinstance(val, int):
            return val
        if isinstance(val, str):
            try:
                return int(val.strip(), 0)
            except ValueError:
                pass
        raise ConfigurationError("%s.%s: expected integer, got %r" % (section, key, val))

    def extra_keys(self, section, exclude = ()): # type: (str, Iterable[str]) -> List[str]
        """ Keys of `section` not listed in `exclude`, in configuration order. """
        exclude = frozenset(exclude)
        return [k for k in self.keys(section) if k not in exclude]

class DictProvider(FieldProvider):
    """ Provider over {section: {key: value}} mapping, as loaded from TOML or YAML.
        Mapping is copied, later changes of `cfg` are not visible. """
    cfg = None # type: Dict[str, OrderedDict[str, Any]]

    def __init__(self, cfg): # type: (Mapping[str, Any]) -> None
        if not isinstance(cfg, Mapping):
            raise ConfigurationError("Configuration must be a dictionary, got %s"
                % (type(cfg).__name__,))
        self.cfg = OrderedDict()
        for section, values in cfg.items():
            if values is None:
                values = {}
            if not isinstance(values, Mapping):
                raise ConfigurationError("%s: section must be a dictionary, got %s"
                    % (section, type(values).__name__))
            self.cfg[str(section)] = OrderedDict((str(k), v) for k, v in values.items())

    def sections(self): # type: () -> List[str]
        return list(self.cfg.keys())

    def has_section(self, section): # type: (str) -> bool
        return section in self.cfg

    def keys(self, section): # type: (str) -> List[str]
        return list(self.cfg.get(section, {}).keys())

    def get_value(self, section, key): # type: (str, str) -> Any
        val = self.cfg.get(section, {}).get(key)
        if isinstance(val, (list, dict)):
            raise ConfigurationError("%s.%s: expected scalar value, got %s"
                % (section, key, type(val).__name__))
        if isinstance(val, datetime.date) and not isinstance(val, datetime.datetime):
            val = datetime.datetime(val.year, val.month, val.day)
        return val
