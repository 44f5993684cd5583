""" Loading of FRU configuration from TOML or YAML. """

import os
from typing import Any, Callable, Dict

import toml
import yaml

from . import ftoml
from .logging import ConfigurationError
from .types   import Latin1String, PackedAscii

__all__ = ["FORMATS", "load", "guess_format"]

class FruYamlLoader(yaml.SafeLoader):
    """ Safe YAML loader with encoding-tagged strings:
        !packed "..." and !latin1 "...". """
    pass

FruYamlLoader.add_constructor(u'!packed',
    lambda loader, node: PackedAscii(loader.construct_scalar(node)))
FruYamlLoader.add_constructor(u'!latin1',
    lambda loader, node: Latin1String(loader.construct_scalar(node)))

def load_yaml(data): # type: (bytes) -> Dict[str, Any]
    return yaml.load(data, Loader=FruYamlLoader) # type: ignore

FORMATS = {
    'toml': ftoml.load,
    'yaml': load_yaml,
} # type: Dict[str, Callable[[bytes], Dict[str, Any]]]

def guess_format(path): # type: (str) -> str
    """ YAML for .yml and .yaml files, TOML for anything else. """
    ext = os.path.splitext(path)[1].lower()
    if ext in ('.yml', '.yaml'):
        return 'yaml'
    return 'toml'

def load(data, fmt = 'toml'): # type: (bytes, str) -> Dict[str, Any]
    """ Parses configuration document into {section: {key: value}}. """
    try:
        loader = FORMATS[fmt]
    except KeyError:
        raise ConfigurationError("unknown configuration format %r" % (fmt,))
    try:
        cfg = loader(data)
    except (toml.TomlDecodeError, yaml.YAMLError, UnicodeDecodeError, ValueError) as e:
        raise ConfigurationError("cannot parse %s configuration: %s" % (fmt, e))
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ConfigurationError("configuration must be a dictionary, got %s" % (type(cfg).__name__,))
    return cfg
