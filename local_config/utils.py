import configparser
import copy
import json
import os
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, List

import toml
import yaml

from local_config.errors import ConfigParseError, MissingKeyError, TypeMismatchError
from local_config.logging import logger

_INDEX_SEGMENT = re.compile(r"^([^\[\]]*)((?:\[-?\d+\])*)$")
_INDEX = re.compile(r"\[(-?\d+)\]")

_TRUE_STRINGS = ("1", "true", "on", "yes")
_FALSE_STRINGS = ("0", "false", "off", "no")

# Words a numeric getter treats as 1 and 0
_TRUE_WORDS = ("true", "on", "yes")
_FALSE_WORDS = ("false", "off", "no")


def _load_yaml(text: str):
    # An empty YAML document is an empty table, not an error
    data = yaml.safe_load(text)
    return {} if data is None else data


def _load_ini(text: str):
    parser = configparser.ConfigParser(interpolation=None)
    parser.read_string(text)
    data = {section: dict(parser.items(section)) for section in parser.sections()}
    defaults = dict(parser.defaults())
    if defaults:
        data.setdefault(parser.default_section, defaults)
    return data


LOADERS: Dict[str, Callable[[str], Any]] = {
    "toml": toml.loads,
    "yaml": _load_yaml,
    "json": json.loads,
    "ini": _load_ini,
}

EXTENSIONS = {
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".ini": "ini",
}

# Content sniffing order for files without a known extension
_SNIFF_ORDER = ("json", "toml", "yaml")


def detect_format(path) -> str:
    """Return the format name implied by the file extension, or None."""
    _, ext = os.path.splitext(str(path))
    return EXTENSIONS.get(ext.lower())


def _sniff(path, text: str) -> Dict[str, Any]:
    for fmt in _SNIFF_ORDER:
        try:
            data = LOADERS[fmt](text)
        except Exception:
            continue
        if isinstance(data, dict):
            logger.debug(f"Detected {fmt} content in {path}")
            return data
    raise ConfigParseError(path, "unable to detect configuration format")


def load_source(path) -> Dict[str, Any]:
    """
    Parses the file at ``path`` into a plain dict.

    The format comes from the extension (.toml, .yaml/.yml, .json, .ini). Files
    with any other extension are sniffed as JSON, then TOML, then YAML.
    """
    fmt = detect_format(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(path, e) from e

    if fmt is None:
        data = _sniff(path, text)
    else:
        logger.debug(f"Loading {path} as {fmt}")
        try:
            data = LOADERS[fmt](text)
        except Exception as e:
            # toml also raises IndexError/AttributeError on some malformed input
            raise ConfigParseError(path, e) from e

    if not isinstance(data, dict):
        raise ConfigParseError(path, f"top level must be a table, got {type(data).__name__}")
    return data


def split_key(key: str) -> List:
    """
    Splits a dotted key into lookup segments.

    "servers[0].host" -> ["servers", 0, "host"]
    """
    if not isinstance(key, str) or not key:
        raise MissingKeyError(str(key))
    segments = []
    for part in key.split("."):
        match = _INDEX_SEGMENT.match(part)
        if match is None:
            raise MissingKeyError(key)
        name, indexes = match.groups()
        if name:
            segments.append(name)
        elif not indexes:
            raise MissingKeyError(key)
        segments.extend(int(i) for i in _INDEX.findall(indexes))
    return segments


class ConfigStore:
    """Read-only dotted-key view over a parsed configuration table."""

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def _lookup(self, key: str):
        current = self._data
        for segment in split_key(key):
            if isinstance(segment, int):
                if not isinstance(current, list):
                    raise MissingKeyError(key)
                try:
                    current = current[segment]
                except IndexError:
                    raise MissingKeyError(key) from None
            elif isinstance(current, dict) and segment in current:
                current = current[segment]
            else:
                raise MissingKeyError(key)
        return current

    def contains(self, key: str) -> bool:
        try:
            self._lookup(key)
        except MissingKeyError:
            return False
        return True

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def get(self, key: str) -> Any:
        value = self._lookup(key)
        if isinstance(value, (dict, list)):
            return copy.deepcopy(value)
        return value

    def get_string(self, key: str) -> str:
        value = self._lookup(key)
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        raise TypeMismatchError(key, value, "a string")

    def get_int(self, key: str) -> int:
        value = self._lookup(key)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            try:
                return _round_half_away(value)
            except (ValueError, OverflowError):
                raise TypeMismatchError(key, value, "an integer") from None
        if isinstance(value, str):
            flag = _word_flag(value)
            if flag is not None:
                return flag
            try:
                return int(value)
            except ValueError:
                pass
            try:
                return _round_half_away(float(value))
            except (ValueError, OverflowError):
                pass
        raise TypeMismatchError(key, value, "an integer")

    def get_float(self, key: str) -> float:
        value = self._lookup(key)
        if isinstance(value, (bool, int, float)):
            return float(value)
        if isinstance(value, str):
            flag = _word_flag(value)
            if flag is not None:
                return float(flag)
            try:
                return float(value)
            except ValueError:
                pass
        raise TypeMismatchError(key, value, "a floating point")

    def get_bool(self, key: str) -> bool:
        value = self._lookup(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise TypeMismatchError(key, value, "a boolean")

    def get_table(self, key: str) -> Dict[str, Any]:
        value = self._lookup(key)
        if isinstance(value, dict):
            return copy.deepcopy(value)
        raise TypeMismatchError(key, value, "a map")

    def get_array(self, key: str) -> List[Any]:
        value = self._lookup(key)
        if isinstance(value, list):
            return copy.deepcopy(value)
        raise TypeMismatchError(key, value, "an array")


def _word_flag(value: str):
    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return 1
    if lowered in _FALSE_WORDS:
        return 0
    return None


def _format_float(value: float) -> str:
    """Renders a float without exponent or trailing ".0": 3.0 -> "3", 1e-07 -> "0.0000001"."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _round_half_away(value: float) -> int:
    # round() would use banker's rounding; Decimal keeps the exact binary value
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))
