import logging
import os
from collections.abc import Callable
from functools import wraps
from typing import Any


_logger = logging.getLogger("valueset.configparser")


class ConfigParam:
    """A typed configuration value with a default and an optional validator."""

    def __init__(
        self,
        default: Any,
        apply: Callable[[Any], Any] | None = None,
        doc: str = "",
    ):
        self.default = default
        self._apply = apply
        self.doc = doc

    def filter(self, value):
        if self._apply is not None:
            return self._apply(value)
        return value


class BoolParam(ConfigParam):
    _true_strings = ("1", "true", "True", "yes", "on")
    _false_strings = ("0", "false", "False", "no", "off")

    def __init__(self, default: bool, doc: str = ""):
        super().__init__(default, apply=self._to_bool, doc=doc)

    def _to_bool(self, value):
        if isinstance(value, bool):
            return value
        if value in self._true_strings:
            return True
        if value in self._false_strings:
            return False
        raise ValueError(f"Invalid value ({value!r}) for a boolean parameter")


def parse_config_string(config_string: str) -> dict[str, str]:
    """
    Parse a `name=value,name=value` string as found in ``VALUESET_FLAGS``.

    Empty entries are ignored; entries without ``=`` are rejected.
    """
    config_dict = {}
    for kv_pair in config_string.split(","):
        kv_pair = kv_pair.strip()
        if not kv_pair:
            continue
        kv_tuple = kv_pair.split("=", 1)
        if len(kv_tuple) != 2:
            raise ValueError(
                f"Config key '{kv_tuple[0]}' has no value, use {kv_tuple[0]}=<value>"
            )
        k, v = kv_tuple
        config_dict[k.strip()] = v.strip()
    return config_dict


class ValuesetConfigParser:
    """Holds the registered flags and their current values."""

    def __init__(self, flags_dict: dict[str, str] | None = None):
        object.__setattr__(self, "_params", {})
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_flags_dict", dict(flags_dict or {}))

    def add(self, name: str, param: ConfigParam) -> None:
        if name in self._params:
            raise AttributeError(f"This name is already taken: {name}")
        self._params[name] = param
        if name in self._flags_dict:
            raw = self._flags_dict.pop(name)
            try:
                value = param.filter(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for flag {name}: {e}") from e
            _logger.debug("Flag %s set to %r from VALUESET_FLAGS", name, value)
        else:
            value = param.default
        self._values[name] = value

    def check_unused_flags(self) -> None:
        if self._flags_dict:
            raise ValueError(
                f"Unknown flags in VALUESET_FLAGS: {sorted(self._flags_dict)}"
            )

    def __getattr__(self, name):
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"Unknown config flag: {name}") from None

    def __setattr__(self, name, value):
        if name not in self._params:
            raise AttributeError(f"Unknown config flag: {name}")
        self._values[name] = self._params[name].filter(value)

    def __dir__(self):
        return [*super().__dir__(), *self._params]

    def change_flags(self, **kwargs) -> "_ChangeFlagsDecorator":
        return _ChangeFlagsDecorator(self, kwargs)


class _ChangeFlagsDecorator:
    """Temporarily override config flags, as a context manager or decorator."""

    def __init__(self, config: ValuesetConfigParser, new_values: dict[str, Any]):
        for name in new_values:
            if name not in config._params:
                raise AttributeError(f"Unknown config flag: {name}")
        self.config = config
        self.new_values = new_values
        self.old_values: dict[str, Any] = {}

    def __call__(self, f):
        @wraps(f)
        def res(*args, **kwargs):
            with self:
                return f(*args, **kwargs)

        return res

    def __enter__(self):
        self.old_values = {k: getattr(self.config, k) for k in self.new_values}
        for k, v in self.new_values.items():
            setattr(self.config, k, v)
        return self.config

    def __exit__(self, *args):
        for k, v in self.old_values.items():
            setattr(self.config, k, v)


def _create_default_config() -> ValuesetConfigParser:
    return ValuesetConfigParser(parse_config_string(os.getenv("VALUESET_FLAGS", "")))
