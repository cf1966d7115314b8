# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

import json
import os
import threading
from copy import deepcopy
from typing import Any, Callable, Dict, Optional, Union

from .logging import Logger


_config_var_from_key = {}  # type: Dict[str, ConfigVar]


class ConfigVar(property):

    def __init__(
        self,
        key: str,
        *,
        default: Union[Any, Callable[['SimpleConfig'], Any]],  # typically a literal, but can also be a callable
        type_=None,
        choices=None,
        short_desc: Optional[str] = None,
    ):
        self._key = key
        self._default = default
        self._type = type_
        self._choices = choices
        self._short_desc = short_desc
        property.__init__(self, self._get_config_value, self._set_config_value)
        assert key not in _config_var_from_key, f"duplicate config key str: {key!r}"
        _config_var_from_key[key] = self

    def _get_config_value(self, config: 'SimpleConfig'):
        with config.lock:
            if config.is_set(self._key):
                value = config.get(self._key)
                # type-check
                if self._type is not None:
                    assert value is not None, f"got None for key={self._key!r}"
                    try:
                        value = self._type(value)
                    except Exception as e:
                        raise ValueError(
                            f"ConfigVar.get type-check and auto-conversion failed. "
                            f"key={self._key!r}. type={self._type}. value={value!r}") from e
                if self._choices is not None and value not in self._choices:
                    raise ValueError(
                        f"ConfigVar.get value not among choices. "
                        f"key={self._key!r}. choices={self._choices}. value={value!r}")
            else:
                d = self._default
                value = d(config) if callable(d) else d
            return value

    def _set_config_value(self, config: 'SimpleConfig', value):
        if self._type is not None and value is not None:
            if not isinstance(value, self._type):
                raise ValueError(
                    f"ConfigVar.set type-check failed. "
                    f"key={self._key!r}. type={self._type}. value={value!r}")
        if self._choices is not None and value is not None and value not in self._choices:
            raise ValueError(
                f"ConfigVar.set value not among choices. "
                f"key={self._key!r}. choices={self._choices}. value={value!r}")
        config.set_key(self._key, value)

    def key(self) -> str:
        return self._key

    def get_default_value(self) -> Any:
        return self._default

    def get_short_desc(self) -> Optional[str]:
        return self._short_desc

    def __repr__(self):
        return f"<ConfigVar key={self._key!r}>"


class SimpleConfig(Logger):
    """
    There are two different sources of possible configuration values:
        1. Command line options.
        2. User configuration (a JSON file, see read_user_config)
    They are taken in order (1. overrides config options set in 2.)
    """

    def __init__(self, options=None, *, user_config: Optional[Dict[str, Any]] = None):
        if options is None:
            options = {}
        for config_key in options:
            assert isinstance(config_key, str), f"{config_key=!r} has type={type(config_key)}, expected str"

        Logger.__init__(self)

        # This lock needs to be acquired for updating and reading the config in
        # a thread-safe way.
        self.lock = threading.RLock()

        # The command line options. Options left unset by argparse are dropped
        # so that they do not shadow the user config.
        self.cmdline_options = {k: v for k, v in deepcopy(options).items() if v is not None}
        self.user_config = deepcopy(user_config) if user_config else {}

    def set_key(self, key: Union[str, ConfigVar], value) -> None:
        if isinstance(key, ConfigVar):
            key = key.key()
        assert isinstance(key, str), key
        if not self.is_modifiable(key):
            self.logger.warning(f"not changing config key '{key}' set on the command line")
            return
        with self.lock:
            if value is None:
                self.user_config.pop(key, None)
            else:
                self.user_config[key] = value

    def get(self, key: str, default=None) -> Any:
        assert isinstance(key, str), key
        with self.lock:
            out = self.cmdline_options.get(key)
            if out is None:
                out = self.user_config.get(key, default)
        return out

    def is_set(self, key: Union[str, ConfigVar]) -> bool:
        """Returns whether the config key has any explicit value set/defined."""
        if isinstance(key, ConfigVar):
            key = key.key()
        assert isinstance(key, str), key
        return self.get(key, default=...) is not ...

    def is_modifiable(self, key: Union[str, ConfigVar]) -> bool:
        if isinstance(key, ConfigVar):
            key = key.key()
        return key not in self.cmdline_options

    VERBOSITY = ConfigVar(
        'verbosity', default=None,
        short_desc="Log filter, e.g. 'debug' or 'warning,pkcs8=debug'",
    )
    PKCS8_STRICT_CURVE_PARAMS = ConfigVar(
        'pkcs8_strict_curve_params', default=False, type_=bool,
        short_desc="Reject private keys whose algorithm parameters are not a curve OID",
    )
    KEYTOOL_OUTPUT_FORMAT = ConfigVar(
        'keytool_output_format', default='pem', type_=str, choices=('pem', 'der'),
        short_desc="Encoding written by the key tool",
    )


def read_user_config(path: Optional[str]) -> Dict[str, Any]:
    """Parse the JSON config file at path."""
    if not path:
        return {}
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding='utf-8') as f:
            data = f.read()
        result = json.loads(data)
        assert isinstance(result, dict), "config file is not a dict"
    except Exception as e:
        raise ValueError(f"Invalid config file at {path}: {str(e)}")
    return result
