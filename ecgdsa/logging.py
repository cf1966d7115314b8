# Copyright (C) 2026 The ecgdsa developers
# Distributed under the MIT software license, see the accompanying
# file LICENCE or http://www.opensource.org/licenses/mit-license.php

import logging
import copy
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .simple_config import SimpleConfig


class LogFormatterForConsole(logging.Formatter):

    def format(self, record):
        record = _shorten_name_of_logrecord(record)
        return super().format(record)


# keep console log lines short... no timestamp, short levelname, no "ecgdsa."
console_formatter = LogFormatterForConsole(fmt="%(levelname).1s | %(name)s | %(message)s")


def _shorten_name_of_logrecord(record: logging.LogRecord) -> logging.LogRecord:
    record = copy.copy(record)  # avoid mutating arg
    # strip the main module name from the logger name
    if record.name.startswith("ecgdsa."):
        record.name = record.name[7:]
    return record


console_stderr_handler = None
def _configure_stderr_logging(*, verbosity=None):
    # log to stderr; by default only WARNING and higher
    global console_stderr_handler
    if console_stderr_handler is not None:
        _logger.warning("stderr handler already exists")
        return
    console_stderr_handler = logging.StreamHandler(sys.stderr)
    console_stderr_handler.setFormatter(console_formatter)
    if not verbosity:
        console_stderr_handler.setLevel(logging.WARNING)
        root_logger.addHandler(console_stderr_handler)
    else:
        console_stderr_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(console_stderr_handler)
        _process_verbosity_log_levels(verbosity)


def _process_verbosity_log_levels(verbosity):
    if verbosity == '*' or not isinstance(verbosity, str):
        return
    # example verbosity:
    #   debug,pkcs8=warning            // everything but the private key codec
    #   warning,curve_registry=debug   // only the registry
    filters = verbosity.split(',')
    for filt in filters:
        if not filt: continue
        items = filt.split('=')
        if len(items) == 1:
            level = items[0]
            ecgdsa_logger.setLevel(level.upper())
        elif len(items) == 2:
            logger_name, level = items
            logger = get_logger(logger_name)
            logger.setLevel(level.upper())
        else:
            raise Exception(f"invalid log filter: {filt}")


def _remove_stderr_logging():
    global console_stderr_handler
    if console_stderr_handler is not None:
        root_logger.removeHandler(console_stderr_handler)
        console_stderr_handler = None


# the root logger is left alone: applications embedding the library
# decide where their logs go
root_logger = logging.getLogger()

# creates a logger specifically for the ecgdsa library
ecgdsa_logger = logging.getLogger("ecgdsa")
ecgdsa_logger.setLevel(logging.DEBUG)


# --- External API

def get_logger(name: str) -> logging.Logger:
    if name.startswith("ecgdsa."):
        name = name[7:]
    return ecgdsa_logger.getChild(name)


_logger = get_logger(__name__)
_logger.setLevel(logging.INFO)


class Logger:

    def __init__(self):
        self.logger = self.__get_logger_for_obj()

    def __get_logger_for_obj(self) -> logging.Logger:
        cls = self.__class__
        if cls.__module__:
            name = f"{cls.__module__}.{cls.__name__}"
        else:
            name = cls.__name__
        try:
            diag_name = self.diagnostic_name()
        except Exception as e:
            raise Exception("diagnostic name not yet available?") from e
        if diag_name:
            name += f".[{diag_name}]"
        return get_logger(name)

    def diagnostic_name(self):
        return ''


def configure_logging(config: 'SimpleConfig') -> None:
    verbosity = config.VERBOSITY
    # reconfiguring replaces the previous stderr handler
    _remove_stderr_logging()
    _configure_stderr_logging(verbosity=verbosity)

    from .version import ECGDSA_VERSION
    _logger.info(f"ecgdsa version: {ECGDSA_VERSION}")
    _logger.info(f"Python version: {sys.version}")
    _logger.info(f"Log filters: verbosity {repr(verbosity)}")

