# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

logger.py — one ``logging`` tree for the whole package.

Every module asks for ``get_logger("Tag")`` and logs under
``DynProp.Tag``. Applications that want to see the output call
``setup_logging()`` once; libraries embedding dynprop attach their own
handlers to the ``DynProp`` logger instead.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "DynProp"


class PropertyFormatter(logging.Formatter):
    """``[Tag] LEVEL message``, with a timestamp prefix for file output."""

    CONSOLE_FMT = "[%(module_tag)s] %(levelname)-5s %(message)s"
    FILE_FMT    = "%(asctime)s " + CONSOLE_FMT

    def __init__(self, use_timestamp: bool = False) -> None:
        super().__init__(fmt=self.FILE_FMT if use_timestamp else self.CONSOLE_FMT,
                         datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        # "DynProp.Panel" → "Panel"
        if not hasattr(record, "module_tag"):
            record.module_tag = record.name.rsplit(".", 1)[-1]
        return super().format(record)


def get_logger(module_tag: str) -> logging.Logger:
    """Logger for one module, a child of the ``DynProp`` root."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_tag}")


def setup_logging(
    level: int = logging.INFO,
    stream=None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a console handler (and optionally a file handler) to the root
    ``DynProp`` logger. Repeated calls only change the level.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not root.handlers:
        console = logging.StreamHandler(stream or sys.stdout)
        console.setFormatter(PropertyFormatter())
        root.addHandler(console)

        if log_file:
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(PropertyFormatter(use_timestamp=True))
            root.addHandler(fh)

    return root
