# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

Project metadata for dynprop.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "dynprop"
__description__: Final[str] = (
    "Runtime-defined property descriptors that let a generic property "
    "editor list, group and edit values it knows nothing about."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "Apache-2.0"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "license": __license__,
        "description": __description__,
    }
