# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0
"""

from dynprop.__about__ import __version__
from dynprop.typeregistry import PropertyType, PropertyTypeRegistry, PropertyTypeError
from dynprop.spec import PropertySpec, PropertySpecEvent
from dynprop.collection import PropertySpecCollection, NOT_FOUND
from dynprop.descriptor import PropertyAttributes, PropertySpecDescriptor, DescriptorProvider
from dynprop.dynamicproperty import DynamicProperty
from dynprop.propertygroup import PropertyBinding, PropertyGroup
from dynprop.panel import PanelConfig, PropertiesPanel, group_by_category
from dynprop.logger import get_logger, setup_logging

__all__ = [
    "__version__",
    "PropertyType", "PropertyTypeRegistry", "PropertyTypeError",
    "PropertySpec", "PropertySpecEvent",
    "PropertySpecCollection", "NOT_FOUND",
    "PropertyAttributes", "PropertySpecDescriptor", "DescriptorProvider",
    "DynamicProperty",
    "PropertyBinding", "PropertyGroup",
    "PanelConfig", "PropertiesPanel", "group_by_category",
    "get_logger", "setup_logging",
]
