# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

PropertySpec and the event payload passed to get/set listeners.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from dynprop.typeregistry import TypeRef


@dataclass(eq=False)
class PropertySpec:
    """
    Metadata for one dynamic property.

    Specs hold no value. ``default_value`` of ``None`` means "no default":
    the property can never be reset and is persisted whenever it has a value.

    ``enabled`` is the master visibility switch. A disabled spec is hidden
    even when ``browsable`` is True.

    Specs compare by identity, so two specs with equal fields stay two
    distinct members of a collection.
    """
    name: str
    type_name: TypeRef
    category: Optional[str] = None
    expandable: bool = False
    triggers_refresh: bool = False
    read_only: bool = False
    browsable: bool = True
    enabled: bool = True
    default_value: Any = None
    description: str = ""

    @property
    def is_visible(self) -> bool:
        """Whether a host should show this property at all."""
        return bool(self.enabled and self.browsable)


@dataclass
class PropertySpecEvent:
    """
    Mutable payload of a get or set event.

    Get: ``value`` starts as None; listeners fill it in.
    Set: ``value`` is the value to apply.
    """
    spec: PropertySpec
    value: Any = field(default=None)
