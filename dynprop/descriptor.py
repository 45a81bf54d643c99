# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

PropertySpecDescriptor — a "virtual property" for one PropertySpec.
======================================================================

A descriptor owns no storage. Every read and write is routed through the
get/set channel of the owning ``DynamicProperty``; whoever listens there
decides what the value is and where it goes. That lets one adapter serve
any backing object (camera settings, material tables, a plain dict).

Derived attributes
------------------
``PropertyAttributes`` is computed once, when the descriptor is
synthesized, from the spec's fields at that moment:

    category      spec.category (None → ungrouped)
    expandable    spec.expandable
    read_only     spec.read_only
    browsable     spec.browsable if spec.enabled else False
    refresh_all   spec.triggers_refresh
    order         position in the collection, starting at 0

Later edits to the spec do not change an existing descriptor's
attributes; hosts re-enumerate to pick them up.

Defaults
--------
``default_value is None`` means "no default". Comparisons against the
default treat ``None`` as unequal to any non-None value, so a listener that
answers None never breaks ``can_reset_value`` / ``should_serialize_value``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, TYPE_CHECKING, runtime_checkable

from dynprop.spec import PropertySpec, PropertySpecEvent
from dynprop.typeregistry import PropertyTypeRegistry

if TYPE_CHECKING:
    from dynprop.dynamicproperty import DynamicProperty


@dataclass(frozen=True)
class PropertyAttributes:
    """Display/editing attributes a host reads off a descriptor."""
    category: Optional[str] = None
    expandable: bool = False
    read_only: bool = False
    browsable: bool = True
    refresh_all: bool = False
    order: int = 0

    @classmethod
    def from_spec(cls, spec: PropertySpec, order: int) -> "PropertyAttributes":
        return cls(
            category=spec.category,
            expandable=bool(spec.expandable),
            read_only=bool(spec.read_only),
            browsable=spec.is_visible,
            refresh_all=bool(spec.triggers_refresh),
            order=order,
        )


class PropertySpecDescriptor:
    """
    Host-facing adapter for one PropertySpec.

    ``target`` arguments exist for hosts that pass the edited component
    along with every call; the value channel does not use them.
    """

    __slots__ = ("_spec", "_owner", "_attributes")

    def __init__(self,
                 spec: PropertySpec,
                 owner: "DynamicProperty",
                 attributes: PropertyAttributes) -> None:
        self._spec = spec
        self._owner = owner
        self._attributes = attributes

    def __repr__(self) -> str:
        return f"<PropertySpecDescriptor {self.name!r} order={self.order}>"

    # ------------------------------------------------------------------
    # Identity & attributes
    # ------------------------------------------------------------------

    @property
    def spec(self) -> PropertySpec:
        return self._spec

    @property
    def attributes(self) -> PropertyAttributes:
        return self._attributes

    @property
    def name(self) -> str:
        return self._spec.name

    @property
    def display_name(self) -> str:
        return self._spec.name

    @property
    def description(self) -> str:
        return self._spec.description

    @property
    def category(self) -> Optional[str]:
        return self._attributes.category

    @property
    def is_read_only(self) -> bool:
        return self._attributes.read_only

    @property
    def is_browsable(self) -> bool:
        return self._attributes.browsable

    @property
    def is_expandable(self) -> bool:
        return self._attributes.expandable

    @property
    def triggers_refresh(self) -> bool:
        return self._attributes.refresh_all

    @property
    def order(self) -> int:
        return self._attributes.order

    @property
    def component_type(self) -> type:
        return type(self._spec)

    @property
    def property_type(self) -> type:
        """
        The Python type named by ``spec.type_name``.

        Raises:
            PropertyTypeError: when the name does not resolve.
        """
        return PropertyTypeRegistry.resolve(self._spec.type_name)

    # ------------------------------------------------------------------
    # Value channel
    # ------------------------------------------------------------------

    def get_value(self, target: Any = None) -> Any:
        """Ask the owner's get listeners for the current value (None if nobody answers)."""
        event = PropertySpecEvent(self._spec, None)
        self._owner._emit_get(event)
        return event.value

    def set_value(self, target: Any, value: Any) -> None:
        """Hand ``value`` to the owner's set listeners; dropped if there are none."""
        self._owner._emit_set(PropertySpecEvent(self._spec, value))

    def reset_value(self, target: Any = None) -> None:
        self.set_value(target, self._spec.default_value)

    def can_reset_value(self, target: Any = None) -> bool:
        if self._spec.default_value is None:
            return False
        return not self._equals_default(self.get_value(target))

    def should_serialize_value(self, target: Any = None) -> bool:
        return not self._equals_default(self.get_value(target))

    def _equals_default(self, value: Any) -> bool:
        default = self._spec.default_value
        if default is None or value is None:
            return default is None and value is None
        return bool(value == default)


@runtime_checkable
class DescriptorProvider(Protocol):
    """
    Anything a property host can enumerate.

    ``DynamicProperty`` is the stock implementation; other adapters only
    need these two methods.
    """

    def get_descriptors(self) -> Sequence[PropertySpecDescriptor]: ...

    def get_default_descriptor(self) -> Optional[PropertySpecDescriptor]: ...
