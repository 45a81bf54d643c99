# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

DynamicProperty — an object whose properties are defined at runtime.

A producer fills ``properties`` with PropertySpec entries and registers a
get and a set listener. A host enumerates ``get_descriptors()`` and reads
or writes through the returned descriptors; each read/write becomes a
call into the listeners::

    dyn = DynamicProperty()
    dyn.properties.add(PropertySpec("Size", int, "Appearance", default_value=10))

    @dyn.on_get_value
    def _get(sender, e):
        e.value = backing[e.spec.name]

    @dyn.on_set_value
    def _set(sender, e):
        backing[e.spec.name] = e.value

Listener policy
---------------
Any number of listeners may be registered; they run synchronously, in
registration order, with signature ``fn(sender, event)``.

* get: all listeners see the same event; the value left in it after the
  last listener is the result ("last result wins").
* set: every listener is invoked.

A callable registered twice is kept once. Exceptions raised by listeners
propagate to the caller unchanged.
"""

from typing import Callable, List, Optional

from dynprop.collection import PropertySpecCollection, NOT_FOUND
from dynprop.descriptor import PropertyAttributes, PropertySpecDescriptor
from dynprop.spec import PropertySpecEvent

from dynprop.logger import get_logger
log = get_logger("DynamicProperty")

PropertySpecListener = Callable[["DynamicProperty", PropertySpecEvent], None]


class DynamicProperty:
    """
    Owner of one PropertySpecCollection and of the get/set value channel.

    Holds no property values. ``default_property_name`` names the property
    a host should focus first.
    """

    def __init__(self,
                 properties: Optional[PropertySpecCollection] = None,
                 default_property_name: Optional[str] = None) -> None:
        self._properties = properties if properties is not None else PropertySpecCollection()
        self.default_property_name: Optional[str] = default_property_name
        self._get_listeners: List[PropertySpecListener] = []
        self._set_listeners: List[PropertySpecListener] = []

    def __str__(self) -> str:
        # Hosts print the bound object next to its expander; keep it blank.
        return ""

    def __repr__(self) -> str:
        return f"<DynamicProperty {len(self._properties)} properties>"

    @property
    def properties(self) -> PropertySpecCollection:
        return self._properties

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def on_get_value(self, fn: PropertySpecListener) -> PropertySpecListener:
        """Register a get listener. Returns ``fn`` so it works as a decorator."""
        if fn not in self._get_listeners:
            self._get_listeners.append(fn)
        return fn

    def on_set_value(self, fn: PropertySpecListener) -> PropertySpecListener:
        """Register a set listener. Returns ``fn`` so it works as a decorator."""
        if fn not in self._set_listeners:
            self._set_listeners.append(fn)
        return fn

    def remove_get_listener(self, fn: PropertySpecListener) -> None:
        if fn in self._get_listeners:
            self._get_listeners.remove(fn)

    def remove_set_listener(self, fn: PropertySpecListener) -> None:
        if fn in self._set_listeners:
            self._set_listeners.remove(fn)

    def _emit_get(self, event: PropertySpecEvent) -> None:
        for fn in list(self._get_listeners):
            fn(self, event)

    def _emit_set(self, event: PropertySpecEvent) -> None:
        if not self._set_listeners:
            log.debug("No set listener; dropped write to '%s'", event.spec.name)
            return
        for fn in list(self._set_listeners):
            fn(self, event)

    # ------------------------------------------------------------------
    # Descriptor protocol
    # ------------------------------------------------------------------

    def _make_descriptor(self, index: int) -> PropertySpecDescriptor:
        spec = self._properties[index]
        return PropertySpecDescriptor(spec, self, PropertyAttributes.from_spec(spec, index))

    def get_descriptors(self) -> List[PropertySpecDescriptor]:
        """One fresh descriptor per spec, in collection order."""
        descriptors = [self._make_descriptor(i) for i in range(len(self._properties))]
        log.debug("Synthesized %d descriptors", len(descriptors))
        return descriptors

    def get_default_descriptor(self) -> Optional[PropertySpecDescriptor]:
        if self.default_property_name is None:
            return None
        index = self._properties.index_of_name(self.default_property_name)
        if index == NOT_FOUND:
            log.debug("Default property '%s' not found", self.default_property_name)
            return None
        return self._make_descriptor(index)

    def find_descriptor(self, name: str) -> Optional[PropertySpecDescriptor]:
        """Descriptor for the first spec called ``name``, or None."""
        index = self._properties.index_of_name(name)
        return self._make_descriptor(index) if index != NOT_FOUND else None
