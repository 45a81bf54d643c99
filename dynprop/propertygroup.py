# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

PropertyGroup — base class for producers of dynamic properties.
=================================================================

A group describes one editable aspect of some real object (a camera, a
material table, a line style …). It declares its properties once, binds
each to a getter/setter pair, and answers the get/set channel of its
``DynamicProperty``.

Edits are *staged*: the host writes go into a pending map and only reach
the real object on ``apply()``. Reads return the staged value when there
is one, so the host sees its own edits before they are applied::

    class LineGroup(PropertyGroup):
        def __init__(self, line):
            super().__init__(line)
            self.add_property("Width", float, "Line", default=1.0)
            self.add_property("Pattern", str, "Line",
                              getter=line.get_pattern, setter=line.set_pattern)

    group = LineGroup(line)
    panel.bind(group)

Bindings are keyed by spec identity, so duplicate property names stay
independent.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from dynprop.dynamicproperty import DynamicProperty
from dynprop.spec import PropertySpec, PropertySpecEvent
from dynprop.typeregistry import TypeRef

from dynprop.logger import get_logger
log = get_logger("PropertyGroup")

Getter = Callable[[], Any]
Setter = Callable[[Any], None]


@dataclass
class PropertyBinding:
    """Ties one spec to the functions that read and write the real value."""
    spec: PropertySpec
    getter: Optional[Getter] = None
    setter: Optional[Setter] = None


class PropertyGroup:
    """
    Producer base class: owns a DynamicProperty and routes its value
    channel to bound getters/setters through a staging area.

    Subclasses override ``unset()`` when "remove this whole aspect" means
    more than resetting every property to its default.
    """

    def __init__(self, target: Any = None, default_property_name: Optional[str] = None) -> None:
        self._target = target
        self._dynamic = DynamicProperty(default_property_name=default_property_name)
        self._bindings: Dict[int, PropertyBinding] = {}
        self._pending: Dict[int, Any] = {}

        self._dynamic.on_get_value(self._on_get_value)
        self._dynamic.on_set_value(self._on_set_value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {len(self._dynamic.properties)} properties>"

    @property
    def target(self) -> Any:
        return self._target

    @property
    def dynamic_property(self) -> DynamicProperty:
        return self._dynamic

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def add_property(
        self,
        name: str,
        type_name: TypeRef,
        category: Optional[str] = None,
        *,
        getter: Optional[Getter] = None,
        setter: Optional[Setter] = None,
        default: Any = None,
        **flags: Any,
    ) -> PropertySpec:
        """
        Declare a property and bind it.

        Without ``getter``/``setter`` the property reads and writes the
        attribute ``name`` on ``target``. ``flags`` are forwarded to
        ``PropertySpec`` (``read_only``, ``expandable``, ``triggers_refresh``,
        ``browsable``, ``enabled``, ``description``).
        """
        spec = PropertySpec(name, type_name, category, default_value=default, **flags)

        if self._target is not None:
            if getter is None:
                getter = lambda _n=name: getattr(self._target, _n)
            if setter is None and not spec.read_only:
                setter = lambda value, _n=name: setattr(self._target, _n, value)

        self.bind(spec, getter, setter)
        return spec

    def bind(self, spec: PropertySpec, getter: Optional[Getter] = None,
             setter: Optional[Setter] = None) -> PropertyBinding:
        """Bind an existing spec, appending it to the collection if needed."""
        if not self._dynamic.properties.contains(spec):
            self._dynamic.properties.add(spec)
        binding = PropertyBinding(spec, getter, setter)
        self._bindings[id(spec)] = binding
        return binding

    def get_binding(self, spec: PropertySpec) -> Optional[PropertyBinding]:
        return self._bindings.get(id(spec))

    # ------------------------------------------------------------------
    # Value channel
    # ------------------------------------------------------------------

    def _on_get_value(self, sender: DynamicProperty, e: PropertySpecEvent) -> None:
        key = id(e.spec)
        if key in self._pending:
            e.value = self._pending[key]
            return
        binding = self._bindings.get(key)
        if binding is not None and binding.getter is not None:
            e.value = binding.getter()

    def _on_set_value(self, sender: DynamicProperty, e: PropertySpecEvent) -> None:
        self._pending[id(e.spec)] = e.value
        log.debug("Staged %s = %r", e.spec.name, e.value)

    def read(self, spec: PropertySpec) -> Any:
        """Current value of ``spec`` as the host would see it."""
        e = PropertySpecEvent(spec)
        self._on_get_value(self._dynamic, e)
        return e.value

    # ------------------------------------------------------------------
    # Staging
    # ------------------------------------------------------------------

    @property
    def is_dirty(self) -> bool:
        return bool(self._pending)

    def pending_changes(self) -> Dict[str, Any]:
        """Staged values by property name, in display order."""
        return {spec.name: self._pending[id(spec)]
                for spec in self._dynamic.properties if id(spec) in self._pending}

    def discard(self) -> None:
        self._pending.clear()

    def apply(self) -> List[str]:
        """
        Push staged values to the real object in display order.

        Returns the names of the properties that were written. Staged
        values for unbound or setter-less properties are dropped with a
        warning. Setter exceptions propagate; values not yet applied stay
        staged.
        """
        applied: List[str] = []
        for spec in self._dynamic.properties:
            key = id(spec)
            if key not in self._pending:
                continue
            binding = self._bindings.get(key)
            if binding is None or binding.setter is None:
                log.warning("No setter for '%s'; staged value dropped", spec.name)
                del self._pending[key]
                continue
            binding.setter(self._pending[key])
            del self._pending[key]
            applied.append(spec.name)

        # Specs removed from the collection after being staged
        if self._pending:
            log.debug("Discarding %d staged values for removed properties", len(self._pending))
            self._pending.clear()

        log.info("%s applied %d change(s)", type(self).__name__, len(applied))
        return applied

    def unset(self) -> List[str]:
        """Reset every writable property that differs from its default, then apply."""
        for desc in self._dynamic.get_descriptors():
            if not desc.is_read_only and desc.can_reset_value():
                desc.reset_value()
        return self.apply()
