# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

PropertiesPanel — binding controller between a property host and the
object currently being edited.
=======================================================================

The panel does not draw anything. A host widget (a property grid, a
tree, a form) connects to its signals and asks it for descriptors; the
panel owns the lifecycle of the bound root:

    bind(root)   → flush the previous root, expose the new one
    set_value()  → write through the descriptor, request a refresh when the
                   property asks for one
    apply()      → push staged edits to the real object, then flush
    unset()      → let the root remove its aspect, then flush

Architecture
------------
::

    Host widget  ──signals──►  PropertiesPanel  ──►  DescriptorProvider
                                    │                  (DynamicProperty)
                                    └── root (PropertyGroup) ── apply()/unset()

Signals
-------
bound(object)         new root bound (None never emitted; see flushed)
flushed()             root released; hosts clear their view
applied(list)         names of the properties written by apply()/unset()
refresh_requested()   hosts must re-enumerate descriptors
value_changed(str)    property name written through set_value()/reset_value()
"""

from collections import OrderedDict
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, List, Optional

from PySide6.QtCore import QObject, Signal

from dynprop.descriptor import DescriptorProvider, PropertySpecDescriptor
from dynprop.propertygroup import PropertyGroup

from dynprop.logger import get_logger
log = get_logger("Panel")


@dataclass
class PanelConfig:
    """Behaviour switches for PropertiesPanel."""
    auto_expand: bool = True         # expand expandable items after binding
    refresh_on_apply: bool = True    # emit refresh_requested after apply()/unset()
    max_expand_depth: int = 8        # recursion limit for expand_properties()


def group_by_category(
    descriptors: Iterable[PropertySpecDescriptor],
) -> "OrderedDict[Optional[str], List[PropertySpecDescriptor]]":
    """
    Group descriptors by category, keeping display order.

    Categories appear in the order of their first member; ungrouped
    descriptors are collected under ``None``.
    """
    groups: "OrderedDict[Optional[str], List[PropertySpecDescriptor]]" = OrderedDict()
    for desc in sorted(descriptors, key=lambda d: d.order):
        groups.setdefault(desc.category, []).append(desc)
    return groups


class PropertiesPanel(QObject):
    """
    Holds the currently edited root and mediates every host request.

    ``root`` may be any ``DescriptorProvider``. A ``PropertyGroup`` is
    unwrapped to its ``DynamicProperty`` for enumeration and kept for
    ``apply()`` / ``unset()``.
    """

    bound = Signal(object)
    flushed = Signal()
    applied = Signal(list)
    refresh_requested = Signal()
    value_changed = Signal(str)

    def __init__(self, config: Optional[PanelConfig] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._config = config or PanelConfig()
        self._root: Any = None
        self._provider: Optional[DescriptorProvider] = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> PanelConfig:
        return self._config

    def set_config(self, strict: bool = False, **kwargs: Any) -> None:
        """Update config fields; unknown keys warn, or raise when ``strict``."""
        known = {f.name for f in fields(self._config)}
        unknown_keys = [k for k in kwargs if k not in known]

        if unknown_keys:
            msg = f"Unknown config keys: {unknown_keys}"
            if strict:
                raise ValueError(f"[Panel] {msg}")
            log.warning(msg)

        for k, v in kwargs.items():
            if k in known:
                setattr(self._config, k, v)

    # ------------------------------------------------------------------
    # Binding lifecycle
    # ------------------------------------------------------------------

    @property
    def selected_object(self) -> Any:
        """The bound root, or None."""
        return self._root

    @property
    def provider(self) -> Optional[DescriptorProvider]:
        return self._provider

    @property
    def can_apply(self) -> bool:
        if self._root is None or not hasattr(self._root, "apply"):
            return False
        return bool(getattr(self._root, "is_dirty", True))

    def bind(self, root: Any) -> None:
        """
        Release the current root and expose ``root``.

        Raises:
            TypeError: ``root`` exposes no descriptors. The current root
                stays bound with its staged edits.
        """
        if isinstance(root, PropertyGroup):
            provider: Any = root.dynamic_property
        else:
            provider = root

        if not isinstance(provider, DescriptorProvider):
            raise TypeError(f"Cannot bind {type(root).__name__}: not a descriptor provider")

        self.flush()
        self._root = root
        self._provider = provider
        log.info("Bound %r", root)
        self.bound.emit(root)

    def flush(self) -> None:
        """Release the bound root. Emits ``flushed`` only when something was bound."""
        if self._root is None:
            return
        if isinstance(self._root, PropertyGroup) and self._root.is_dirty:
            log.debug("Flushing %r with unapplied changes", self._root)
            self._root.discard()
        self._root = None
        self._provider = None
        self.flushed.emit()

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def descriptors(self, include_hidden: bool = False) -> List[PropertySpecDescriptor]:
        """Descriptors of the bound root in display order (visible only by default)."""
        if self._provider is None:
            return []
        result = list(self._provider.get_descriptors())
        if not include_hidden:
            result = [d for d in result if d.is_browsable]
        return result

    def categories(self) -> "OrderedDict[Optional[str], List[PropertySpecDescriptor]]":
        return group_by_category(self.descriptors())

    def default_descriptor(self) -> Optional[PropertySpecDescriptor]:
        if self._provider is None:
            return None
        return self._provider.get_default_descriptor()

    def find(self, name: str) -> Optional[PropertySpecDescriptor]:
        """First descriptor called ``name`` (hidden ones included), or None."""
        for desc in self.descriptors(include_hidden=True):
            if desc.name == name:
                return desc
        return None

    def _require(self, name: str) -> PropertySpecDescriptor:
        desc = self.find(name)
        if desc is None:
            raise KeyError(f"No property named '{name}' on the bound object")
        return desc

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get_value(self, name: str) -> Any:
        return self._require(name).get_value(self._root)

    def snapshot(self) -> Dict[str, Any]:
        """Current values of all visible properties (first of duplicate names wins)."""
        values: Dict[str, Any] = {}
        for desc in self.descriptors():
            if desc.name not in values:
                values[desc.name] = desc.get_value(self._root)
        return values

    def set_value(self, name: str, value: Any) -> None:
        """
        Write through the descriptor.

        Raises:
            KeyError: no such property.
            PermissionError: the property is read-only.
        """
        desc = self._require(name)
        if desc.is_read_only:
            raise PermissionError(f"Property '{name}' is read-only")
        desc.set_value(self._root, value)
        self._after_write(desc)

    def reset_value(self, name: str) -> bool:
        """Reset to the default. Returns False when there is nothing to reset."""
        desc = self._require(name)
        if desc.is_read_only or not desc.can_reset_value(self._root):
            return False
        desc.reset_value(self._root)
        self._after_write(desc)
        return True

    def _after_write(self, desc: PropertySpecDescriptor) -> None:
        self.value_changed.emit(desc.name)
        if desc.triggers_refresh:
            log.debug("'%s' changed; requesting refresh", desc.name)
            self.refresh_requested.emit()

    # ------------------------------------------------------------------
    # Apply / Unset
    # ------------------------------------------------------------------

    def apply(self) -> List[str]:
        """Apply staged edits of the root (if it stages), then flush."""
        if self._root is None:
            return []
        names: List[str] = []
        if hasattr(self._root, "apply"):
            names = list(self._root.apply() or [])
        self._finish(names)
        return names

    def unset(self) -> List[str]:
        """Ask the root to remove its aspect, then flush."""
        if self._root is None or not hasattr(self._root, "unset"):
            return []
        names = list(self._root.unset() or [])
        self._finish(names)
        return names

    def _finish(self, names: List[str]) -> None:
        self.applied.emit(names)
        if self._config.refresh_on_apply:
            self.refresh_requested.emit()
        self.flush()

    # ------------------------------------------------------------------
    # Host helpers
    # ------------------------------------------------------------------

    def expand_properties(self, items: Iterable[Any], _depth: int = 0) -> int:
        """
        Expand every expandable host item, recursively.

        Items expose ``is_expandable``, ``is_expanded`` and ``properties``
        (their child items). Returns the number of items expanded.
        """
        if not self._config.auto_expand or _depth >= self._config.max_expand_depth:
            return 0
        count = 0
        for item in items:
            if getattr(item, "is_expandable", False):
                item.is_expanded = True
                count += 1
                count += self.expand_properties(getattr(item, "properties", ()) or (), _depth + 1)
        return count
