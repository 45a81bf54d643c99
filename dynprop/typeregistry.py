# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

Type resolution for property specs.

A ``PropertySpec`` carries its type as either a Python ``type`` or a
string. Hosts need a real type to pick an editor, so every string is
resolved here, in this order:

1. a registered name (case-insensitive): ``"Float"``, ``"color"``
2. a builtin name: ``"int"``, ``"bytes"``
3. a dotted import path: ``"pathlib.Path"``, ``"mypkg.kits.Projection"``

Resolution failure raises ``PropertyTypeError``. It is the one loud
failure of the descriptor layer: a host cannot render a value whose type
it does not know.
"""

import builtins
import enum
import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, ClassVar, Dict, Optional, Union

from PySide6.QtGui import QColor

from dynprop.logger import get_logger
log = get_logger("TypeRegistry")

TypeRef = Union[str, type]


class PropertyTypeError(LookupError):
    """Raised when a type name cannot be resolved to a Python type."""

    def __init__(self, type_name: Any, reason: str = "") -> None:
        self.type_name = type_name
        msg = f"Cannot resolve property type {type_name!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


@dataclass(frozen=True)
class PropertyType:
    """
    A registered property type.

    ``editor`` is a free-form hint for hosts ("spin", "line", "check",
    "color", "combo", ...). The core never interprets it.
    """
    name: str
    python_type: type
    type_id: int
    editor: str = field(default="line", compare=False)

    # Factory for default values (safe for mutable types like lists)
    default_factory: Callable[[], Any] = field(default=lambda: None, compare=False, hash=False)

    # UI string formatter
    formatter: Callable[[Any], str] = field(default=str, compare=False, hash=False)

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        return self.formatter(value)


class PropertyTypeRegistry:
    """
    Central manager for named property types.
    """
    _by_name: ClassVar[Dict[str, PropertyType]] = {}
    _by_id: ClassVar[Dict[int, PropertyType]] = {}
    _by_python_type: ClassVar[Dict[type, PropertyType]] = {}
    _next_id: ClassVar[int] = 200  # Auto IDs start above built-in range (0-199)

    @classmethod
    def next_type_id(cls) -> int:
        """Return the next available type_id and increment the counter."""
        tid = cls._next_id
        cls._next_id += 1
        return tid

    @classmethod
    def register(cls,
                 name: str,
                 python_type: type,
                 type_id: Optional[int] = None,
                 editor: str = "line",
                 default: Any = None,
                 formatter: Optional[Callable[[Any], str]] = None) -> PropertyType:

        lower_name = name.lower()

        if type_id is None:
            type_id = cls.next_type_id()

        # Collision guards
        if type_id in cls._by_id:
            raise ValueError(f"type_id {type_id} already registered to '{cls._by_id[type_id].name}'")
        if lower_name in cls._by_name:
            raise ValueError(f"Property type '{name}' already registered")

        fact = default if callable(default) else (lambda: default)

        new_type = PropertyType(
            name=name,
            python_type=python_type,
            type_id=type_id,
            editor=editor,
            default_factory=fact,
            formatter=formatter or str,
        )

        cls._by_name[lower_name] = new_type
        cls._by_id[type_id] = new_type
        # First registration wins for reverse lookups (Int before Enum etc.)
        cls._by_python_type.setdefault(python_type, new_type)

        log.debug("Registered property type %s (id=%d)", name, type_id)
        return new_type

    @classmethod
    def unregister(cls, name: str) -> Optional[PropertyType]:
        """Remove a registered type. Returns it, or None if unknown."""
        ptype = cls._by_name.pop(name.lower(), None)
        if ptype is None:
            return None
        cls._by_id.pop(ptype.type_id, None)
        if cls._by_python_type.get(ptype.python_type) is ptype:
            del cls._by_python_type[ptype.python_type]
        return ptype

    @classmethod
    def get(cls, name_or_id: Union[str, int]) -> Optional[PropertyType]:
        """Retrieve a PropertyType by name or ID, or None if not registered."""
        if isinstance(name_or_id, int):
            return cls._by_id.get(name_or_id)
        return cls._by_name.get(str(name_or_id).lower())

    @classmethod
    def for_python_type(cls, python_type: type) -> Optional[PropertyType]:
        """Registered record for a Python type, walking the MRO."""
        for klass in getattr(python_type, "__mro__", (python_type,)):
            ptype = cls._by_python_type.get(klass)
            if ptype is not None and ptype.name.lower() != "generic":
                return ptype
        return cls._by_name.get("generic")

    @classmethod
    def resolve(cls, type_name: TypeRef) -> type:
        """
        Resolve a type reference to a Python type.

        Raises:
            PropertyTypeError: if the reference names no known type.
        """
        if isinstance(type_name, type):
            return type_name
        if not isinstance(type_name, str) or not type_name.strip():
            raise PropertyTypeError(type_name, "expected a type or a non-empty string")

        text = type_name.strip()

        registered = cls._by_name.get(text.lower())
        if registered is not None:
            return registered.python_type

        if "." not in text:
            builtin = getattr(builtins, text, None)
            if isinstance(builtin, type):
                return builtin
            raise PropertyTypeError(type_name, "not a registered or builtin type")

        return cls._import_type(text)

    @staticmethod
    def _import_type(dotted: str) -> type:
        """Import ``package.module.Qual.Name``, trying the longest module prefix first."""
        parts = dotted.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                obj: Any = importlib.import_module(module_name)
            except ImportError:
                continue
            for attr in parts[split:]:
                obj = getattr(obj, attr, None)
                if obj is None:
                    break
            if isinstance(obj, type):
                return obj
            raise PropertyTypeError(dotted, f"'{module_name}' has no type '{'.'.join(parts[split:])}'")
        raise PropertyTypeError(dotted, "no importable module prefix")

    @classmethod
    def type_name_of(cls, python_type: type) -> str:
        """
        Serializable name for a Python type: the registered name when one
        exists, otherwise its dotted import path.
        """
        ptype = cls._by_python_type.get(python_type)
        if ptype is not None:
            return ptype.name
        if python_type.__module__ == "builtins":
            return python_type.__qualname__
        return f"{python_type.__module__}.{python_type.__qualname__}"

    @classmethod
    def format_value(cls, type_name: TypeRef, value: Any) -> str:
        """Display string for a value using its type's formatter."""
        ptype = cls.for_python_type(cls.resolve(type_name))
        if ptype is None:
            return "" if value is None else str(value)
        return ptype.format(value)

    @classmethod
    def default_for(cls, type_name: TypeRef) -> Any:
        """Fresh default value for a type, or None when it has no factory."""
        ptype = cls.for_python_type(cls.resolve(type_name))
        return ptype.default_factory() if ptype is not None else None


# ============================================================================
# BUILT-IN TYPE ID MAP
# ============================================================================
#
#    0  = Generic     (object — any value, read-only text editor)
#   11  = Float
#   12  = Int
#   20  = Bool
#   30  = String
#   41  = List
#   42  = Tuple
#   50  = Dict
#  111  = Color       (QColor)
#  120  = Path
#  121  = Enum
#
#  200+ = Reserved for user-registered custom types
#
# ============================================================================


def _format_color(c: QColor) -> str:
    return c.name(QColor.NameFormat.HexArgb) if c.alpha() < 255 else c.name()


def setup_default_types() -> None:
    """Register all built-in property types. Called once on import."""
    if PropertyTypeRegistry.get("Generic") is not None:
        return

    _reg = PropertyTypeRegistry.register

    _reg("Generic", object, 0, editor="line")
    _reg("Bool", bool, 20, editor="check", default=False)
    _reg("Int", int, 12, editor="spin", default=0)
    _reg("Float", float, 11, editor="spin", default=0.0,
         formatter=lambda x: f"{float(x):.2f}")
    _reg("String", str, 30, editor="line", default="")
    _reg("List", list, 41, editor="expand", default=list,
         formatter=lambda x: f"List[{len(x)}]")
    _reg("Tuple", tuple, 42, editor="expand", default=tuple,
         formatter=lambda x: f"Tuple({len(x)})")
    _reg("Dict", dict, 50, editor="expand", default=dict,
         formatter=lambda x: f"Dict{{{len(x)}}}")
    _reg("Color", QColor, 111, editor="color", default=lambda: QColor(0, 0, 0),
         formatter=_format_color)
    _reg("Path", Path, 120, editor="file", default=Path,
         formatter=lambda p: p.as_posix())
    _reg("Enum", enum.Enum, 121, editor="combo",
         formatter=lambda e: e.name)


setup_default_types()
