# -*- coding: utf-8 -*-
"""
dynprop: Runtime-defined property descriptors for generic property editors.
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: Apache-2.0

PropertySpecCollection — ordered, name-addressable list of PropertySpec.

Order is insertion order and is what the host displays. Names are not
required to be unique; every name lookup resolves to the first match.
"""

from collections.abc import MutableSequence
from typing import Iterable, Iterator, List, Optional, Union, overload

from dynprop.spec import PropertySpec


NOT_FOUND = -1


class PropertySpecCollection(MutableSequence):
    """
    Typed list of PropertySpec with secondary lookup by name.

    Only ``PropertySpec`` instances are accepted; anything else raises
    ``TypeError``. Removing a spec or name that is not present is a no-op.
    """

    def __init__(self, specs: Optional[Iterable[PropertySpec]] = None) -> None:
        self._items: List[PropertySpec] = []
        if specs is not None:
            self.add_range(specs)

    @staticmethod
    def _check(spec: object) -> PropertySpec:
        if not isinstance(spec, PropertySpec):
            raise TypeError(f"PropertySpecCollection only holds PropertySpec, got {type(spec).__name__}")
        return spec

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PropertySpec]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> PropertySpec: ...
    @overload
    def __getitem__(self, index: slice) -> List[PropertySpec]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._items[index] = [self._check(s) for s in value]
        else:
            self._items[index] = self._check(value)

    def __delitem__(self, index: Union[int, slice]) -> None:
        del self._items[index]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self.contains_name(item)
        return self.contains(item)

    def __repr__(self) -> str:
        return f"PropertySpecCollection({[s.name for s in self._items]!r})"

    def insert(self, index: int, spec: PropertySpec) -> None:
        self._items.insert(index, self._check(spec))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, spec: PropertySpec) -> int:
        """Append a spec and return its index."""
        self._items.append(self._check(spec))
        return len(self._items) - 1

    def add_range(self, specs: Iterable[PropertySpec]) -> None:
        """Append several specs. Nothing is added if any of them is invalid."""
        checked = [self._check(s) for s in specs]
        self._items.extend(checked)

    def remove(self, spec: PropertySpec) -> None:
        """Remove the first occurrence of ``spec``; no-op if absent."""
        index = self.index_of(spec)
        if index != NOT_FOUND:
            del self._items[index]

    def remove_by_name(self, name: str) -> None:
        """Remove the first spec called ``name``; no-op if none matches."""
        index = self.index_of_name(name)
        if index != NOT_FOUND:
            del self._items[index]

    def remove_at(self, index: int) -> None:
        del self._items[index]

    def clear(self) -> None:
        self._items.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def index_of(self, spec: PropertySpec) -> int:
        for i, item in enumerate(self._items):
            if item is spec or item == spec:
                return i
        return NOT_FOUND

    def index_of_name(self, name: str) -> int:
        for i, item in enumerate(self._items):
            if item.name == name:
                return i
        return NOT_FOUND

    def contains(self, spec: PropertySpec) -> bool:
        return self.index_of(spec) != NOT_FOUND

    def contains_name(self, name: str) -> bool:
        return self.index_of_name(name) != NOT_FOUND

    def get_by_name(self, name: str) -> Optional[PropertySpec]:
        index = self.index_of_name(name)
        return self._items[index] if index != NOT_FOUND else None

    def names(self) -> List[str]:
        return [s.name for s in self._items]

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_array(self) -> List[PropertySpec]:
        """Snapshot of the specs in display order."""
        return list(self._items)

    def copy_to(self, array: List[Optional[PropertySpec]], index: int = 0) -> None:
        """Copy the specs into ``array`` starting at ``index``."""
        if index < 0:
            raise IndexError("copy_to index must be non-negative")
        if len(array) - index < len(self._items):
            raise ValueError("Destination array is too small")
        array[index:index + len(self._items)] = self._items
