import enum
from pathlib import Path, PurePosixPath

import pytest
from PySide6.QtGui import QColor

from dynprop.typeregistry import PropertyTypeError, PropertyTypeRegistry


class Projection(enum.Enum):
    PERSPECTIVE = 1
    ORTHOGRAPHIC = 2


def test_type_objects_resolve_to_themselves():
    assert PropertyTypeRegistry.resolve(int) is int
    assert PropertyTypeRegistry.resolve(Projection) is Projection


def test_registered_names_are_case_insensitive():
    assert PropertyTypeRegistry.resolve("Float") is float
    assert PropertyTypeRegistry.resolve("color") is QColor
    assert PropertyTypeRegistry.resolve("  STRING ") is str


def test_builtin_and_dotted_names():
    assert PropertyTypeRegistry.resolve("bytes") is bytes
    assert PropertyTypeRegistry.resolve("pathlib.PurePosixPath") is PurePosixPath
    assert PropertyTypeRegistry.resolve(f"{__name__}.Projection") is Projection


@pytest.mark.parametrize("bad", ["NoSuchType", "len", "pathlib.NoSuchPath",
                                 "no_such_module_xyz.Thing", "", None, 12])
def test_unresolvable_names_raise(bad):
    with pytest.raises(PropertyTypeError):
        PropertyTypeRegistry.resolve(bad)


def test_property_type_error_is_a_lookup_error():
    with pytest.raises(LookupError) as info:
        PropertyTypeRegistry.resolve("NoSuchType")
    assert info.value.type_name == "NoSuchType"


def test_register_guards_collisions_and_unregister():
    ptype = PropertyTypeRegistry.register("Projection", Projection, editor="combo")
    try:
        assert ptype.type_id >= 200
        assert PropertyTypeRegistry.resolve("projection") is Projection
        assert PropertyTypeRegistry.type_name_of(Projection) == "Projection"
        with pytest.raises(ValueError):
            PropertyTypeRegistry.register("PROJECTION", Projection)
        with pytest.raises(ValueError):
            PropertyTypeRegistry.register("Other", int, type_id=12)
    finally:
        assert PropertyTypeRegistry.unregister("Projection") is ptype
    assert PropertyTypeRegistry.get("Projection") is None


def test_type_name_of_round_trips():
    assert PropertyTypeRegistry.type_name_of(float) == "Float"
    assert PropertyTypeRegistry.type_name_of(bytes) == "bytes"
    name = PropertyTypeRegistry.type_name_of(Projection)
    assert name == f"{__name__}.Projection"
    assert PropertyTypeRegistry.resolve(name) is Projection
    assert PropertyTypeRegistry.resolve(PropertyTypeRegistry.type_name_of(PurePosixPath)) is PurePosixPath


def test_format_value_and_defaults_follow_registered_type():
    assert PropertyTypeRegistry.format_value("Float", 1.5) == "1.50"
    assert PropertyTypeRegistry.format_value(list, [1, 2, 3]) == "List[3]"
    assert PropertyTypeRegistry.format_value(Projection, Projection.ORTHOGRAPHIC) == "ORTHOGRAPHIC"
    assert PropertyTypeRegistry.format_value("Color", QColor(255, 0, 0)) == "#ff0000"
    assert PropertyTypeRegistry.format_value(int, None) == ""

    assert PropertyTypeRegistry.default_for("Int") == 0
    first, second = PropertyTypeRegistry.default_for(list), PropertyTypeRegistry.default_for(list)
    assert first == [] and first is not second
    assert PropertyTypeRegistry.default_for(Path) == Path()


def test_bool_is_not_reported_as_int():
    assert PropertyTypeRegistry.for_python_type(bool).name == "Bool"
    assert PropertyTypeRegistry.for_python_type(object).name == "Generic"
