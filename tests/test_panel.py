from dataclasses import dataclass, field
from typing import List

import pytest

from dynprop.dynamicproperty import DynamicProperty
from dynprop.panel import PanelConfig, PropertiesPanel, group_by_category
from dynprop.propertygroup import PropertyGroup
from dynprop.spec import PropertySpec


class Material:
    def __init__(self):
        self.diffuse = "grey"
        self.shininess = 0.5
        self.mode = "basic"
        self.internal_id = 7


class MaterialGroup(PropertyGroup):
    def __init__(self, material):
        super().__init__(material)
        self.add_property("mode", str, "Shading", triggers_refresh=True, default="basic")
        self.add_property("diffuse", str, "Color", default="grey")
        self.add_property("shininess", float, "Shading", default=0.5)
        self.add_property("internal_id", int, read_only=True)
        self.add_property("hidden", int, enabled=False, getter=lambda: 0)


@dataclass
class _Item:
    is_expandable: bool
    properties: List["_Item"] = field(default_factory=list)
    is_expanded: bool = False


def _recorder(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_bind_exposes_visible_descriptors_in_order(qapp):
    panel = PropertiesPanel()
    bound = _recorder(panel.bound)
    group = MaterialGroup(Material())

    panel.bind(group)

    assert panel.selected_object is group
    assert panel.provider is group.dynamic_property
    assert bound == [(group,)]
    assert [d.name for d in panel.descriptors()] == ["mode", "diffuse", "shininess", "internal_id"]
    assert len(panel.descriptors(include_hidden=True)) == 5
    assert list(panel.categories()) == ["Shading", "Color", None]


def test_bind_rejects_objects_without_descriptors(qapp):
    with pytest.raises(TypeError):
        PropertiesPanel().bind(object())


def test_failed_bind_keeps_current_root_and_staged_edits(qapp):
    panel = PropertiesPanel()
    flushed = _recorder(panel.flushed)
    group = MaterialGroup(Material())
    panel.bind(group)
    panel.set_value("diffuse", "red")

    with pytest.raises(TypeError):
        panel.bind(object())

    assert panel.selected_object is group
    assert flushed == []
    assert group.pending_changes() == {"diffuse": "red"}
    assert panel.get_value("diffuse") == "red"


def test_rebinding_flushes_and_discards_staged_edits(qapp):
    panel = PropertiesPanel()
    flushed = _recorder(panel.flushed)
    first = MaterialGroup(Material())
    panel.bind(first)
    panel.set_value("diffuse", "red")

    panel.bind(MaterialGroup(Material()))
    assert len(flushed) == 1
    assert not first.is_dirty


def test_set_value_signals_and_refresh(qapp):
    panel = PropertiesPanel()
    changed = _recorder(panel.value_changed)
    refresh = _recorder(panel.refresh_requested)
    panel.bind(MaterialGroup(Material()))

    panel.set_value("diffuse", "red")
    assert changed == [("diffuse",)]
    assert refresh == []
    assert panel.get_value("diffuse") == "red"

    panel.set_value("mode", "pbr")
    assert refresh == [()]


def test_set_value_errors(qapp):
    panel = PropertiesPanel()
    panel.bind(MaterialGroup(Material()))

    with pytest.raises(PermissionError):
        panel.set_value("internal_id", 1)
    with pytest.raises(KeyError):
        panel.set_value("missing", 1)


def test_reset_value_only_when_different_from_default(qapp):
    panel = PropertiesPanel()
    panel.bind(MaterialGroup(Material()))

    assert panel.reset_value("diffuse") is False
    panel.set_value("diffuse", "red")
    assert panel.reset_value("diffuse") is True
    assert panel.get_value("diffuse") == "grey"
    assert panel.reset_value("internal_id") is False


def test_apply_writes_target_then_flushes(qapp):
    material = Material()
    panel = PropertiesPanel()
    applied = _recorder(panel.applied)
    refresh = _recorder(panel.refresh_requested)
    panel.bind(MaterialGroup(material))
    assert not panel.can_apply

    panel.set_value("shininess", 0.9)
    assert panel.can_apply
    assert panel.apply() == ["shininess"]

    assert material.shininess == 0.9
    assert applied == [(["shininess"],)]
    assert refresh == [()]
    assert panel.selected_object is None
    assert panel.descriptors() == []
    assert panel.apply() == []


def test_unset_restores_defaults(qapp):
    material = Material()
    material.diffuse = "blue"
    panel = PropertiesPanel()
    panel.set_config(refresh_on_apply=False)
    refresh = _recorder(panel.refresh_requested)
    panel.bind(MaterialGroup(material))

    assert panel.unset() == ["diffuse"]
    assert material.diffuse == "grey"
    assert refresh == []


def test_plain_dynamic_property_root(qapp):
    dyn = DynamicProperty(default_property_name="b")
    dyn.properties.add_range([PropertySpec("a", int), PropertySpec("b", int)])
    values = {"a": 1, "b": 2}
    dyn.on_get_value(lambda sender, e: setattr(e, "value", values[e.spec.name]))

    panel = PropertiesPanel()
    panel.bind(dyn)
    assert panel.snapshot() == {"a": 1, "b": 2}
    assert panel.default_descriptor().name == "b"
    assert not panel.can_apply
    assert panel.unset() == []


def test_set_config_strict_and_lenient(qapp):
    panel = PropertiesPanel(PanelConfig(max_expand_depth=2))
    panel.set_config(auto_expand=False, bogus=1)
    assert panel.config.auto_expand is False

    with pytest.raises(ValueError):
        panel.set_config(strict=True, bogus=1)


def test_expand_properties_recurses_up_to_depth(qapp):
    deep = _Item(True, [_Item(True, [_Item(True)])])
    flat = _Item(False, [_Item(True)])
    panel = PropertiesPanel(PanelConfig(max_expand_depth=2))

    assert panel.expand_properties([deep, flat]) == 2
    assert deep.is_expanded and deep.properties[0].is_expanded
    assert not deep.properties[0].properties[0].is_expanded
    assert not flat.is_expanded and not flat.properties[0].is_expanded

    panel.set_config(auto_expand=False)
    assert panel.expand_properties([_Item(True)]) == 0


def test_group_by_category_keeps_first_appearance_order():
    dyn = DynamicProperty()
    dyn.properties.add_range([
        PropertySpec("a", int, "Z"),
        PropertySpec("b", int),
        PropertySpec("c", int, "A"),
        PropertySpec("d", int, "Z"),
    ])
    groups = group_by_category(reversed(dyn.get_descriptors()))
    assert list(groups) == ["Z", None, "A"]
    assert [d.name for d in groups["Z"]] == ["a", "d"]
