"""Tests for building menus from YAML menu files."""
import os
import tempfile

import pytest
import yaml
from unittest.mock import MagicMock

from grid_context_menu.context import SelectionContext
from grid_context_menu.errors import ConfigurationError, ValidationError
from grid_context_menu.loader import build_item, build_menu, load_menu
from grid_context_menu.menu import SEPARATOR
from grid_context_menu.policy import AnyRecords, AtLeastOne, Exactly
from grid_context_menu.registry import CallableRegistry


@pytest.fixture
def registry():
    registry = CallableRegistry()
    registry.add('edit_record', MagicMock(name='edit_record'))
    registry.add('export_csv', MagicMock(name='export_csv'))
    registry.add('is_editable', MagicMock(return_value=True))
    return registry


@pytest.fixture
def menu_config():
    """A sample menu file."""
    return {
        'menu': [
            {'name': 'Edit', 'icon': 'pencil', 'action': 'edit_record', 'enable': 'is_editable'},
            '-',
            {
                'name': 'Export',
                'recordsRequired': True,
                'items': [
                    {'name': 'CSV', 'action': 'export_csv', 'records_required': False},
                    {'name': 'Excel', 'records_required': 0},
                ],
            },
        ]
    }


def create_config_file(config_dict):
    """Helper to create a temporary config file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_dict, f)
        return f.name


class TestBuildItem:
    """Test building single items from mappings."""

    def test_resolves_callables(self, registry):
        """Test action and enable names resolve through the registry."""
        item = build_item(
            {'name': 'Edit', 'action': 'edit_record', 'enableFn': 'is_editable'}, registry
        )
        assert item.action is registry.resolve('edit_record')
        assert item.enable_fn is registry.resolve('is_editable')

    def test_key_aliases(self):
        """Test camelCase and legacy keys are accepted."""
        item = build_item({'text': 'Edit', 'recordsRequired': 2, 'secondaryText': 'F2'})
        assert item.name == 'Edit'
        assert item.records_required == Exactly(2)
        assert item.secondary_text == 'F2'

    def test_separator_passes_through(self):
        """Test '-' stays a separator."""
        assert build_item('-') == SEPARATOR

    def test_renderer_hint_keys(self):
        """Test intent and className reach the item."""
        item = build_item({'name': 'Delete', 'intent': 'danger', 'className': 'row-delete'})
        assert item.intent == 'danger'
        assert item.class_name == 'row-delete'

    def test_unknown_key_rejected(self):
        """Test typos in keys are reported."""
        with pytest.raises(ConfigurationError):
            build_item({'name': 'Edit', 'lable': 'oops'})

    def test_duplicate_alias_rejected(self):
        """Test a key given twice through an alias is reported."""
        with pytest.raises(ConfigurationError):
            build_item({'name': 'Edit', 'text': 'Edit'})

    def test_unknown_callable_rejected(self):
        """Test unregistered callable names fail."""
        with pytest.raises(ConfigurationError, match="Unknown action 'nope'"):
            build_item({'name': 'Edit', 'action': 'nope'})

    def test_missing_name(self):
        """Test a mapping without a name fails validation."""
        with pytest.raises(ValidationError):
            build_item({'icon': 'pencil'})

    def test_invalid_records_required(self):
        """Test records_required errors propagate."""
        with pytest.raises(ConfigurationError):
            build_item({'name': 'Edit', 'records_required': 'two'})
        with pytest.raises(ConfigurationError):
            build_item({'name': 'Edit', 'records_required': -1})

    def test_non_mapping_rejected(self):
        """Test entries must be mappings."""
        with pytest.raises(ConfigurationError):
            build_item(['Edit'])

    def test_items_must_be_list(self):
        """Test submenu items must be a list."""
        with pytest.raises(ConfigurationError):
            build_item({'name': 'More', 'items': {'name': 'Inner'}})

    def test_empty_items_is_leaf(self):
        """Test an empty items list builds a leaf."""
        item = build_item({'name': 'More', 'items': []})
        assert item.is_submenu is False


class TestBuildMenu:
    """Test building whole menus."""

    def test_build_menu(self, registry, menu_config):
        """Test the menu tree matches the configuration."""
        menu = build_menu(menu_config['menu'], registry)
        edit, sep, export = menu.items
        assert edit.name == 'Edit'
        assert edit.icon == 'pencil'
        assert edit.records_required == Exactly(1)
        assert sep == SEPARATOR
        assert export.records_required == AtLeastOne()
        assert [it.name for it in export.items] == ['CSV', 'Excel']
        assert export.items[0].records_required == AnyRecords()

    def test_menu_must_be_list(self):
        """Test a mapping is not a menu."""
        with pytest.raises(ConfigurationError):
            build_menu({'name': 'Edit'})

    def test_evaluate_loaded_menu(self, registry, menu_config):
        """Test a loaded menu evaluates against a selection."""
        menu = build_menu(menu_config['menu'], registry)
        entries = menu.evaluate(SelectionContext(['a']))
        assert [e.name for e in entries] == ['Edit', SEPARATOR, 'Export']
        export = entries[2]
        assert [e.enabled for e in export.items] == [True, False]


class TestLoadMenu:
    """Test loading menu files."""

    def test_load_menu_section(self, registry, menu_config):
        """Test files with a 'menu' section."""
        config_file = create_config_file(menu_config)
        try:
            menu = load_menu(config_file, registry)
            assert [it if it == SEPARATOR else it.name for it in menu.items] == [
                'Edit', SEPARATOR, 'Export'
            ]
        finally:
            os.unlink(config_file)

    def test_load_plain_list(self, registry, menu_config):
        """Test files holding just the item list."""
        config_file = create_config_file(menu_config['menu'])
        try:
            menu = load_menu(config_file, registry)
            assert len(menu.items) == 3
        finally:
            os.unlink(config_file)

    def test_missing_menu_section(self):
        """Test a mapping without 'menu' is rejected."""
        config_file = create_config_file({'items': []})
        try:
            with pytest.raises(ConfigurationError):
                load_menu(config_file)
        finally:
            os.unlink(config_file)

    def test_missing_file(self, tmp_path):
        """Test unreadable files raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            load_menu(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test broken YAML raises ConfigurationError."""
        path = tmp_path / "broken.yaml"
        path.write_text("menu: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_menu(path)
