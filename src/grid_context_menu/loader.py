"""Build menu trees from YAML menu files."""
import logging

import yaml

from .contextmenu import ContextMenu
from .errors import ConfigurationError
from .menu import MenuItemModel, is_separator
from .registry import CallableRegistry

logger = logging.getLogger(__name__)

KEY_ALIASES = {
    'enableFn': 'enable_fn',
    'enable': 'enable_fn',
    'recordsRequired': 'records_required',
    'displayFn': 'display_fn',
    'secondaryText': 'secondary_text',
    'text': 'name',
    'className': 'class_name',
}

ITEM_KEYS = {
    'name', 'icon', 'action', 'items', 'enable_fn', 'records_required',
    'disabled', 'hidden', 'tooltip', 'secondary_text', 'intent', 'class_name',
    'display_fn',
}

CALLABLE_KEYS = ('action', 'enable_fn', 'display_fn')


def _normalize_keys(raw):
    config = {}
    for key, value in raw.items():
        key = KEY_ALIASES.get(key, key)
        if key not in ITEM_KEYS:
            raise ConfigurationError(f"Unknown menu item key '{key}' in {raw!r}")
        if key in config:
            raise ConfigurationError(f"Duplicate menu item key '{key}' in {raw!r}")
        config[key] = value
    return config


def build_item(raw, registry=None):
    """Build one menu item (and its submenu) from a configuration mapping.

    Args:
        raw: Mapping of item fields. ``action``, ``enable_fn`` and
            ``display_fn`` may name callables in ``registry``.
        registry: ``CallableRegistry`` used to resolve callable names.

    Returns:
        A ``MenuItemModel``, or the separator string for ``'-'``.
    """
    if is_separator(raw):
        return raw
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Menu entries must be mappings or '-', got {raw!r}")
    if registry is None:
        registry = CallableRegistry()

    config = _normalize_keys(raw)
    for key in CALLABLE_KEYS:
        if key in config:
            config[key] = registry.resolve(config[key], key)
    if 'items' in config:
        children = config['items']
        if children is not None and not isinstance(children, list):
            raise ConfigurationError(f"'items' must be a list, got {children!r}")
        config['items'] = build_items(children or [], registry) or None
    if 'name' not in config:
        config['name'] = None
    return MenuItemModel(**config)


def build_items(raw_items, registry=None):
    return [build_item(raw, registry) for raw in raw_items]


def build_menu(raw_items, registry=None):
    """Build a ``ContextMenu`` from a list of item configurations."""
    if not isinstance(raw_items, list):
        raise ConfigurationError(f"A menu must be a list of items, got {raw_items!r}")
    menu = ContextMenu(build_items(raw_items, registry))
    logger.debug("Built menu with %d top-level entries", len(menu.items))
    return menu


def load_config(path):
    """Read a YAML menu file."""
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read menu file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in menu file {path}: {e}") from e


def load_menu(path, registry=None):
    """Load a ``ContextMenu`` from a YAML file.

    The file holds either a list of items or a mapping with a ``menu`` list.
    """
    config = load_config(path)
    if isinstance(config, dict):
        if 'menu' not in config:
            raise ConfigurationError(f"Menu file {path} has no 'menu' section")
        config = config['menu']
    logger.info("Loading menu from %s", path)
    return build_menu(config, registry)
