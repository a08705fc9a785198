"""Grid Context Menu - declarative context menu items for record grids."""

from .context import SelectionContext
from .contextmenu import ContextMenu, MenuEntry
from .errors import ConfigurationError, MenuError, ValidationError
from .loader import build_item, build_menu, load_menu
from .menu import MenuItemModel, SEPARATOR
from .policy import AnyRecords, AtLeastOne, Exactly, RecordsPolicy, records_policy
from .registry import CallableRegistry

__all__ = [
    'SelectionContext', 'ContextMenu', 'MenuEntry', 'MenuError', 'ValidationError',
    'ConfigurationError', 'build_item', 'build_menu', 'load_menu', 'MenuItemModel',
    'SEPARATOR', 'AnyRecords', 'AtLeastOne', 'Exactly', 'RecordsPolicy',
    'records_policy', 'CallableRegistry',
]
