"""Context menus built from menu items and evaluated per render."""
import logging

from .errors import ConfigurationError
from .menu import MenuItemModel, SEPARATOR, claim_items, is_separator

logger = logging.getLogger(__name__)


class MenuEntry:
    """Resolved state of one menu item for a single render."""

    __slots__ = ('item', 'name', 'icon', 'tooltip', 'secondary_text', 'intent',
                 'class_name', 'enabled', 'items')

    def __init__(self, item=None, name=None, icon=None, tooltip=None,
                 secondary_text=None, intent=None, class_name=None,
                 enabled=False, items=()):
        self.item = item
        self.name = name
        self.icon = icon
        self.tooltip = tooltip
        self.secondary_text = secondary_text
        self.intent = intent
        self.class_name = class_name
        self.enabled = enabled
        self.items = list(items)

    @classmethod
    def separator(cls):
        return cls(name=SEPARATOR)

    @property
    def is_separator(self):
        return self.item is None

    @property
    def is_submenu(self):
        return bool(self.items)

    def __repr__(self):
        if self.is_separator:
            return "MenuEntry(separator)"
        state = 'enabled' if self.enabled else 'disabled'
        return f"MenuEntry({self.name!r}, {state}, items={len(self.items)})"


class ContextMenu:
    """Ordered top-level items of a context menu.

    Args:
        items: ``MenuItemModel`` instances, configuration dicts (passed to
            ``MenuItemModel``) or the ``'-'`` separator. Items become owned by
            this menu and can't be reused in another one.
    """

    def __init__(self, items):
        self.items = tuple(self._build(it) for it in items)
        claim_items('context menu', self.items)

    @staticmethod
    def _build(item):
        if is_separator(item) or isinstance(item, MenuItemModel):
            return item
        if isinstance(item, dict):
            config = dict(item)
            if config.get('items'):
                config['items'] = [ContextMenu._build(it) for it in config['items']]
            return MenuItemModel(**config)
        raise ConfigurationError(f"Unsupported context menu entry: {item!r}")

    def walk(self):
        """Yield ``(depth, item)`` for every menu item, depth first."""
        stack = [(0, it) for it in reversed(self.items) if not is_separator(it)]
        while stack:
            depth, item = stack.pop()
            yield depth, item
            stack.extend((depth + 1, child) for child in reversed(item.children))

    def evaluate(self, context):
        """Resolve every visible item against the current selection.

        Hidden items are left out. A submenu's own policy decides whether
        the submenu is enabled; the entries inside a disabled submenu are
        reported disabled as well.

        Returns:
            List of ``MenuEntry``.
        """
        return self._evaluate(self.items, context, parent_enabled=True)

    def _evaluate(self, items, context, parent_enabled):
        entries = []
        for item in items:
            if is_separator(item):
                entries.append(MenuEntry.separator())
                continue
            spec = item.display_spec(context)
            if spec['hidden']:
                continue
            enabled = (parent_enabled and not spec['disabled']
                       and item.is_enabled(context))
            children = self._evaluate(item.items, context, enabled)
            entries.append(MenuEntry(
                item=item,
                name=spec['name'],
                icon=spec['icon'],
                tooltip=spec['tooltip'],
                secondary_text=spec['secondary_text'],
                intent=spec['intent'],
                class_name=spec['class_name'],
                enabled=enabled,
                items=children,
            ))
        return _collapse_separators(entries)

    def trigger(self, item, context):
        """Run ``item.action`` if the item may fire for this context.

        Only enabled, visible leaf items of this menu with an action fire,
        and only when every submenu leading to them is enabled. Submenu
        containers never run their own action.

        Returns:
            True if the action was called.
        """
        if item.is_submenu or item.action is None:
            logger.debug("Not triggering '%s': no leaf action", item.name)
            return False
        if not _is_live(item, context):
            logger.debug("Not triggering '%s': disabled for %r", item.name, context)
            return False
        path = _find_path(self.items, item)
        if path is None:
            logger.warning("Not triggering '%s': item is not part of this menu", item.name)
            return False
        for parent in path[:-1]:
            if not _is_live(parent, context):
                logger.debug("Not triggering '%s': submenu '%s' is disabled",
                             item.name, parent.name)
                return False
        logger.debug("Triggering '%s'", item.name)
        item.action(context)
        return True


def _is_live(item, context):
    spec = item.display_spec(context)
    return not spec['hidden'] and not spec['disabled'] and item.is_enabled(context)


def _find_path(items, target):
    for item in items:
        if is_separator(item):
            continue
        if item is target:
            return [item]
        path = _find_path(item.items, target)
        if path is not None:
            return [item] + path
    return None


def _collapse_separators(entries):
    """Drop leading, trailing and repeated separators."""
    result = []
    for entry in entries:
        if entry.is_separator and (not result or result[-1].is_separator):
            continue
        result.append(entry)
    while result and result[-1].is_separator:
        result.pop()
    return result
