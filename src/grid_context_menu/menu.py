"""Menu structure and node representation."""
import logging

from .errors import ConfigurationError, ValidationError
from .policy import records_policy

logger = logging.getLogger(__name__)

SEPARATOR = '-'

DISPLAY_FIELDS = (
    'name', 'icon', 'tooltip', 'secondary_text', 'intent', 'class_name',
    'hidden', 'disabled',
)


def is_separator(item):
    return isinstance(item, str) and item == SEPARATOR


def claim_items(owner, items):
    """Check and take ownership of menu entries.

    Every entry must be a ``MenuItemModel`` or the separator, and no item
    may already belong to a menu or appear twice. Items are only marked
    owned once all of them pass.

    Args:
        owner: Name of the owning menu, used in errors.
        items: Sequence of entries.

    Raises:
        ConfigurationError: If an entry is invalid or already owned.
    """
    seen = set()
    for item in items:
        if is_separator(item):
            continue
        if not isinstance(item, MenuItemModel):
            raise ConfigurationError(
                f"{owner}: menu entries must be menu items or "
                f"'{SEPARATOR}', got {item!r}"
            )
        if item._owned or id(item) in seen:
            raise ConfigurationError(
                f"{owner}: item '{item.name}' already belongs to a menu"
            )
        seen.add(id(item))
    for item in items:
        if not is_separator(item):
            item._owned = True


class MenuItemModel:
    """A single entry of a context menu, or a submenu when it has items.

    Nodes are built bottom-up and are read-only once constructed. Each child
    belongs to exactly one parent; use ``replace()`` to derive a changed copy.

    Args:
        name: Display label, required. Must contain at least one
            non-whitespace character.
        icon: Opaque icon handle, passed through to the renderer.
        action: Callable ``(context) -> None``. Never called by the model.
        items: Child items (``MenuItemModel`` or the ``'-'`` separator).
            A non-empty sequence makes this node a submenu.
        enable_fn: Predicate ``(context) -> bool`` checked on top of the
            record-count policy.
        records_required: ``False``, ``True`` or a non-negative integer.
            Defaults to exactly one active record.
        disabled: Disable the item regardless of the context.
        hidden: Ask the renderer to leave the item out.
        tooltip: Optional hover text.
        secondary_text: Optional secondary label.
        intent: Optional renderer hint such as ``'danger'``.
        class_name: Optional style class for the renderer.
        display_fn: Callable ``(context) -> dict`` returning per-render
            overrides for the display fields.

    Raises:
        ValidationError: If ``name`` is missing, empty or only whitespace.
        ConfigurationError: If ``records_required`` or ``items`` is invalid.
    """

    __slots__ = (
        '_name', '_icon', '_action', '_items', '_enable_fn', '_records_required',
        '_disabled', '_hidden', '_tooltip', '_secondary_text', '_intent',
        '_class_name', '_display_fn', '_owned',
    )

    def __init__(self, name, icon=None, action=None, items=None, enable_fn=None,
                 records_required=None, disabled=False, hidden=False,
                 tooltip=None, secondary_text=None, intent=None, class_name=None,
                 display_fn=None):
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"Menu item needs a non-empty name, got {name!r}")
        for label, fn in (('action', action), ('enable_fn', enable_fn),
                          ('display_fn', display_fn)):
            if fn is not None and not callable(fn):
                raise ConfigurationError(f"{name}: {label} must be callable, got {fn!r}")

        self._name = name
        self._icon = icon
        self._action = action
        self._enable_fn = enable_fn
        self._records_required = records_policy(records_required)
        self._disabled = bool(disabled)
        self._hidden = bool(hidden)
        self._tooltip = tooltip
        self._secondary_text = secondary_text
        self._intent = intent
        self._class_name = class_name
        self._display_fn = display_fn
        self._items = self._adopt(items)
        self._owned = False

    def _adopt(self, items):
        if items is None:
            return ()
        if isinstance(items, (str, bytes)) or not hasattr(items, '__iter__'):
            raise ConfigurationError(f"{self._name}: items must be a sequence, got {items!r}")
        children = tuple(items)
        if not children:
            return ()
        if all(is_separator(child) for child in children):
            raise ConfigurationError(f"{self._name}: submenu has only separators")
        claim_items(self._name, children)
        logger.debug("Built submenu '%s' with %d entries", self._name, len(children))
        return children

    def __setattr__(self, key, value):
        # _owned is assigned last in __init__, which freezes the node
        if hasattr(self, '_owned') and key != '_owned':
            raise AttributeError(f"MenuItemModel is read-only, cannot set {key!r}")
        object.__setattr__(self, key, value)

    @property
    def name(self):
        return self._name

    @property
    def icon(self):
        return self._icon

    @property
    def action(self):
        return self._action

    @property
    def items(self):
        return self._items

    @property
    def enable_fn(self):
        return self._enable_fn

    @property
    def records_required(self):
        """The normalized ``RecordsPolicy`` of this item."""
        return self._records_required

    @property
    def disabled(self):
        return self._disabled

    @property
    def hidden(self):
        return self._hidden

    @property
    def tooltip(self):
        return self._tooltip

    @property
    def secondary_text(self):
        return self._secondary_text

    @property
    def intent(self):
        return self._intent

    @property
    def class_name(self):
        return self._class_name

    @property
    def display_fn(self):
        return self._display_fn

    @property
    def is_submenu(self):
        return bool(self._items)

    @property
    def children(self):
        """Child menu items, without separators."""
        return tuple(it for it in self._items if not is_separator(it))

    def is_enabled(self, context):
        """Check whether the item is actionable for the given selection.

        The record-count policy and ``enable_fn`` must both pass, and the
        item must not be statically disabled. Never calls ``action``.

        Args:
            context: Object exposing ``active_count``, usually a
                ``SelectionContext``.
        """
        if self._disabled:
            return False
        if not self._records_required.allows(context.active_count):
            return False
        if self._enable_fn is not None:
            return bool(self._enable_fn(context))
        return True

    def display_spec(self, context):
        """Display fields for one render, with ``display_fn`` overrides applied."""
        spec = {field: getattr(self, field) for field in DISPLAY_FIELDS}
        if self._display_fn is None:
            return spec
        overrides = self._display_fn(context) or {}
        unknown = set(overrides) - set(DISPLAY_FIELDS)
        if unknown:
            raise ConfigurationError(
                f"{self._name}: display_fn returned unknown fields {sorted(unknown)}"
            )
        spec.update(overrides)
        return spec

    def _fields(self):
        return {
            'name': self._name,
            'icon': self._icon,
            'action': self._action,
            'enable_fn': self._enable_fn,
            'records_required': self._records_required,
            'disabled': self._disabled,
            'hidden': self._hidden,
            'tooltip': self._tooltip,
            'secondary_text': self._secondary_text,
            'intent': self._intent,
            'class_name': self._class_name,
            'display_fn': self._display_fn,
        }

    def replace(self, **changes):
        """Return a copy of this item with the given fields changed.

        When ``items`` is not changed, the children are copied as well so
        that both trees keep exclusive ownership of their nodes.
        """
        config = self._fields()
        unknown = set(changes) - set(config) - {'items'}
        if unknown:
            raise TypeError(f"replace() got unexpected fields {sorted(unknown)}")
        if 'items' not in changes:
            config['items'] = [
                it if is_separator(it) else it.replace() for it in self._items
            ] or None
        config.update(changes)
        return MenuItemModel(**config)

    def to_config(self):
        """Return the configuration this item was built from.

        Optional fields left at their defaults are omitted; child items are
        converted recursively.
        """
        config = {}
        for key, value in self._fields().items():
            if key == 'records_required':
                config[key] = value.declared
            elif key == 'name' or (value is not None and value is not False):
                config[key] = value
        if self._items:
            config['items'] = [
                it if is_separator(it) else it.to_config() for it in self._items
            ]
        return config

    def __repr__(self):
        kind = 'submenu' if self.is_submenu else 'item'
        return f"MenuItemModel({self._name!r}, {kind}, {self._records_required!r})"
