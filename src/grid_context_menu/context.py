"""Selection context handed from the grid to menu items."""
from types import MappingProxyType


class SelectionContext:
    """Records the host considers active when a menu is opened.

    Args:
        selected: Identifiers of the currently selected records. Repeated
            identifiers are kept once, in first-seen order.
        clicked: Identifier of the record the menu was opened on, if any.
            It may lie outside the selection (right-click on another row).
        data: Extra host data passed through to actions and predicates,
            e.g. the clicked column.
    """

    __slots__ = ('_selected', '_clicked', '_data')

    def __init__(self, selected=(), clicked=None, data=None):
        self._selected = tuple(dict.fromkeys(selected))
        self._clicked = clicked
        self._data = MappingProxyType(dict(data or {}))

    @classmethod
    def from_grid(cls, selected_records=(), clicked_record=None, **data):
        return cls(selected_records, clicked_record, data)

    @property
    def selected(self):
        return self._selected

    @property
    def clicked(self):
        return self._clicked

    @property
    def data(self):
        return self._data

    @property
    def active_records(self):
        """Selected records, plus the clicked one when it is not selected."""
        if self._clicked is None or self._clicked in self._selected:
            return self._selected
        return self._selected + (self._clicked,)

    @property
    def active_count(self):
        return len(self.active_records)

    def __repr__(self):
        return (f"SelectionContext(selected={list(self._selected)!r}, "
                f"clicked={self._clicked!r})")
