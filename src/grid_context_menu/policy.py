"""Record-count enablement policies.

A menu item declares how many records must be active for it to be enabled
through its ``records_required`` value:

* ``False`` - any number of records, including none.
* ``True`` - at least one record.
* ``n`` (int >= 0) - exactly ``n`` records. ``0`` enables the item only when
  nothing is active.

The declared value is normalized once, when the item is built, into one of
the policy classes below.
"""

from .errors import ConfigurationError


class RecordsPolicy:
    """Base class for the record-count policies."""

    __slots__ = ()

    @property
    def declared(self):
        """The ``records_required`` value this policy was built from."""
        raise NotImplementedError

    def allows(self, active_count):
        raise NotImplementedError

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.declared == other.declared

    def __hash__(self):
        return hash((type(self).__name__, self.declared))


class AnyRecords(RecordsPolicy):
    """Enabled for any number of active records."""

    __slots__ = ()

    @property
    def declared(self):
        return False

    def allows(self, active_count):
        return True

    def __repr__(self):
        return "AnyRecords()"


class AtLeastOne(RecordsPolicy):
    """Enabled while at least one record is active."""

    __slots__ = ()

    @property
    def declared(self):
        return True

    def allows(self, active_count):
        return active_count > 0

    def __repr__(self):
        return "AtLeastOne()"


class Exactly(RecordsPolicy):
    """Enabled only when exactly ``count`` records are active."""

    __slots__ = ('_count',)

    def __init__(self, count):
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ConfigurationError(
                f"Exactly() needs a non-negative integer, got {count!r}"
            )
        self._count = count

    @property
    def count(self):
        return self._count

    @property
    def declared(self):
        return self._count

    def allows(self, active_count):
        return active_count == self._count

    def __repr__(self):
        return f"Exactly({self._count})"


DEFAULT_RECORDS_REQUIRED = 1


def records_policy(value=None):
    """Normalize a declared ``records_required`` value into a policy.

    Args:
        value: ``False``, ``True``, a non-negative integer, an existing
            policy, or ``None`` for the default of exactly one record.

    Returns:
        A ``RecordsPolicy`` instance.

    Raises:
        ConfigurationError: If the value is none of the accepted forms.
    """
    if value is None:
        return Exactly(DEFAULT_RECORDS_REQUIRED)
    if isinstance(value, RecordsPolicy):
        return value
    # bool is a subclass of int, so it has to be checked first
    if isinstance(value, bool):
        return AtLeastOne() if value else AnyRecords()
    if isinstance(value, int):
        if value < 0:
            raise ConfigurationError(
                f"records_required must not be negative, got {value}"
            )
        return Exactly(value)
    raise ConfigurationError(
        "records_required must be true, false or a non-negative integer, "
        f"got {value!r}"
    )
