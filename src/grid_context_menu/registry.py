"""Named actions and predicates referenced from menu files."""
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class CallableRegistry:
    """Maps names used in menu files to Python callables.

    Example:
        registry = CallableRegistry()

        @registry.register()
        def delete_rows(context):
            ...
    """

    def __init__(self, callables=None):
        self._callables = {}
        for name, fn in (callables or {}).items():
            self.add(name, fn)

    def add(self, name, fn):
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Callable name must be a non-empty string, got {name!r}")
        if not callable(fn):
            raise ConfigurationError(f"'{name}' is not callable: {fn!r}")
        if name in self._callables:
            logger.warning("Replacing registered callable '%s'", name)
        self._callables[name] = fn
        return fn

    def register(self, name=None):
        """Decorator registering a function under ``name`` or its own name."""
        def decorator(fn):
            return self.add(name or fn.__name__, fn)
        return decorator

    def resolve(self, ref, kind='callable'):
        """Return the callable for ``ref``.

        Callables pass through unchanged and ``None`` stays ``None``.
        ``kind`` names the field being resolved and is used in errors.

        Raises:
            ConfigurationError: If ``ref`` names nothing registered.
        """
        if ref is None or callable(ref):
            return ref
        if not isinstance(ref, str):
            raise ConfigurationError(f"Expected {kind} name, got {ref!r}")
        try:
            return self._callables[ref]
        except KeyError:
            raise ConfigurationError(f"Unknown {kind} '{ref}'") from None

    def names(self):
        return sorted(self._callables)

    def __contains__(self, name):
        return name in self._callables

    def __len__(self):
        return len(self._callables)
