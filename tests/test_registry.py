"""Tests for CallableRegistry."""
import logging

import pytest

from grid_context_menu.errors import ConfigurationError
from grid_context_menu.registry import CallableRegistry


class TestCallableRegistry:
    """Test registering and resolving callables."""

    def test_register_decorator(self):
        """Test functions register under their own name."""
        registry = CallableRegistry()

        @registry.register()
        def delete_rows(context):
            return None

        assert 'delete_rows' in registry
        assert registry.resolve('delete_rows') is delete_rows

    def test_register_with_name(self):
        """Test functions register under an explicit name."""
        registry = CallableRegistry()

        @registry.register('remove')
        def delete_rows(context):
            return None

        assert registry.names() == ['remove']

    def test_initial_mapping(self):
        """Test callables passed to the constructor."""
        registry = CallableRegistry({'b': len, 'a': print})
        assert registry.names() == ['a', 'b']
        assert len(registry) == 2

    def test_callables_pass_through(self):
        """Test callables and None resolve to themselves."""
        registry = CallableRegistry()
        assert registry.resolve(len) is len
        assert registry.resolve(None) is None

    def test_unknown_name(self):
        """Test unknown names raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Unknown enable_fn 'x'"):
            CallableRegistry().resolve('x', 'enable_fn')

    def test_non_string_reference(self):
        """Test references must be names."""
        with pytest.raises(ConfigurationError):
            CallableRegistry().resolve(42)

    def test_invalid_registration(self):
        """Test names and callables are validated."""
        registry = CallableRegistry()
        with pytest.raises(ConfigurationError):
            registry.add('', len)
        with pytest.raises(ConfigurationError):
            registry.add('value', 42)

    def test_replacing_logs_warning(self, caplog):
        """Test re-registering a name warns."""
        registry = CallableRegistry({'edit': len})
        with caplog.at_level(logging.WARNING):
            registry.add('edit', print)
        assert registry.resolve('edit') is print
        assert "Replacing registered callable 'edit'" in caplog.text
