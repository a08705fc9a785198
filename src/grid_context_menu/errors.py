"""Exceptions raised while building menu trees."""


class MenuError(Exception):
    """Base exception for menu model errors."""

    pass


class ValidationError(MenuError):
    """Raised when a menu item is missing its required name."""

    pass


class ConfigurationError(MenuError):
    """Raised when a menu item or menu file is configured incorrectly."""

    pass
