import sys
import argparse
import logging
from pathlib import Path

# Local imports
from .context import SelectionContext
from .errors import ConfigurationError, MenuError
from .loader import load_menu
from .registry import CallableRegistry

logger = logging.getLogger(__name__)


class _AnyCallable(CallableRegistry):
    """Resolves every callable name to a placeholder.

    Menu files are checked without the host application, so actions and
    predicates named in them can't be looked up. Predicates resolve to
    ``True``, display functions change nothing and actions do nothing.
    """

    def resolve(self, ref, kind='callable'):
        if ref is None or callable(ref):
            return ref
        if not isinstance(ref, str):
            raise ConfigurationError(f"Expected {kind} name, got {ref!r}")
        if kind == 'display_fn':
            return lambda context: {}
        if kind == 'action':
            return lambda context: None
        return lambda context: True


def format_entries(entries, indent=0):
    """Render evaluated entries as indented text lines."""
    lines = []
    pad = '  ' * indent
    for entry in entries:
        if entry.is_separator:
            lines.append(f"{pad}----")
            continue
        mark = '[x]' if entry.enabled else '[ ]'
        suffix = ' >' if entry.is_submenu else ''
        lines.append(f"{pad}{mark} {entry.name}{suffix}")
        lines.extend(format_entries(entry.items, indent + 1))
    return lines


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Check a context menu file against a record selection"
    )
    parser.add_argument("--config", default="menu.yaml", help="Path to menu file")
    parser.add_argument("--selected", nargs='*', default=[], metavar='ID',
                        help="Identifiers of the selected records")
    parser.add_argument("--clicked", default=None, metavar='ID',
                        help="Identifier of the clicked record")
    parser.add_argument("--debug", action='store_true', help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    try:
        menu = load_menu(Path(args.config), _AnyCallable())
    except MenuError as e:
        logger.error(f"Failed to load menu: {e}")
        return 1

    context = SelectionContext(args.selected, args.clicked)
    logger.info(f"{context.active_count} active record(s)")
    for line in format_entries(menu.evaluate(context)):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
