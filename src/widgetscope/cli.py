#!/usr/bin/env python3
"""
widgetscope - command-line interface.

Reconstructs the effective contract of compiled component-library widgets:
- resolve: Props (own + inherited), events, styles and inheritance
- chain: Inheritance chain of a widget
- widgets: Widgets found under the runtime root
- search: Glob search under the runtime root
- catalog: Widget catalog entries

Usage:
    widgetscope resolve button                       # Resolve by widget name
    widgetscope resolve path/to/button.props.js      # Resolve by file
    widgetscope resolve button --format yaml         # YAML output
    widgetscope resolve button --effective           # Add effectiveProps view
    widgetscope chain checkboxset                    # Inheritance chain
    widgetscope widgets --category input             # List input widgets
    widgetscope search "*.styles.js"                 # Find style files
    widgetscope catalog                              # Show catalog
    widgetscope --help                               # Show help
"""

import argparse
import logging
import sys
from pathlib import Path

from widgetscope import __version__
from widgetscope.commands.widget import WidgetCommand


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="widgetscope",
        description="widgetscope - effective props, events and styles of compiled widgets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s resolve button                  Resolve widget by name
  %(prog)s resolve src/button.props.js     Resolve widget by props file
  %(prog)s resolve button -f yaml          YAML output
  %(prog)s chain checkboxset               Show inheritance chain
  %(prog)s widgets --category input        List input widgets
  %(prog)s search "*.styledef.ts"          Glob search under runtime root
  %(prog)s catalog                         Show widget catalog

Configuration is read from .widgetscope/config.yaml in the project root.
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--repo",
        type=str,
        help="Project root (default: nearest directory containing .widgetscope/)"
    )
    parser.add_argument(
        "--runtime-root",
        type=str,
        help="Component-library root (overrides paths.runtime_root)"
    )
    parser.add_argument(
        "--styledef-root",
        type=str,
        help="Style-definition root (overrides paths.styledef_root)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ----- widgetscope resolve <target> -----
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve the effective structure of a widget",
        description="Props (own + inherited), events, styles and inheritance of a widget"
    )
    resolve_parser.add_argument("target", type=str, help="Props file path or widget name")
    resolve_parser.add_argument(
        "--format", "-f",
        type=str,
        choices=["json", "yaml"],
        default="json",
        help="Output format (default: json)"
    )
    resolve_parser.add_argument(
        "--effective",
        action="store_true",
        help="Include effectiveProps (first record per property name)"
    )

    # ----- widgetscope chain <target> -----
    chain_parser = subparsers.add_parser(
        "chain",
        help="Show the inheritance chain of a widget"
    )
    chain_parser.add_argument("target", type=str, help="Props file path or widget name")
    chain_parser.add_argument(
        "--format", "-f",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    # ----- widgetscope widgets -----
    widgets_parser = subparsers.add_parser(
        "widgets",
        help="List widgets found under the runtime root"
    )
    widgets_parser.add_argument("--category", "-c", type=str, help="Only this catalog category")
    widgets_parser.add_argument(
        "--format", "-f",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    # ----- widgetscope search <pattern> -----
    search_parser = subparsers.add_parser(
        "search",
        help="Find files under the runtime root by glob pattern"
    )
    search_parser.add_argument("pattern", type=str, help='File name pattern, e.g. "*.props.js"')

    # ----- widgetscope catalog -----
    catalog_parser = subparsers.add_parser(
        "catalog",
        help="Show widget catalog entries"
    )
    catalog_parser.add_argument("--category", "-c", type=str, help="Only this category")
    catalog_parser.add_argument(
        "--format", "-f",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    cmd = WidgetCommand(
        repo_root=Path(args.repo) if args.repo else None,
        runtime_root=Path(args.runtime_root) if args.runtime_root else None,
        styledef_root=Path(args.styledef_root) if args.styledef_root else None,
    )

    if args.command == "resolve":
        return cmd.resolve(args.target, format=args.format, effective=args.effective)
    elif args.command == "chain":
        return cmd.chain(args.target, format=args.format)
    elif args.command == "widgets":
        return cmd.widgets(category=args.category, format=args.format)
    elif args.command == "search":
        return cmd.search(args.pattern)
    elif args.command == "catalog":
        return cmd.list_catalog(category=args.category, format=args.format)

    parser.print_help()
    return 0


def cli() -> int:
    """Console script entry point."""
    return main()


if __name__ == "__main__":
    sys.exit(cli())
