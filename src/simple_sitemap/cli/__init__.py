"""simple-sitemap CLI: sitemap generation and route inspection.

Entry point registered as ``simple-sitemap`` in ``pyproject.toml``::

    [project.scripts]
    simple-sitemap = "simple_sitemap.cli:main"
"""

import argparse
import logging
import sys


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``simple-sitemap`` command."""
    parser = argparse.ArgumentParser(
        prog="simple-sitemap",
        description="Generate XML sitemaps from page files, route rules and URL endpoints.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    subparsers = parser.add_subparsers(dest="command")

    # -- simple-sitemap generate -----------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Write sitemap files")
    generate_parser.add_argument("-c", "--config", default=None, help="TOML config file")
    generate_parser.add_argument("-o", "--output", default="public", help="Output directory")
    generate_parser.add_argument("--site-url", default=None, help="Canonical site URL")
    generate_parser.add_argument(
        "--pages-dir",
        action="append",
        dest="pages_dirs",
        default=None,
        help="Pages directory to infer routes from (repeatable)",
    )
    generate_parser.add_argument(
        "--stage",
        action="append",
        dest="stages",
        default=[],
        help="Pipeline stage import string, e.g. mysite.sitemap:add_images (repeatable)",
    )
    generate_parser.add_argument(
        "--routes-cache",
        action="store_true",
        help="Write __sitemap__/routes.json instead of the sitemap",
    )

    # -- simple-sitemap routes -------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes inferred from page files")
    routes_parser.add_argument("pages_dirs", nargs="+", help="Pages directories")
    routes_parser.add_argument(
        "--extension",
        action="append",
        dest="extensions",
        default=None,
        help="Page file extension (repeatable, default: .vue .py .html .md)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose, args.quiet)

    if args.command == "generate":
        from simple_sitemap.cli._generate import run_generate

        run_generate(args)
    elif args.command == "routes":
        from simple_sitemap.cli._routes import run_routes

        run_routes(args)
