"""``simple-sitemap routes``: list routes inferred from page files.

Prints every route the tree builder produces, the file it came from,
and whether it is static enough to appear in a sitemap.
"""

import argparse
import sys
from pathlib import Path

from simple_sitemap.config import SitemapConfig
from simple_sitemap.errors import ParseError
from simple_sitemap.pages.discovery import list_page_files
from simple_sitemap.pages.tree import build_routes, flatten_routes, is_dynamic_path


def run_routes(args: argparse.Namespace) -> None:
    """Print a PATH / SITEMAP / FILE table of inferred routes."""
    extensions = tuple(args.extensions or SitemapConfig().extensions)

    rows: list[tuple[str, str, str]] = []
    for pages_dir in args.pages_dirs:
        base = Path(pages_dir).as_posix()
        try:
            routes = build_routes(list_page_files(pages_dir, extensions), base)
        except ParseError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
        for page in flatten_routes(routes):
            eligible = "no" if is_dynamic_path(page.path) else "yes"
            rows.append((page.path, eligible, Path(page.file).relative_to(base).as_posix()))

    if not rows:
        print("No routes found.")
        return

    # Column widths
    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    fmt = f"{{:<{max_path}}}  {{:<7}}  {{}}"
    print(fmt.format("PATH", "SITEMAP", "FILE"))
    sep_len = max_path + 11 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for path, eligible, file in rows:
        print(fmt.format(path, eligible, file))
