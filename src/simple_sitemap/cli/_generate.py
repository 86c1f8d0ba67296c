"""``simple-sitemap generate``: write sitemap files for a site.

Builds a :class:`SitemapConfig` from an optional TOML file plus command
line overrides, then runs a :class:`SitemapGenerator` into the output
directory.
"""

import argparse
import os
import sys
from typing import Any

import anyio

from simple_sitemap.cli._resolve import resolve_stage
from simple_sitemap.config import SITE_URL_ENV, SitemapConfig
from simple_sitemap.context import SitemapStage
from simple_sitemap.errors import SitemapError
from simple_sitemap.generator import SitemapGenerator


def _load_config(args: argparse.Namespace) -> SitemapConfig:
    overrides: dict[str, Any] = {"site_url": args.site_url}
    if args.pages_dirs:
        overrides["pages_dirs"] = args.pages_dirs
    if args.config:
        config = SitemapConfig.from_file(args.config, **overrides)
        if not config.site_url and os.environ.get(SITE_URL_ENV):
            config = config.with_site_url(os.environ[SITE_URL_ENV])
        return config
    return SitemapConfig.from_env(**{k: v for k, v in overrides.items() if v is not None})


async def _generate(args: argparse.Namespace, config: SitemapConfig, stages: list[SitemapStage]) -> bool:
    generator = SitemapGenerator(config, stages=stages)
    if args.routes_cache:
        await generator.write_routes_cache(args.output)
        return True
    written = await generator.write(args.output)
    if written is None:
        return not config.enabled
    print(f"Sitemap: {generator.robots_sitemap_url()}")
    return True


def run_generate(args: argparse.Namespace) -> None:
    """Generate sitemap files, exiting non-zero on failure."""
    try:
        config = _load_config(args)
        stages = [resolve_stage(stage) for stage in args.stages]
    except (OSError, SitemapError, ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        ok = anyio.run(_generate, args, config, stages)
    except SitemapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not ok:
        raise SystemExit(1)
