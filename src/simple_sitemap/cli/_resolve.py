"""Stage import resolution: resolves ``"module:attribute"`` strings to pipeline stages.

Used by ``simple-sitemap generate --stage`` to load caller-defined
stages without a plugin registry.
"""

import importlib

from simple_sitemap.context import SitemapStage


def resolve_stage(import_string: str) -> SitemapStage:
    """Resolve an import string to a pipeline stage callable.

    Args:
        import_string: Dotted module path and attribute joined by ``:``
            (e.g. ``"mysite.sitemap:add_images"``).

    Returns:
        The stage callable.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the string has no attribute part or the attribute
            is not callable.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not module_path or not attr_name:
        msg = f"Invalid stage {import_string!r}, expected 'module:function'"
        raise TypeError(msg)

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)
    if not callable(obj):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a callable"
        raise TypeError(msg)
    return obj
