"""
Plugin Loader

Reads plugin configuration from `data/plugins_config.json` and registers the
built-in plugins at application startup. Plugins whose config says
``"enabled": false`` are not registered.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

# ── Config file location ──────────────────────────────────────────────────────
_PLUGINS_CONFIG_FILE = Path("data/plugins_config.json")

# ── Default plugin config ─────────────────────────────────────────────────────
_DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "meta_inspector": {"enabled": True},
}


def load_plugins_config() -> dict[str, dict[str, Any]]:
    """
    Load plugin configuration from disk.

    Returns defaults if the file does not exist or cannot be parsed.
    """
    if _PLUGINS_CONFIG_FILE.exists():
        try:
            return json.loads(_PLUGINS_CONFIG_FILE.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read plugins config: %s", exc)
    return copy.deepcopy(_DEFAULT_CONFIG)


def builtin_plugins() -> list[type]:
    # Deferred so importing the loader does not pull in the services layer
    from app.plugins.meta_inspector_plugin import MetaInspectorPlugin

    return [MetaInspectorPlugin]


async def initialize_plugins(registry: PluginRegistry) -> None:
    """Load and register all enabled built-in plugins."""
    config = load_plugins_config()

    loaded = 0
    for plugin_class in builtin_plugins():
        plugin = plugin_class()
        plugin_config = config.get(plugin.meta.name, {})
        if not plugin_config.get("enabled", True):
            logger.info("Plugin disabled by config: %s", plugin.meta.name)
            continue
        await plugin.on_load(plugin_config)
        registry.register(plugin)
        loaded += 1

    logger.info("Plugin initialisation complete: %d plugins loaded", loaded)


async def shutdown_plugins(registry: PluginRegistry) -> None:
    """Unload every registered plugin."""
    for plugin in registry.all_plugins():
        await plugin.on_unload()
    registry.clear()
