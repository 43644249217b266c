"""
Plugin Registry

PluginRegistry: in-process registry that stores plugins and dispatches hook
events to subscribers.

Subscribers are awaited in registration order. A subscriber that raises is
logged and skipped; the remaining subscribers still run.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.plugins.base import PluginBase

logger = logging.getLogger(__name__)


class PluginRegistry:
    """
    In-process registry for CMS plugins.

    Stores registered plugins by name and maintains an index of hook
    subscriptions for dispatch.
    """

    def __init__(self) -> None:
        self._plugins: dict[str, PluginBase] = {}
        self._hook_subscriptions: dict[str, list[PluginBase]] = defaultdict(list)

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, plugin: PluginBase) -> None:
        """Register a plugin and index its hook subscriptions."""
        if plugin.meta.name in self._plugins:
            self.unregister(plugin.meta.name)
        self._plugins[plugin.meta.name] = plugin
        for hook in plugin.meta.hooks:
            self._hook_subscriptions[hook].append(plugin)
        logger.info("Plugin registered: %s v%s", plugin.meta.name, plugin.meta.version)

    def unregister(self, name: str) -> PluginBase | None:
        """Remove a plugin and its hook subscriptions."""
        plugin = self._plugins.pop(name, None)
        if plugin is None:
            return None
        for subscribers in self._hook_subscriptions.values():
            if plugin in subscribers:
                subscribers.remove(plugin)
        return plugin

    def clear(self) -> None:
        self._plugins.clear()
        self._hook_subscriptions.clear()

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> PluginBase | None:
        """Return the plugin with the given name, or None if not registered."""
        return self._plugins.get(name)

    def all_plugins(self) -> list[PluginBase]:
        """Return all registered plugins in registration order."""
        return list(self._plugins.values())

    def is_registered(self, name: str) -> bool:
        return name in self._plugins

    # ── Hook dispatch ─────────────────────────────────────────────────────────

    async def fire_hook(self, hook_name: str, payload: dict[str, Any]) -> list[Any]:
        """
        Fire a hook to all subscribing plugins.

        Plugins that require a capability the payload's "user" lacks are not
        called at all.

        Args:
            hook_name: Hook constant from app.plugins.hooks.
            payload:   Data passed to each subscriber.

        Returns:
            Non-None return values of the subscribers, in order.
        """
        results: list[Any] = []
        for plugin in self._hook_subscriptions.get(hook_name, []):
            if not plugin.is_active_for(payload.get("user")):
                continue
            try:
                result = await plugin.handle_hook(hook_name, payload)
            except Exception as exc:
                logger.warning(
                    "Plugin %s hook %s raised: %s",
                    plugin.meta.name,
                    hook_name,
                    exc,
                )
                continue
            if result is not None:
                results.append(result)
        return results


# ── Global singleton ──────────────────────────────────────────────────────────
plugin_registry = PluginRegistry()
