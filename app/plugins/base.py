"""
Plugin Base Classes

PluginMeta: declarative metadata for a plugin (name, version, hooks, capability).
PluginBase: abstract base class all plugins must subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from app.permissions_config.permissions import user_can


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:          Machine-readable slug, e.g. "meta_inspector".
        version:       Semver string, e.g. "1.0.0".
        description:   Human-readable description shown in admin UI.
        author:        Plugin author (defaults to "CMS Core Team").
        hooks:         List of hook names this plugin subscribes to.
        capability:    Capability the acting user must hold for the plugin
                       to receive any hook; None means every user.
        config_schema: JSON Schema fragments describing configurable options.
    """

    name: str
    version: str
    description: str
    author: str = "CMS Core Team"
    hooks: list[str] = field(default_factory=list)
    capability: str | None = None
    config_schema: dict[str, Any] = field(default_factory=dict)


class PluginBase(ABC):
    """
    Abstract base class for all CMS plugins.

    Subclasses must implement the `meta` property.
    Lifecycle methods default to no-ops so subclasses only override what
    they need.
    """

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    def is_active_for(self, user: Any) -> bool:
        """Return True if hooks should reach this plugin for ``user``."""
        if self.meta.capability is None:
            return True
        return user_can(user, self.meta.capability)

    async def on_load(self, config: dict[str, Any]) -> None:  # noqa: B027
        """Called once at startup with the plugin's persisted config dict."""

    async def on_unload(self) -> None:  # noqa: B027
        """Called when the app shuts down."""

    async def handle_hook(self, hook_name: str, payload: dict[str, Any]) -> Any:
        """
        Receive and process a hook event.

        Called by PluginRegistry.fire_hook() for each hook the plugin
        declared in PluginMeta.hooks. Default implementation is a no-op.

        Args:
            hook_name: The hook constant, e.g. "admin.post.meta_boxes".
            payload:   Data provided by the hook dispatcher; admin screen
                       hooks carry "user", "db" and "request".

        Returns:
            Admin screen hooks: an HTML fragment or None. Event hooks: ignored.
        """
        return None
