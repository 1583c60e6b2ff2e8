#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/config/__init__.py
"""Configuration bundle and its per-render isolation.

A :class:`ConfigBundle` pairs the tree-transform configuration with the
stringifier configuration. Renderers keep the bundle they were built with as
a read-only template and isolate a fresh copy for every render.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from zmarkdown.config.isolation import isolate
from zmarkdown.config.stringify import default_stringify_config
from zmarkdown.config.tree import default_tree_config
from zmarkdown.exceptions import ConfigurationError

_USAGE = "Expected a configuration bundle with non-empty 'tree_config' and 'stringify_config' mappings"


@dataclass
class ConfigBundle:
    """Tree-transform and stringifier configuration.

    Parameters
    ----------
    tree_config : Mapping
        Stage name to option mapping for the tree stages, plus the
        ``no_typography`` and ``_test`` flags
    stringify_config : Mapping
        Options of the LaTeX stringifier

    """

    tree_config: Any
    stringify_config: Any

    def validate(self) -> None:
        """Check that both halves are non-empty mappings.

        Raises
        ------
        ConfigurationError
            Naming the half that is missing

        """
        for name in ("tree_config", "stringify_config"):
            half = getattr(self, name)
            if not isinstance(half, Mapping) or not half:
                raise ConfigurationError(f"{_USAGE}; {name} is missing!", parameter_name=name)

    def isolated(self) -> ConfigBundle:
        """Return a deep, independent copy of this bundle."""
        return ConfigBundle(tree_config=isolate(self.tree_config), stringify_config=isolate(self.stringify_config))

    @classmethod
    def coerce(cls, value: Union[ConfigBundle, Mapping[str, Any], None]) -> ConfigBundle:
        """Build a bundle from a bundle, a mapping with both halves, or None.

        Raises
        ------
        ConfigurationError
            If ``value`` is neither a bundle nor a mapping

        """
        if isinstance(value, ConfigBundle):
            return value
        if value is None:
            return cls(tree_config=None, stringify_config=None)
        if isinstance(value, Mapping):
            return cls(tree_config=value.get("tree_config"), stringify_config=value.get("stringify_config"))
        raise ConfigurationError(f"{_USAGE}; got {type(value).__name__}")


def default_config_bundle() -> ConfigBundle:
    """Return a bundle holding fresh default configurations."""
    return ConfigBundle(tree_config=default_tree_config(), stringify_config=default_stringify_config())


__all__ = [
    "ConfigBundle",
    "default_config_bundle",
    "default_stringify_config",
    "default_tree_config",
    "isolate",
]
