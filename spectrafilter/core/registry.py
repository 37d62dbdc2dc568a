"""
Filter Registry - builds filters and approximation functions by name.

The registry provides:
1. Discovery of registered names from the YAML configuration
2. Lazy import of the implementing classes
3. Construction with configured defaults, overridable per call
"""

import importlib
from pathlib import Path
from typing import Dict, List, Optional, Union

from spectrafilter.core.config import FilterConfig, load_config


class FilterRegistry:
    """
    Registry of available filters and approximation functions.

    Names and defaults come from defaults.yaml unless another config file
    is given.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config = load_config(config_path)
        self._classes: Dict[str, type] = {}

    def list_filters(self) -> List[str]:
        """List all registered filter names."""
        return sorted(self.config.filters.keys())

    def list_approximations(self) -> List[str]:
        """List all registered approximation function names."""
        return sorted(self.config.approximations.keys())

    def has_filter(self, name: str) -> bool:
        return name in self.config.filters

    def has_approximation(self, name: str) -> bool:
        return name in self.config.approximations

    def get_config(self, name: str) -> FilterConfig:
        """Get configuration for a filter or approximation function."""
        if name in self.config.filters:
            return self.config.filters[name]
        if name in self.config.approximations:
            return self.config.approximations[name]

        available = ", ".join(self.list_filters() + self.list_approximations())
        raise KeyError(f"Unknown name: '{name}'. Available: {available}")

    def get_class(self, name: str) -> type:
        """
        Get the implementing class.

        Lazily imports the module on first access.
        """
        if name not in self._classes:
            config = self.get_config(name)
            try:
                module = importlib.import_module(config.module)
                self._classes[name] = getattr(module, config.class_name)
            except (ImportError, AttributeError) as e:
                raise ImportError(
                    f"Could not load class '{config.class_name}' for '{name}': {e}"
                ) from e

        return self._classes[name]

    def build_filter(self, name: str, **params):
        """
        Build a filter with its configured defaults.

        Args:
            name: Registered filter name
            **params: Overrides for the default parameters

        Returns:
            Unconfigured filter instance
        """
        if name not in self.config.filters:
            raise KeyError(
                f"Unknown filter: '{name}'. Available: {', '.join(self.list_filters())}"
            )
        return self._build(name, params)

    def build_approximation(self, name: str, **params):
        """Build an approximation function with its configured defaults."""
        if name not in self.config.approximations:
            raise KeyError(
                f"Unknown approximation function: '{name}'. "
                f"Available: {', '.join(self.list_approximations())}"
            )
        return self._build(name, params)

    def _build(self, name: str, overrides: dict):
        config = self.get_config(name)
        params = {**config.params, **overrides}

        # Approximation names resolve against this registry, not the global one
        if isinstance(params.get('fun'), str):
            params['fun'] = self.build_approximation(params['fun'])

        instance = self.get_class(name)()
        instance.set_params(**params)
        return instance


# Global registry instance (lazy initialized)
_registry: Optional[FilterRegistry] = None


def get_registry() -> FilterRegistry:
    """Get or create global filter registry."""
    global _registry
    if _registry is None:
        _registry = FilterRegistry()
    return _registry


def reset_registry():
    """Reset the global registry (for testing)."""
    global _registry
    _registry = None
