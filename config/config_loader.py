import os
from typing import Any, Mapping

import yaml

_MISSING = object()

DEFAULT_CONFIG_FILE = os.path.join(os.path.dirname(__file__), "settings.yaml")


class ConfigLoader:
    def __init__(self, config_file=DEFAULT_CONFIG_FILE):
        self.config_file = config_file
        self.config = {}
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                self.config = yaml.safe_load(f) or {}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ConfigLoader":
        """Build a loader around an in-memory mapping (tests, embedding hosts)."""
        loader = cls(config_file=None)
        loader.config = dict(mapping)
        return loader

    def get(self, *keys, default=_MISSING):
        """
        Return the value stored under the nested ``keys`` path.
        When a key along the path is missing:
          - raise KeyError if no default was supplied
          - return the default otherwise
        """
        ref = self.config
        for key in keys:
            if isinstance(ref, Mapping) and key in ref:
                ref = ref[key]
            else:
                if default is not _MISSING:
                    return default
                raise KeyError(f"Configuration key {' -> '.join(keys)} not found and no default provided.")
        return ref

    def section(self, name: str) -> Mapping[str, Any]:
        """Return the mapping stored under ``name`` (empty when absent)."""
        value = self.get(name, default={})
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise TypeError(f"Configuration section '{name}' must be a mapping")
        return value
