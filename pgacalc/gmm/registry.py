# ****************************************************************************
# Copyright (C) 2024-2026, PgaCalc Developers.
# This file is part of PgaCalc.
#
# PgaCalc is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# PgaCalc is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# with this download. If not, see <http://www.gnu.org/licenses/>
# ****************************************************************************
"""
GMM registry utilities for PgaCalc.

This module loads a JSON registry (registry.json) shipped with the package
and resolves catalog identifiers to ground-motion model implementations.

Registry format
---------------
The JSON file must follow this schema:

{
  "gmmmap": {
    "<CatalogId>": {
      "pointer": "<module.path:ClassName>",
      "options": {"<keyword>": <value>, ...},
      "alias": ["<Alias1>", "<Alias2>", ...]
    },
    ...
  }
}

Design notes
------------
- Keys must be members of the :class:`pgacalc.gmm.catalog.Gmm` catalog.
- Model classes are imported lazily (only when requested).
- ``options`` are forwarded as keyword arguments to the constructor.
- A registry is an explicit object; callers load it once and pass it on.

Optional override
-----------------
If the environment variable PGACALC_GMM_REGISTRY is set to a filesystem
path, that JSON file is loaded instead of the packaged resource.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import import_module
from importlib import resources as importlib_resources
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from .base import GroundMotionModel
from .catalog import Gmm

logger = logging.getLogger(__name__)

_ENV_REGISTRY_PATH = "PGACALC_GMM_REGISTRY"
_DEFAULT_RESOURCE = "registry.json"


@dataclass(frozen=True)
class _RegistryEntry:
    """
    Normalized registry entry.
    """

    pointer: str
    options: Mapping[str, Any]


class GmmRegistry:
    """
    Resolve catalog identifiers to ground-motion model instances.

    Parameters
    ----------
    raw : mapping
        Parsed registry JSON (see module documentation).
    """

    def __init__(self, raw: Mapping[str, Any]) -> None:
        self._entries, self._aliases = _normalize_registry(raw)
        self._class_cache: Dict[Gmm, Type[GroundMotionModel]] = {}
        self._instance_cache: Dict[Gmm, GroundMotionModel] = {}

    def list_gmms(self) -> List[Gmm]:
        """
        Return the catalog identifiers available in the registry.
        """
        return sorted(self._entries, key=lambda g: g.name)

    def resolve_name(self, name: Any) -> Gmm:
        """
        Resolve a catalog member, identifier string or alias.

        Raises
        ------
        KeyError
            If `name` is unknown or has no registered implementation.
        """
        if isinstance(name, Gmm):
            gmm = name
        elif isinstance(name, str) and name.strip() in self._aliases:
            gmm = self._aliases[name.strip()]
        else:
            gmm = Gmm.from_string(name)

        if gmm not in self._entries:
            available = ", ".join(g.name for g in self.list_gmms())
            raise KeyError(
                f"No implementation registered for {gmm.name}. "
                f"Available: {available}"
            )
        return gmm

    def get_gmm_class(self, name: Any) -> Type[GroundMotionModel]:
        """
        Resolve a GMM identifier or alias to its class (lazy import).

        Raises
        ------
        KeyError
            If `name` is unknown.
        ImportError
            If the module/class cannot be imported.
        TypeError
            If the resolved object is not a GroundMotionModel subclass.
        """
        gmm = self.resolve_name(name)

        if gmm in self._class_cache:
            return self._class_cache[gmm]

        pointer = self._entries[gmm].pointer
        module_name, class_name = _split_pointer(pointer)

        module = import_module(module_name)
        cls = getattr(module, class_name, None)

        if cls is None:
            raise ImportError(
                f"GMM class {class_name!r} not found in module "
                f"{module_name!r} (pointer={pointer!r})."
            )

        if not isinstance(cls, type) or not issubclass(cls, GroundMotionModel):
            raise TypeError(
                f"Resolved object {module_name}:{class_name} is not a "
                f"GroundMotionModel subclass."
            )

        self._class_cache[gmm] = cls
        return cls

    def create_gmm(self, name: Any, **kwargs: Any) -> GroundMotionModel:
        """
        Instantiate a GMM. Keyword arguments override the registry
        ``options``.
        """
        gmm = self.resolve_name(name)
        cls = self.get_gmm_class(gmm)
        options = dict(self._entries[gmm].options)
        options.update(kwargs)
        return cls(**options)

    def get_gmm(self, name: Any) -> GroundMotionModel:
        """
        Return a shared instance of a GMM built with registry options.
        """
        gmm = self.resolve_name(name)
        if gmm not in self._instance_cache:
            self._instance_cache[gmm] = self.create_gmm(gmm)
        return self._instance_cache[gmm]

    def evaluate_mean(self, gmm: Any, inputs, imt: str = "PGA") -> float:
        """
        Natural-log mean of `imt` predicted by `gmm` for `inputs`.

        Signature matches the evaluation callable expected by
        :func:`pgacalc.ensemble.evaluate_ensemble`.
        """
        return self.get_gmm(gmm).mean(imt, inputs)

    def clear_caches(self) -> None:
        """
        Clear class and instance caches (mainly for tests).
        """
        self._class_cache.clear()
        self._instance_cache.clear()


def load_registry(path: Optional[str] = None) -> GmmRegistry:
    """
    Load a registry from `path`, the override path or package resources.
    """
    return GmmRegistry(_read_registry_json(path))


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------

def _read_registry_json(path: Optional[str] = None) -> Mapping[str, Any]:
    """
    Read the registry JSON from an explicit path, an override path or
    package resources.
    """
    override = path or os.environ.get(_ENV_REGISTRY_PATH, "").strip()
    if override:
        logger.debug(f"Loading GMM registry from {override}")
        with open(override, "r", encoding="utf-8") as f:
            return json.load(f)

    # Load packaged registry.json (same package as this module)
    data = importlib_resources.files(__package__).joinpath(_DEFAULT_RESOURCE)
    with data.open("r", encoding="utf-8") as f:
        return json.load(f)


def _normalize_registry(
    raw: Mapping[str, Any]
) -> Tuple[Dict[Gmm, _RegistryEntry], Dict[str, Gmm]]:
    """
    Validate and normalize the raw JSON registry into fast lookup maps.

    Returns
    -------
    tuple
        - entries: Gmm -> entry
        - aliases: alias -> Gmm
    """
    if not isinstance(raw, Mapping):
        raise TypeError("registry.json must contain a JSON object at top level.")

    gmmmap_raw = raw.get("gmmmap")
    if not isinstance(gmmmap_raw, Mapping):
        raise TypeError("registry.json must contain a 'gmmmap' object.")

    entries: Dict[Gmm, _RegistryEntry] = {}
    aliases: Dict[str, Gmm] = {}

    for name, entry in gmmmap_raw.items():
        try:
            gmm = Gmm.from_string(name)
        except KeyError:
            raise ValueError(
                f"Registry key {name!r} is not a catalog GMM identifier."
            )

        if not isinstance(entry, Mapping):
            raise TypeError(f"Registry entry for {name!r} must be an object.")

        pointer = entry.get("pointer")
        if not isinstance(pointer, str) or not pointer.strip():
            raise ValueError(
                f"Registry entry for {name!r} must contain a non-empty "
                f"'pointer' string."
            )

        # Validate pointer format early
        _split_pointer(pointer)

        options = entry.get("options") or {}
        if not isinstance(options, Mapping):
            raise TypeError(f"'options' for {name!r} must be an object.")

        entries[gmm] = _RegistryEntry(pointer=pointer, options=dict(options))

        alias_list = entry.get("alias") or []
        if not isinstance(alias_list, list):
            raise TypeError(f"'alias' for {name!r} must be a list of strings.")

        for alias in alias_list:
            if not isinstance(alias, str) or not alias.strip():
                raise ValueError(f"Invalid alias for {name!r}: {alias!r}")

            if alias in Gmm.__members__ and alias != gmm.name:
                raise ValueError(
                    f"Alias {alias!r} collides with a catalog identifier."
                )

            prev = aliases.get(alias)
            if prev is not None and prev is not gmm:
                raise ValueError(
                    f"Alias {alias!r} is defined for multiple GMMs: "
                    f"{prev.name!r}, {gmm.name!r}"
                )

            aliases[alias] = gmm

    return entries, aliases


def _split_pointer(pointer: str) -> Tuple[str, str]:
    """
    Split and validate a 'module.path:ClassName' pointer.
    """
    if ":" not in pointer:
        raise ValueError(
            f"Invalid GMM pointer {pointer!r}. Expected 'module:ClassName'."
        )

    module_name, class_name = pointer.split(":", 1)
    module_name = module_name.strip()
    class_name = class_name.strip()

    if not module_name or not class_name:
        raise ValueError(
            f"Invalid GMM pointer {pointer!r}. Expected 'module:ClassName'."
        )

    return module_name, class_name
