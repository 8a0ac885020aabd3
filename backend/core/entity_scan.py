"""
Entity scanning: import persistence model packages so every ORM-mapped class
registers itself with its declarative metadata before the schema is touched.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Iterable, List

from sqlalchemy import MetaData, inspect
from sqlalchemy.orm import Mapper

logger = logging.getLogger(__name__)


class EntityScanError(Exception):
    """A configured entity package could not be imported."""


def _import_package(name: str) -> List[ModuleType]:
    """Import a module and, when it is a package, all of its submodules."""
    try:
        root = importlib.import_module(name)
    except ImportError as e:
        raise EntityScanError(f"Cannot import entity package {name!r}: {e}") from e

    modules = [root]
    path = getattr(root, "__path__", None)
    if path is None:
        return modules

    for info in pkgutil.walk_packages(path, prefix=f"{root.__name__}."):
        try:
            modules.append(importlib.import_module(info.name))
        except ImportError as e:
            raise EntityScanError(f"Cannot import entity module {info.name!r}: {e}") from e
    return modules


def _is_mapped(obj: object) -> bool:
    if not isinstance(obj, type):
        return False
    return isinstance(inspect(obj, raiseerr=False), Mapper)


def _within(module_name: str, packages: Iterable[str]) -> bool:
    return any(module_name == p or module_name.startswith(f"{p}.") for p in packages)


def scan_entities(package_names: Iterable[str]) -> List[type]:
    """
    Import the given packages recursively and return the mapped classes defined in them.

    Classes are deduplicated and sorted by table name. Raises EntityScanError if a
    package (or one of its submodules) cannot be imported.
    """
    packages = [p for p in package_names if p]
    found = {}
    for name in packages:
        for module in _import_package(name):
            for obj in vars(module).values():
                if _is_mapped(obj) and _within(obj.__module__, packages):
                    found[f"{obj.__module__}.{obj.__qualname__}"] = obj

    entities = sorted(found.values(), key=lambda cls: inspect(cls).local_table.name)
    if entities:
        logger.info(
            "Entity scan of %s found %d entit%s: %s",
            ", ".join(packages),
            len(entities),
            "y" if len(entities) == 1 else "ies",
            ", ".join(cls.__name__ for cls in entities),
        )
    else:
        logger.warning("Entity scan of %s found no mapped entities", ", ".join(packages))
    return entities


def collect_metadata(entities: Iterable[type]) -> List[MetaData]:
    """Return the distinct MetaData objects the scanned entities belong to."""
    seen: List[MetaData] = []
    for cls in entities:
        metadata = inspect(cls).local_table.metadata
        if not any(m is metadata for m in seen):
            seen.append(metadata)
    return seen
