"""Utility functions for jsonform"""

import importlib
from pathlib import Path
from typing import Any


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def underlying_type(sample: Any) -> type:
    """Return the type a sample stands for: classes as is, instances by class."""
    return sample if isinstance(sample, type) else type(sample)


def default_name(sample: Any) -> str:
    """Derive a schema name from the sample's class name.

    Examples:
        >>> class UserWithNeighbors: ...
        >>> default_name(UserWithNeighbors)
        'userwithneighbors'
    """
    return underlying_type(sample).__name__.lower()


def import_string(target: str) -> Any:
    """Import an object from a ``module:attribute`` or ``module.attribute`` path."""
    if ":" in target:
        module_name, _, attr_path = target.partition(":")
    else:
        module_name, _, attr_path = target.rpartition(".")

    if not module_name or not attr_path:
        raise ImportError(f"Invalid import path: {target}")

    obj = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ImportError(f"{module_name} has no attribute {attr_path}") from e
    return obj
