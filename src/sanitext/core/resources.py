"""importlib.resources helpers for accessing built-in profile files.

Works both in development (editable install) and in a packaged wheel.
"""

from __future__ import annotations

from pathlib import Path


def _builtin_profiles_dir() -> Path:
    """Return the Path to resources/profiles/ inside the package."""
    import importlib.resources as _ir

    ref = _ir.files("sanitext") / "resources" / "profiles"
    # hatchling ships the YAML files as package data, so this is always a
    # real directory.
    return Path(str(ref))


def get_builtin_profiles_dir() -> Path:
    """Return the absolute Path to the builtin profiles directory."""
    return _builtin_profiles_dir()


def get_builtin_profile_path(name: str) -> Path:
    """Return the absolute Path to a named built-in profile YAML.

    Args:
        name: Profile stem name (e.g. ``"default"``).

    Returns:
        Path ending in ``<name>.yml``.
    """
    return _builtin_profiles_dir() / f"{name}.yml"
