"""ProfileManager: discover and load option profiles.

Handles three profile scopes:

- **builtin**: shipped with the package under resources/profiles/
- **user**: per-user config directory (platform-specific)
- **project**: inside a project folder under profiles/

A profile is one YAML file::

    id: strict
    name: Strict
    description: ...
    options:
      remove_zero_width: true
      expand_latin_abbrev: false

Flags a profile leaves out keep their ``SanitizeOptions`` default.
"""

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path

import yaml

_log = logging.getLogger(__name__)

from sanitext.core.options import SanitizeOptions
from sanitext.core.resources import get_builtin_profiles_dir


class ProfileNotFoundError(KeyError):
    """Raised when a profile ID cannot be resolved in any scope."""


# ---------------------------------------------------------------------------
# ProfileInfo
# ---------------------------------------------------------------------------


@dataclass
class ProfileInfo:
    """Describes one discovered profile file."""

    id: str          # e.g. "default" or "strict"
    name: str        # Human-readable display name
    description: str
    scope: str       # "builtin" | "user" | "project"
    path: Path
    readonly: bool   # True for builtin profiles

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "scope": self.scope,
            "readonly": self.readonly,
        }


# ---------------------------------------------------------------------------
# ProfileManager
# ---------------------------------------------------------------------------


class ProfileManager:
    """Discover profiles and turn them into SanitizeOptions snapshots.

    Args:
        project_dir: If provided, also searches ``<project_dir>/profiles/``
            for project-scoped profiles.
        user_dir: Overrides the per-user profile directory (mainly for tests).
    """

    def __init__(
        self, project_dir: Path | None = None, user_dir: Path | None = None
    ) -> None:
        self._project_dir = project_dir
        self._user_dir = user_dir

    # ------------------------------------------------------------------
    # Profile discovery
    # ------------------------------------------------------------------

    def list_profiles(self) -> list[ProfileInfo]:
        """Return all known profiles; a higher-priority scope hides the same ID
        in a lower one (project > user > builtin)."""
        by_id: dict[str, ProfileInfo] = {}
        for info in self._discover_builtin():
            by_id[info.id] = info
        for info in self._discover_user():
            by_id[info.id] = info
        if self._project_dir:
            for info in self._discover_project():
                by_id[info.id] = info
        return sorted(by_id.values(), key=lambda p: p.id)

    def _discover_builtin(self) -> list[ProfileInfo]:
        return self._scan_dir(get_builtin_profiles_dir(), scope="builtin", readonly=True)

    def _discover_user(self) -> list[ProfileInfo]:
        user_dir = self.get_user_profiles_dir()
        if not user_dir.exists():
            return []
        return self._scan_dir(user_dir, scope="user", readonly=False)

    def _discover_project(self) -> list[ProfileInfo]:
        assert self._project_dir is not None
        proj_dir = self._project_dir / "profiles"
        if not proj_dir.exists():
            return []
        return self._scan_dir(proj_dir, scope="project", readonly=False)

    def _scan_dir(self, directory: Path, scope: str, readonly: bool) -> list[ProfileInfo]:
        results: list[ProfileInfo] = []
        for yml_path in sorted(directory.glob("*.yml")):
            data = self._read(yml_path)
            if data is None:
                continue
            profile_id = str(data.get("id") or yml_path.stem)
            results.append(
                ProfileInfo(
                    id=profile_id,
                    name=str(data.get("name") or profile_id),
                    description=(data.get("description") or "").strip(),
                    scope=scope,
                    path=yml_path,
                    readonly=readonly,
                )
            )
        return results

    @staticmethod
    def _read(path: Path) -> dict | None:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            _log.warning("Could not parse profile %s: %s", path, exc)
            return None
        if not isinstance(data, dict):
            _log.warning("Profile %s is not a mapping; ignoring.", path)
            return None
        return data

    # ------------------------------------------------------------------
    # User config directory
    # ------------------------------------------------------------------

    def get_user_profiles_dir(self) -> Path:
        """Return the per-user profiles directory (platform-specific)."""
        if self._user_dir is not None:
            return self._user_dir

        system = platform.system()
        if system == "Darwin":
            base = Path.home() / "Library" / "Application Support" / "Sanitext"
        elif system == "Windows":
            base = Path(os.environ.get("APPDATA", str(Path.home()))) / "Sanitext"
        else:
            # Linux / other
            xdg = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
            base = xdg / "Sanitext"

        return base / "profiles"

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _resolve_path(self, profile_id: str) -> Path | None:
        """Resolve a profile ID to a file path across all scopes."""
        for info in self.list_profiles():
            if info.id == profile_id:
                return info.path
        return None

    def load_options(self, profile_id: str, strict: bool = False) -> SanitizeOptions:
        """Return the SanitizeOptions described by *profile_id*.

        Raises:
            ProfileNotFoundError: if no scope provides the profile.
            ValueError: if *strict* and the profile names an unknown flag.
        """
        path = self._resolve_path(profile_id)
        if path is None:
            raise ProfileNotFoundError(profile_id)
        data = self._read(path) or {}
        options = data.get("options") or {}
        if not isinstance(options, dict):
            _log.warning("Profile %r has a non-mapping 'options' key; using defaults.", profile_id)
            options = {}
        return SanitizeOptions.from_mapping(options, strict=strict)

    def save_profile(
        self,
        profile_id: str,
        options: SanitizeOptions,
        name: str | None = None,
        description: str = "",
        scope: str = "user",
    ) -> Path:
        """Write *options* as a user- or project-scoped profile and return its path."""
        if scope == "project":
            if self._project_dir is None:
                raise ValueError("No project directory configured")
            directory = self._project_dir / "profiles"
        elif scope == "user":
            directory = self.get_user_profiles_dir()
        else:
            raise ValueError(f"Cannot write profiles to scope {scope!r}")

        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{profile_id}.yml"
        payload = {
            "id": profile_id,
            "name": name or profile_id,
            "description": description,
            "options": options.to_dict(),
        }
        path.write_text(
            yaml.safe_dump(payload, sort_keys=False, allow_unicode=True), encoding="utf-8"
        )
        return path
