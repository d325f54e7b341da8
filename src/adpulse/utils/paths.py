"""Where adpulse looks for its on-disk configuration."""

from __future__ import annotations

from pathlib import Path

ROOT_MARKER = "pyproject.toml"


def project_root() -> Path:
    """Closest ancestor of this file holding ``pyproject.toml``.

    An installed copy has no marker above it; the checkout layout
    (``src/adpulse/utils/``) is assumed then.
    """
    here = Path(__file__).resolve()
    return next((p for p in here.parents if (p / ROOT_MARKER).is_file()), here.parents[3])


def config_dir(name: str) -> Path:
    """Return ``<project root>/config/<name>`` (not created)."""
    return project_root() / "config" / name


__all__ = ["project_root", "config_dir"]
