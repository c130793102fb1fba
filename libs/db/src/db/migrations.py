"""Locate the Alembic scripts that ship beside the ``db`` sources."""

from __future__ import annotations

from pathlib import Path


def alembic_dir() -> Path:
    """Return ``libs/db/alembic`` for a source checkout.

    Raises ``FileNotFoundError`` when the package was installed without its
    migration scripts.
    """

    # libs/db/src/db/migrations.py -> libs/db/alembic
    path = Path(__file__).resolve().parents[2] / "alembic"
    if not (path / "env.py").is_file():
        raise FileNotFoundError(f"Alembic scripts not found at {path}")
    return path


__all__ = ["alembic_dir"]
