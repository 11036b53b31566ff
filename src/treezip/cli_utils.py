from __future__ import annotations

import typer

from .config import ArchiveSettings, ConfigStore


def get_settings_from_context(
    ctx: typer.Context, *, store: ConfigStore | None = None
) -> ArchiveSettings:
    """Return the :class:`ArchiveSettings` cached on ``ctx``, loading them once."""

    ctx.ensure_object(dict)
    existing = ctx.obj.get("settings") if ctx.obj else None
    if isinstance(existing, ArchiveSettings):
        return existing

    cfg_store = store or ConfigStore()
    settings = cfg_store.load()
    ctx.obj["settings"] = settings
    return settings
