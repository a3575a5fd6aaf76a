from __future__ import annotations

from beachmatch.config.settings import Settings
from beachmatch.core.env import resolve_project_path
from beachmatch.data.json_source import JsonBeachDataSource
from beachmatch.data.source import BeachDataSource
from beachmatch.data.sql_source import SqlBeachDataSource


def build_data_source(settings: Settings) -> BeachDataSource:
    """Construct the configured data-access adapter."""
    cfg = settings.data
    if cfg.backend == "sql":
        if not cfg.database_url:
            raise ValueError("data.backend is 'sql' but no database_url is configured (BEACHMATCH_DATABASE_URL).")
        return SqlBeachDataSource.from_url(cfg.database_url, pool_recycle_seconds=cfg.pool_recycle_seconds)
    return JsonBeachDataSource(resolve_project_path(cfg.json_path))
