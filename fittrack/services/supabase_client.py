"""Supabase client construction."""

from __future__ import annotations

import logging

from supabase import Client, create_client

from fittrack.config import Settings, get_settings


logger = logging.getLogger(__name__)


def get_supabase_client(settings: Settings | None = None) -> Client:
    """Create a client for the configured project.

    Raises ``MissingConfigurationError`` when the URL or anon key is unset.
    """
    s = settings or get_settings()
    url, key = s.require_supabase()
    client = create_client(url, key)
    logger.info("Supabase client created for %s", url)
    return client
