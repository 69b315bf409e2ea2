"""
Factory: build the UpstreamClient from settings.

UPSTREAM_API_BASE / UPSTREAM_API_TIMEOUT / UPSTREAM_API_RETRIES come from the
environment; pointing the console at another platform is a config change.
"""

from django.conf import settings

from .client import UpstreamClient


def get_upstream_client() -> UpstreamClient:
    return UpstreamClient(
        base_url=settings.UPSTREAM_API_BASE,
        timeout=getattr(settings, "UPSTREAM_API_TIMEOUT", 10.0),
        retries=getattr(settings, "UPSTREAM_API_RETRIES", 3),
    )
