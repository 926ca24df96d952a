"""Analytics service bindings."""

from .http_client import HttpAnalyticsService

__all__ = ["HttpAnalyticsService"]
