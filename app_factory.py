"""Application factory for creating fully wired controllers and services."""

from __future__ import annotations

from typing import Optional

import httpx

from infrastructure.config import SystemConfig, get_config


def _create_config():
    """Create system configuration instance."""
    return get_config()


def _bind_services(config: SystemConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
    """Instantiate the service implementations used by the controller."""
    from infrastructure.analytics import HttpAnalyticsService
    from infrastructure.persistence import FilesystemExportSink

    analytics_service = HttpAnalyticsService(config.service, transport=transport)
    export_sink = FilesystemExportSink(
        base_path=config.export_settings.download_dir,
        default_filename=config.export_settings.default_filename,
    )
    return {
        "analytics_service": analytics_service,
        "export_sink": export_sink,
    }


def create_session_controller(
    config: Optional[SystemConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """Create a fully wired :class:`SessionController`."""
    config = config or _create_config()
    services = _bind_services(config, transport=transport)

    from application.controllers import SessionController

    return SessionController(
        service=services["analytics_service"],
        export_sink=services["export_sink"],
    )
