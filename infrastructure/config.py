"""Configuration management for the Real Estate Analysis Chat client."""
import os
from typing import Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Centralized constants
DEFAULT_API_URL = "http://localhost:8000/api"
DEFAULT_EXPORT_FILENAME = "data.csv"


class ServiceConfig(BaseModel):
    """Remote analytics service settings."""
    base_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the analytics API")
    upload_path: str = Field(default="/upload/", description="Dataset ingest endpoint")
    analyze_path: str = Field(default="/analyze/", description="Query endpoint")
    export_path: str = Field(default="/download/", description="CSV export endpoint")
    request_timeout: float = Field(default=120.0, description="Timeout in seconds for query and export calls")
    upload_timeout: float = Field(default=300.0, description="Timeout in seconds for dataset uploads")


class ExportConfig(BaseModel):
    """Settings for saving exported CSV files."""
    download_dir: str = Field(default="downloads", description="Directory receiving exported files")
    default_filename: str = Field(
        default=DEFAULT_EXPORT_FILENAME,
        description="Name used when the service does not suggest one"
    )


class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )
    file_path: str = Field(default="logs/chat.log", description="Main log file path")
    console_output: bool = Field(default=False, description="Enable console output")
    file_output: bool = Field(default=True, description="Enable file output")
    json_format: bool = Field(default=False, description="Emit one JSON object per record")


class SystemConfig(BaseModel):
    """Main system configuration."""
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    export_settings: ExportConfig = Field(default_factory=ExportConfig)
    logging_settings: LoggingConfig = Field(default_factory=LoggingConfig)
    environment: str = Field(default=os.getenv("APP_ENV", "development"), description="Deployment environment")

    def __init__(self, **kwargs):
        # Load service and export settings from environment variables
        service = kwargs.get('service', {})
        if not isinstance(service, dict):
            service = service.model_dump()

        service.setdefault('base_url', os.getenv('ANALYTICS_API_URL', DEFAULT_API_URL))
        if os.getenv('ANALYTICS_TIMEOUT'):
            service.setdefault('request_timeout', float(os.environ['ANALYTICS_TIMEOUT']))
        if os.getenv('ANALYTICS_UPLOAD_TIMEOUT'):
            service.setdefault('upload_timeout', float(os.environ['ANALYTICS_UPLOAD_TIMEOUT']))

        export_settings = kwargs.get('export_settings', {})
        if not isinstance(export_settings, dict):
            export_settings = export_settings.model_dump()
        export_settings.setdefault('download_dir', os.getenv('EXPORT_DIR', 'downloads'))

        kwargs['service'] = ServiceConfig(**service)
        kwargs['export_settings'] = ExportConfig(**export_settings)
        super().__init__(**kwargs)


class DevelopmentConfig(SystemConfig):
    """Configuration for development environment."""

    def __init__(self, **kwargs):
        logging_settings = kwargs.get('logging_settings', {})
        if isinstance(logging_settings, dict):
            logging_settings.setdefault('level', 'DEBUG')
            kwargs['logging_settings'] = LoggingConfig(**logging_settings)
        super().__init__(**kwargs)


class ProductionConfig(SystemConfig):
    """Configuration for production environment."""

    def __init__(self, **kwargs):
        logging_settings = kwargs.get('logging_settings', {})
        if isinstance(logging_settings, dict):
            logging_settings.setdefault('json_format', True)
            kwargs['logging_settings'] = LoggingConfig(**logging_settings)
        super().__init__(**kwargs)


_CONFIG_MAP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(environment: Optional[str] = None) -> SystemConfig:
    """Load configuration based on the deployment environment."""
    env = (environment or os.getenv("APP_ENV", "development")).lower()
    config_cls = _CONFIG_MAP.get(env, DevelopmentConfig)
    return config_cls(environment=env)
