"""Persistence layer bindings."""

from .filesystem_export_sink import FilesystemExportSink

__all__ = ["FilesystemExportSink"]
