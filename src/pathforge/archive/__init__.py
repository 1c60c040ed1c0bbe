"""Export of project trees as downloadable archives."""

from .zip_exporter import ZipArchiveExporter

__all__ = ["ZipArchiveExporter"]
