"""Archive formats that package a builder's output folder."""

from .base import (
    ARCHIVERS,
    Archiver,
    HasArchivers,
    create_archiver,
    has_archiver_type,
    register_archiver,
    resolve_archivers,
)
from .tar import TarBz2Archiver, TarGzArchiver, TarXzArchiver
from .zip import ZipArchiver

__all__ = [
    "ARCHIVERS",
    "Archiver",
    "HasArchivers",
    "TarBz2Archiver",
    "TarGzArchiver",
    "TarXzArchiver",
    "ZipArchiver",
    "create_archiver",
    "has_archiver_type",
    "register_archiver",
    "resolve_archivers",
]
