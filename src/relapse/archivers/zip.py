"""Zip archiver."""

from __future__ import annotations

from relapse.archivers.base import Archiver, register_archiver


@register_archiver
class ZipArchiver(Archiver):
    type = "zip"
    extension = "zip"
    format = "zip"
