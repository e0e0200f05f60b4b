"""Compressed tarball archivers."""

from __future__ import annotations

from relapse.archivers.base import Archiver, register_archiver


@register_archiver
class TarGzArchiver(Archiver):
    type = "tar_gz"
    extension = "tar.gz"
    format = "gztar"


@register_archiver
class TarBz2Archiver(Archiver):
    type = "tar_bz2"
    extension = "tar.bz2"
    format = "bztar"


@register_archiver
class TarXzArchiver(Archiver):
    type = "tar_xz"
    extension = "tar.xz"
    format = "xztar"
