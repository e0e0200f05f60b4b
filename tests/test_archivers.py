import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from relapse import ConfigError, Project, TaskRegistry
from relapse.archivers import (
    ARCHIVERS,
    TarBz2Archiver,
    TarGzArchiver,
    ZipArchiver,
    create_archiver,
    has_archiver_type,
    resolve_archivers,
)


def test_registered_archive_formats() -> None:
    assert sorted(ARCHIVERS) == ["tar_bz2", "tar_gz", "tar_xz", "zip"]
    assert has_archiver_type("zip")
    assert not has_archiver_type("rar")
    assert isinstance(create_archiver("tar_gz"), TarGzArchiver)


def test_unknown_archive_format_is_a_config_error() -> None:
    with pytest.raises(ConfigError) as excinfo:
        create_archiver("rar")

    assert excinfo.value.context == {"archive": "rar"}


def test_local_archiver_overrides_global_of_same_type() -> None:
    local_zip = ZipArchiver()
    global_zip = ZipArchiver()
    global_tar = TarGzArchiver()

    effective = resolve_archivers([local_zip], [global_zip, global_tar])

    assert effective == (local_zip, global_tar)
    assert [a.type for a in effective] == ["zip", "tar_gz"]


def test_resolution_never_lets_global_suppress_local() -> None:
    local = [TarBz2Archiver(), ZipArchiver()]

    assert resolve_archivers(local, []) == tuple(local)
    assert resolve_archivers([], local) == tuple(local)


def test_project_effective_archivers(make_project: Callable[..., Project]) -> None:
    project = make_project()
    project.add_archive("zip")
    project.add_archive("tar_gz")
    builder = project.add_build("source")
    local_zip = builder.add_archive("zip")

    effective = project.effective_archivers(builder)

    assert [a.type for a in effective] == ["zip", "tar_gz"]
    assert effective[0] is local_zip


def test_duplicate_archive_format_is_rejected(make_project: Callable[..., Project]) -> None:
    project = make_project()
    project.add_archive("zip")
    builder = project.add_build("source")
    builder.add_archive("zip")

    with pytest.raises(ConfigError, match="already added"):
        project.add_archive("zip")
    with pytest.raises(ConfigError, match="already added"):
        builder.add_archive("zip")


def test_archiver_defines_package_and_archive_file_tasks(registry: TaskRegistry) -> None:
    folder = Path("pkg/test_app_0_1_WIN32")

    TarGzArchiver().generate_tasks(registry, "windows:folder", folder)

    assert registry.names() == ["pkg/test_app_0_1_WIN32.tar.gz", "package:windows:folder:tar_gz"]
    assert registry.lookup_task("pkg/test_app_0_1_WIN32.tar.gz").prerequisites == (
        "pkg/test_app_0_1_WIN32",
    )
    assert registry.lookup_task("package:windows:folder:tar_gz").prerequisites == (
        "pkg/test_app_0_1_WIN32.tar.gz",
    )


def test_zip_archiver_compresses_folder(tmp_path: Path) -> None:
    folder = tmp_path / "pkg" / "app_SOURCE"
    (folder / "bin").mkdir(parents=True)
    (folder / "bin" / "app").write_text("run\n", encoding="utf-8")
    archiver = ZipArchiver()
    package = archiver.package_path(folder)
    package.write_text("stale", encoding="utf-8")

    archiver.compress(folder, package)

    with zipfile.ZipFile(package) as archive:
        assert "app_SOURCE/bin/app" in archive.namelist()


def test_tarball_archiver_compresses_folder(tmp_path: Path) -> None:
    folder = tmp_path / "app_SOURCE"
    folder.mkdir()
    (folder / "README.txt").write_text("hi\n", encoding="utf-8")
    archiver = TarBz2Archiver()

    package = archiver.compress(folder, archiver.package_path(folder))

    assert package == tmp_path / "app_SOURCE.tar.bz2"
    with tarfile.open(package) as archive:
        assert "app_SOURCE/README.txt" in archive.getnames()
