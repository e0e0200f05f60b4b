"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from relapse import Project, TaskRegistry
from relapse.archivers import ARCHIVERS, Archiver
from relapse.builders import BUILDERS, Builder
from relapse.models import Platform
from relapse.tasks import TaskEngine


class FakeBuilder(Builder):
    """Defines only its ``build:<type>`` task so emitted graphs can be compared exactly."""

    folder_suffix = "FAKE"

    def generate_tasks(self, engine: TaskEngine) -> None:
        engine.define_task(self.build_task, (), description=f"Build {self.type}")


class FakeArchiver(Archiver):
    """Defines only its ``package:<output>:<type>`` leaf task and records each call."""

    extension = "fake"
    format = "zip"
    calls: list[tuple[str, str, Path]] = []

    def generate_tasks(self, engine: TaskEngine, output_task: str, folder: Path) -> None:
        self.calls.append((self.type, output_task, folder))
        engine.define_task(f"package:{output_task}:{self.type}", (), description=str(folder))


class FakeTypes:
    def __init__(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._monkeypatch = monkeypatch
        self.archive_calls: list[tuple[str, str, Path]] = []

    def builder(
        self,
        tag: str,
        *,
        platforms: frozenset[Platform] | None = None,
        base: type[Builder] = FakeBuilder,
    ) -> type[Builder]:
        cls = type(
            f"Fake_{tag}",
            (base,),
            {"type": tag, "folder_suffix": tag.upper(), "platforms": platforms},
        )
        self._monkeypatch.setitem(BUILDERS, tag, cls)
        return cls

    def archiver(self, tag: str) -> type[Archiver]:
        cls = type(f"Fake_{tag}", (FakeArchiver,), {"type": tag, "calls": self.archive_calls})
        self._monkeypatch.setitem(ARCHIVERS, tag, cls)
        return cls


@pytest.fixture
def fake_types(monkeypatch: pytest.MonkeyPatch) -> FakeTypes:
    """Register throwaway builder/archiver variants for the duration of a test."""
    return FakeTypes(monkeypatch)


@pytest.fixture
def registry() -> TaskRegistry:
    return TaskRegistry()


@pytest.fixture
def make_project() -> Callable[..., Project]:
    def factory(platform: Platform = "windows", **kwargs: object) -> Project:
        kwargs.setdefault("name", "Test App")
        kwargs.setdefault("version", "0.1")
        return Project(platform=platform, **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def app_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small application tree, with the working directory switched into it."""
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "test_app").write_text("print('test run!')\n", encoding="utf-8")
    (tmp_path / "lib" / "test_app").mkdir(parents=True)
    (tmp_path / "lib" / "test_app" / "__init__.py").write_text("", encoding="utf-8")
    (tmp_path / "lib" / "test_app" / "stuff.py").write_text("STUFF = 1\n", encoding="utf-8")
    (tmp_path / "README.txt").write_text("Read me!\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
