import pytest

from relapse.errors import (
    ConfigError,
    ErrorCode,
    TaskDefinitionError,
    TaskExecutionError,
    TaskNotFoundError,
)
from relapse.models import (
    build_task_name,
    host_platform,
    package_output_task,
    task_group,
    underscore_name,
    underscore_version,
)


@pytest.mark.parametrize(
    ("tag", "build_name", "group", "output_task"),
    [
        ("source", "build:source", None, "source"),
        ("windows_folder", "build:windows:folder", "windows", "windows:folder"),
        ("osx_app", "build:osx:app", "osx", "osx:app"),
        (
            "windows_folder_from_ruby_dist",
            "build:windows:folder:from:ruby:dist",
            "windows",
            "windows:folder_from_ruby_dist",
        ),
    ],
)
def test_task_names_derive_from_type_tag(
    tag: str,
    build_name: str,
    group: str | None,
    output_task: str,
) -> None:
    assert build_task_name(tag) == build_name
    assert task_group(tag) == group
    assert package_output_task(tag) == output_task
    assert build_task_name(tag) == build_task_name(tag)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Test App", "test_app"),
        ("  My Application!  ", "my_application"),
        ("Foo-Bar__Baz  Qux", "foo_bar_baz_qux"),
        ("Ünïcode 2 Go", "ncode_2_go"),
    ],
)
def test_underscore_name(name: str, expected: str) -> None:
    assert underscore_name(name) == expected


def test_underscore_version() -> None:
    assert underscore_version("1.2.0") == "1_2_0"


@pytest.mark.parametrize(
    ("system", "expected"),
    [("win32", "windows"), ("cygwin", "windows"), ("darwin", "osx"), ("linux", "linux")],
)
def test_host_platform(system: str, expected: str) -> None:
    assert host_platform(system) == expected


def test_error_codes_are_stable_and_machine_readable() -> None:
    errors = [
        ConfigError("bad config"),
        TaskDefinitionError("duplicate"),
        TaskNotFoundError("missing"),
        TaskExecutionError("cycle"),
    ]
    assert [error.code for error in errors] == [
        ErrorCode.CONFIG.value,
        ErrorCode.TASK_DEFINITION.value,
        ErrorCode.TASK_NOT_FOUND.value,
        ErrorCode.TASK_EXECUTION.value,
    ]


def test_error_rendering_includes_hint_and_context() -> None:
    error = ConfigError(
        "Output type is already added.",
        hint="Remove the duplicate.",
        context={"build": "source", "empty": ""},
    )

    assert str(error) == "Output type is already added.\nHint: Remove the duplicate.\n  build: source"
    assert error.to_dict() == {
        "code": "E_CONFIG",
        "message": str(error),
        "context": {"build": "source", "empty": ""},
        "hint": "Remove the duplicate.",
    }
