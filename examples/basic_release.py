"""Source bundle everywhere, plus a Windows folder when run on Windows."""

from relapse import Project, TaskRegistry


def package_release() -> None:
    project = Project(
        name="Demo App",
        version="1.0.2",
        files=["bin/demo_app", "lib/demo_app/__init__.py", "README.txt"],
        exposed_files=["README.txt"],
    )
    project.add_link("https://example.com/demo", "Demo website")
    project.add_archive("zip")

    project.add_build("source").add_archive("tar_gz")
    with project.build("windows_folder") as windows:
        windows.executable_type = "console"

    registry = TaskRegistry()
    project.generate_tasks(registry)
    for task in registry.tasks:
        if task.description:
            print(f"{task.name}: {', '.join(task.prerequisites)}")
    registry.invoke("package")


if __name__ == "__main__":
    package_release()
