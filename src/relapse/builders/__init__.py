"""Output shapes that a project can be built into."""

from .base import BUILDERS, BuildContext, Builder, builder_class, has_builder_type, register_builder
from .osx_app import OsxAppBuilder
from .source import SourceBuilder
from .windows_folder import WindowsFolderBuilder

__all__ = [
    "BUILDERS",
    "BuildContext",
    "Builder",
    "OsxAppBuilder",
    "SourceBuilder",
    "WindowsFolderBuilder",
    "builder_class",
    "has_builder_type",
    "register_builder",
]
