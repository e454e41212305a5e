"""Build-tool and package-manager detection — presence-only filename lookups."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Mapping

from codebase_profiler.domain.value_objects import ProjectView

# Result order follows table order.

BUILD_TOOLS: Mapping[str, tuple[str, ...]] = {
    "Webpack": ("webpack.config.*", "webpack.dev.js", "webpack.prod.js"),
    "Vite": ("vite.config.*",),
    "Rollup": ("rollup.config.*",),
    "Parcel": ("parcel.config.js", ".parcelrc"),
    "Gulp": ("gulpfile.js", "gulpfile.ts"),
    "Grunt": ("gruntfile.js", "grunt.js"),
    "Maven": ("pom.xml",),
    "Gradle": ("build.gradle", "build.gradle.kts", "settings.gradle*", "gradle.properties"),
    "Make": ("makefile", "gnumakefile"),
    "CMake": ("cmakelists.txt", "*.cmake"),
    "Cargo": ("cargo.toml",),
    "Go Modules": ("go.mod", "go.sum"),
    "MSBuild": ("*.csproj", "*.sln"),
    "Bazel": ("build.bazel", "workspace.bazel", "workspace"),
}

PACKAGE_MANAGERS: Mapping[str, tuple[str, ...]] = {
    "npm": ("package.json", "package-lock.json"),
    "Yarn": ("yarn.lock", ".yarnrc", ".yarnrc.yml"),
    "pnpm": ("pnpm-lock.yaml", "pnpm-workspace.yaml"),
    "Bun": ("bun.lockb", "bun.lock"),
    "pip": ("requirements*.txt", "setup.py", "pyproject.toml"),
    "Poetry": ("poetry.lock",),
    "Pipenv": ("pipfile", "pipfile.lock"),
    "Conda": ("environment.yml", "conda.yml"),
    "Composer": ("composer.json", "composer.lock"),
    "Bundler": ("gemfile", "gemfile.lock"),
    "Cargo": ("cargo.toml", "cargo.lock"),
    "Go Modules": ("go.mod", "go.sum"),
    "NuGet": ("packages.config", "*.csproj", "*.nuspec"),
    "pub": ("pubspec.yaml",),
}


def _match_any(basenames: frozenset[str], patterns: tuple[str, ...]) -> bool:
    return any(fnmatchcase(name, pattern) for pattern in patterns for name in basenames)


def lookup(view: ProjectView, table: Mapping[str, tuple[str, ...]]) -> list[str]:
    """Names from *table* whose patterns match at least one file basename."""
    return [name for name, patterns in table.items() if _match_any(view.basenames, patterns)]


def detect_build_tools(view: ProjectView) -> list[str]:
    return lookup(view, BUILD_TOOLS)


def detect_package_managers(view: ProjectView) -> list[str]:
    """Package managers in table order.

    Poetry is also reported for a ``pyproject.toml`` carrying a
    ``[tool.poetry]`` table, even without a lock file.
    """
    found = set(lookup(view, PACKAGE_MANAGERS))
    if view.has_basename("pyproject.toml") and "[tool.poetry" in view.content:
        found.add("Poetry")
    return [name for name in PACKAGE_MANAGERS if name in found]
