from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import find_ruby_files

if TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, relative_path: str, content: str = "x = 1\n") -> None:
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _found(root: Path, **kwargs: object) -> list[str]:
    return [
        path.relative_to(root).as_posix()
        for path in find_ruby_files(root, **kwargs)  # type: ignore[arg-type]
    ]


def test_finds_ruby_files_sorted(tmp_path: Path) -> None:
    _write(tmp_path, "spec/b_spec.rb")
    _write(tmp_path, "app/models/a.rb")
    _write(tmp_path, "lib/tasks/clock.rake")
    _write(tmp_path, "README.md")
    _write(tmp_path, "script.py")

    assert _found(tmp_path) == [
        "app/models/a.rb",
        "spec/b_spec.rb",
    ]


def test_respects_root_gitignore(tmp_path: Path) -> None:
    _write(tmp_path, ".gitignore", "*_generated.rb\n")
    _write(tmp_path, "lib/schema_generated.rb")
    _write(tmp_path, "spec/a_spec.rb")

    assert _found(tmp_path) == ["spec/a_spec.rb"]


def test_nested_gitignore_only_when_enabled(tmp_path: Path) -> None:
    _write(tmp_path, "spec/.gitignore", "tmp_spec.rb\n")
    _write(tmp_path, "spec/tmp_spec.rb")
    _write(tmp_path, "spec/a_spec.rb")

    assert _found(tmp_path) == ["spec/a_spec.rb", "spec/tmp_spec.rb"]
    assert _found(tmp_path, nested_gitignore=True) == ["spec/a_spec.rb"]


def test_include_and_exclude_patterns(tmp_path: Path) -> None:
    _write(tmp_path, "spec/a_spec.rb")
    _write(tmp_path, "spec/fixtures/b.rb")
    _write(tmp_path, "app/c.rb")

    found = _found(
        tmp_path,
        include_patterns=["spec/**"],
        exclude_patterns=["spec/fixtures/*"],
    )

    assert found == ["spec/a_spec.rb"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_skips_symlinks(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write(repo_root, "spec/a_spec.rb")

    external_root = tmp_path / "external"
    external_root.mkdir()
    _write(external_root, "leak.rb")

    (repo_root / "linked").symlink_to(external_root, target_is_directory=True)
    (repo_root / "alias.rb").symlink_to(repo_root / "spec" / "a_spec.rb")

    assert _found(repo_root) == ["spec/a_spec.rb"]
