from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from artifacts.generators import deps as deps_module
from artifacts.generators.deps import DepsGenerator

if TYPE_CHECKING:
    from pathlib import Path


def _write_repo_fixture(repo_root: Path) -> None:
    repo_root.mkdir()
    (repo_root / "nested").mkdir()
    (repo_root / "app").mkdir()
    (repo_root / "app" / "keep.rb").write_text(
        "class Keep\n  Logger.info('keep')\nend\n", encoding="utf-8"
    )
    (repo_root / "nested" / "skip.rb").write_text(
        "class Skip\n  Logger.info('skip')\nend\n", encoding="utf-8"
    )
    (repo_root / "nested" / ".gitignore").write_text("skip.rb\n", encoding="utf-8")


@pytest.mark.parametrize(
    ("nested_gitignore", "expected_owners"),
    [(False, ["Keep", "Skip"]), (True, ["Keep"])],
)
def test_generator_honours_nested_gitignore(
    tmp_path: Path,
    nested_gitignore: bool,
    expected_owners: list[str],
) -> None:
    repo_root = tmp_path / "repo"
    _write_repo_fixture(repo_root)

    dependency_map, summary = DepsGenerator().generate(
        root=repo_root,
        out_dir=tmp_path / "artifacts",
        nested_gitignore=nested_gitignore,
    )

    assert list(dependency_map) == expected_owners
    assert summary["file_count"] == len(expected_owners)
    assert summary["statistics"]["most_used_dependency"] == "Logger"


def test_generator_name() -> None:
    assert DepsGenerator().name == "deps"


def test_generator_python_language_scans_python_files(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    (repo_root / "ignored.rb").write_text("class Ruby; Foo; end\n", encoding="utf-8")
    (repo_root / "model.py").write_text(
        "class Model(Base):\n    pass\n", encoding="utf-8"
    )

    dependency_map, summary = DepsGenerator().generate(
        root=repo_root,
        out_dir=tmp_path / "artifacts",
        language="python",
    )

    assert dependency_map == {"Model": [{"Base": []}]}
    assert summary["language"] == "python"


def test_generator_records_analyzer_failures(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    repo_root = tmp_path / "repo"
    _write_repo_fixture(repo_root)

    def _exploding_statistics(dependency_map: object) -> object:
        msg = "statistics unavailable"
        raise RuntimeError(msg)

    original_factories = deps_module.default_analyzer_factories

    def _factories(external_prefixes: object) -> list[object]:
        factories = original_factories(external_prefixes)  # type: ignore[arg-type]
        return [*factories[:-1], _exploding_statistics]

    monkeypatch.setattr(deps_module, "default_analyzer_factories", _factories)

    _, summary = DepsGenerator().generate(
        root=repo_root, out_dir=tmp_path / "artifacts"
    )

    assert summary["errors"] == [
        {
            "analyzer": "_exploding_statistics",
            "error_type": "RuntimeError",
            "message": "statistics unavailable",
        }
    ]
    assert summary["statistics"]["most_used_dependency"] is None
    assert summary["cycles"] == []

    with pytest.raises(RuntimeError, match="statistics unavailable"):
        DepsGenerator().generate(
            root=repo_root,
            out_dir=tmp_path / "artifacts-stop",
            error_handling="stop",
        )
