import sys
from pathlib import Path

from sectscript.data import paths


def test_get_definitions_path_base_path(tmp_path: Path) -> None:
    assert paths.get_definitions_path(tmp_path) == tmp_path


def test_get_definitions_path_source_repo_exists() -> None:
    definitions_path = paths.get_definitions_path()
    assert definitions_path.name == "definitions"
    assert definitions_path.exists()


def test_get_dialogues_path_source_repo_exists() -> None:
    dialogues_path = paths.get_dialogues_path()
    assert dialogues_path.name == "dialogues"
    assert dialogues_path.exists()


def test_get_definitions_path_pyinstaller_meipass(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "_MEIPASS", str(tmp_path), raising=False)
    assert paths.get_definitions_path() == tmp_path / "data" / "definitions"
    assert paths.get_dialogues_path() == tmp_path / "data" / "dialogues"
