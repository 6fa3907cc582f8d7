from __future__ import annotations

from pathlib import Path

import pytest

from trip_service.app.config import load_reference_data


def _write_config(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_load_reference_data_from_file(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path / "config.yaml",
        "reference_data:\n"
        "  tags: [beach, ' food ', '']\n"
        "  cities:\n"
        "    - Busan\n"
        "    - Jeju\n",
    )

    reference = load_reference_data(path)

    assert reference.tags == frozenset({"beach", "food"})
    assert reference.has_city("Jeju")
    assert not reference.has_city("jeju")


def test_load_reference_data_uses_env_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write_config(
        tmp_path / "custom.yaml",
        "reference_data:\n  tags: [city]\n  cities: [Seoul]\n",
    )
    monkeypatch.setenv("TRIP_CONFIG_PATH", str(path))

    reference = load_reference_data()

    assert reference.tags == frozenset({"city"})
    assert reference.cities == frozenset({"Seoul"})


def test_env_path_to_missing_file_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIP_CONFIG_PATH", str(tmp_path / "nope.yaml"))

    with pytest.raises(RuntimeError):
        load_reference_data()


def test_non_list_section_is_rejected(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path / "config.yaml",
        "reference_data:\n  tags: beach\n  cities: [Busan]\n",
    )

    with pytest.raises(RuntimeError):
        load_reference_data(path)


def test_empty_file_gives_empty_lists(tmp_path: Path) -> None:
    reference = load_reference_data(_write_config(tmp_path / "config.yaml", ""))

    assert reference.tags == frozenset()
    assert reference.cities == frozenset()
