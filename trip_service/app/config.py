from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml


DEFAULT_CONFIG_FILE_NAME = "config.yaml"
CONFIG_PATH_ENV = "TRIP_CONFIG_PATH"


@dataclass(slots=True, frozen=True)
class ReferenceData:
    """배포 단위로 고정되는 허용 태그/여행지 목록.

    검증 로직은 이 객체만 주입받고, 목록을 코드에 하드코딩하지 않는다.
    """

    tags: frozenset[str]
    cities: frozenset[str]

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def has_city(self, city: str) -> bool:
        return city in self.cities


def _find_config_path() -> Path:
    """TRIP_CONFIG_PATH 가 있으면 그 경로를, 없으면 cwd 부터 상위로 config.yaml 을 찾는다."""

    explicit = os.getenv(CONFIG_PATH_ENV, "").strip()
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise RuntimeError(f"{CONFIG_PATH_ENV} points to a missing file: {path}")
        return path

    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / DEFAULT_CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    raise RuntimeError(
        f"{DEFAULT_CONFIG_FILE_NAME} not found. Place config.yaml in project root.",
    )


def _read_string_list(section: dict, key: str, path: Path) -> frozenset[str]:
    raw = section.get(key) or []
    if not isinstance(raw, list):
        raise RuntimeError(f"reference_data.{key} in {path} must be a list: {raw!r}")

    values: set[str] = set()
    for item in raw:
        value = str(item).strip()
        if value:
            values.add(value)
    return frozenset(values)


def load_reference_data(path: Path | None = None) -> ReferenceData:
    path = path or _find_config_path()
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    section = data.get("reference_data") or {}
    if not isinstance(section, dict):
        raise RuntimeError(f"invalid reference_data section in {path}")

    return ReferenceData(
        tags=_read_string_list(section, "tags", path),
        cities=_read_string_list(section, "cities", path),
    )


@lru_cache(maxsize=1)
def get_reference_data() -> ReferenceData:
    """FastAPI DI용. 프로세스당 한 번만 config.yaml 을 읽는다."""

    return load_reference_data()
