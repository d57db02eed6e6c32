"""Tests for import settings (JSON file + environment)."""

import json

from x3g.core.settings import (
    ENV_ACCEPT_QUOTED_TOKENS,
    ENV_ARC_SEGMENTS,
    PROJECT_SETTINGS_FILENAME,
    ImportSettings,
    find_project_settings_path,
)
from x3g.core.version import DEFAULT_ARC_SEGMENTS, MAX_ARC_SEGMENTS


def _write(tmp_path, data) -> None:
    (tmp_path / PROJECT_SETTINGS_FILENAME).write_text(json.dumps(data), encoding="utf-8")


def test_defaults_without_file(tmp_path) -> None:
    s = ImportSettings.load(tmp_path, environ={})

    assert s.arc_segments == DEFAULT_ARC_SEGMENTS == 10
    assert s.accept_quoted_tokens is True


def test_file_found_from_subdirectory(tmp_path) -> None:
    _write(tmp_path, {"tessellation": {"arc_segments": 24}, "parser": {"accept_quoted_tokens": False}})
    sub = tmp_path / "a" / "b"
    sub.mkdir(parents=True)

    assert find_project_settings_path(sub) == (tmp_path / PROJECT_SETTINGS_FILENAME).resolve()
    s = ImportSettings.load(sub, environ={})
    assert s.arc_segments == 24
    assert s.accept_quoted_tokens is False


def test_env_overrides_file(tmp_path) -> None:
    _write(tmp_path, {"tessellation": {"arc_segments": 24}})

    s = ImportSettings.load(
        tmp_path, environ={ENV_ARC_SEGMENTS: "32", ENV_ACCEPT_QUOTED_TOKENS: "off"}
    )

    assert s.arc_segments == 32
    assert s.accept_quoted_tokens is False


def test_invalid_values_keep_defaults(tmp_path, caplog) -> None:
    _write(tmp_path, {"tessellation": {"arc_segments": "muchos"}})

    s = ImportSettings.load(tmp_path, environ={ENV_ACCEPT_QUOTED_TOKENS: "quizas"})

    assert s == ImportSettings()
    assert "arc_segments" in caplog.text


def test_segments_are_clamped(tmp_path) -> None:
    assert ImportSettings.load(tmp_path, environ={ENV_ARC_SEGMENTS: "0"}).arc_segments == 1
    assert ImportSettings.load(tmp_path, environ={ENV_ARC_SEGMENTS: "99999"}).arc_segments == MAX_ARC_SEGMENTS


def test_broken_json_is_ignored(tmp_path) -> None:
    (tmp_path / PROJECT_SETTINGS_FILENAME).write_text("{no es json", encoding="utf-8")

    assert ImportSettings.load(tmp_path, environ={}) == ImportSettings()
