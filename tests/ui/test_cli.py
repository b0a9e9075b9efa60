from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from eventcatalog.ui.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _catalog_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'catalog.db'}")
    monkeypatch.setenv("EVENTCATALOG_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("EVENTCATALOG_SENTINEL_CATEGORY", raising=False)
    monkeypatch.delenv("EVENTCATALOG_DESCENDANT_STRATEGY", raising=False)
    monkeypatch.delenv("EVENTCATALOG_ATOMIC_DELETE", raising=False)


def invoke(*args: str) -> tuple[int, str]:
    result = runner.invoke(app, list(args))
    return result.exit_code, result.output


def test_init_db_creates_sentinel() -> None:
    code, output = invoke("init-db")

    assert code == 0
    assert "Sentinel category id=1" in output


def test_category_lifecycle_through_cli() -> None:
    assert invoke("categories", "create", "Music")[0] == 0
    assert invoke("categories", "create", "Jazz", "--parent-id", "2")[0] == 0

    code, output = invoke("categories", "tree")
    assert code == 0
    assert "Jazz" in output

    code, output = invoke("categories", "delete", "2")
    assert code == 0
    assert "Deleted category 2" in output

    code, output = invoke("categories", "list")
    assert code == 0
    assert "Music" not in output
    assert "Jazz" in output


def test_deleting_sentinel_reports_invalid_operation() -> None:
    code, output = invoke("categories", "delete", "1")

    assert code == 1
    assert "INVALID_OPERATION" in output


def test_update_to_top_level() -> None:
    invoke("categories", "create", "Music")
    invoke("categories", "create", "Jazz", "--parent-id", "2")

    code, output = invoke("categories", "update", "3", "--top-level")

    assert code == 0
    assert "parent=None" in output


def test_update_rejects_conflicting_parent_flags() -> None:
    code, _ = invoke("categories", "update", "1", "--parent-id", "2", "--top-level")

    assert code == 1


def test_events_are_listed_by_category_name() -> None:
    invoke("categories", "create", "Music")
    invoke("venues", "add", "Hall")
    code, output = invoke(
        "events",
        "create",
        "Jam",
        "--starts-at",
        "2031-01-01T20:00:00",
        "--venue-id",
        "1",
        "--price",
        "12.5",
        "--category-id",
        "2",
    )
    assert code == 0, output

    code, output = invoke("events", "list", "--category-names", "music")

    assert code == 0
    assert "Jam" in output
    assert "1 events in total" in output


def test_event_in_the_past_is_rejected() -> None:
    invoke("venues", "add", "Hall")

    code, output = invoke(
        "events",
        "create",
        "Old",
        "--starts-at",
        "2001-01-01",
        "--venue-id",
        "1",
        "--price",
        "5",
    )

    assert code == 1
    assert "past" in output


def test_invalid_page_limit_is_rejected() -> None:
    code, output = invoke("categories", "list", "--limit", "0")

    assert code == 1
    assert "limit" in output


def test_missing_event_is_not_found() -> None:
    code, output = invoke("events", "show", "404")

    assert code == 1
    assert "NOT_FOUND" in output


def test_seed_taxonomy_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "taxonomy.yaml"
    path.write_text(
        "categories:\n  - name: Music\n  - name: Jazz\n    parent: Music\n",
        encoding="utf-8",
    )

    code, output = invoke("seed-taxonomy", str(path))

    assert code == 0
    assert "Seeded 2 categories" in output
    code, output = invoke("categories", "tree")
    assert "Jazz" in output
