"""Tests for the ``flask seed`` command group and the menu seeding helpers."""

from __future__ import annotations

import json

import pytest
from cook_service.seeds.seed_data import MENU_FIXTURES, menu_from_fixture, seed_menus


class TestSeedMenus:
    def test_seed_is_idempotent(self, redis_store):
        first = seed_menus(redis_store)
        second = seed_menus(redis_store)

        assert first == {"menus": {"created": len(MENU_FIXTURES), "existing": 0}}
        assert second == {"menus": {"created": 0, "existing": len(MENU_FIXTURES)}}
        assert redis_store.get_menu("pad-thai").name == "Pad Thai"

    @pytest.mark.parametrize(
        "fixture",
        [{"name": "no id"}, {"id": "x" * 65, "name": "too long"}, {"id": "ok", "name": " "}],
    )
    def test_invalid_fixture_is_rejected(self, fixture):
        with pytest.raises(ValueError):
            menu_from_fixture(fixture)


class TestSeedCommand:
    def test_menus_command_seeds_active_store(self, app, sql_store):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["seed", "menus"])

        assert result.exit_code == 0, result.output
        assert "Seed summary:" in result.output
        assert f"created={len(MENU_FIXTURES):>2}" in result.output
        assert sql_store.get_menu("green-curry") is not None

    def test_menus_command_reads_json_file(self, app, sql_store, tmp_path):
        path = tmp_path / "menus.json"
        path.write_text(json.dumps([{"id": "laab", "name": "Laab", "ingredients": ["pork"]}]))

        result = app.test_cli_runner().invoke(args=["seed", "menus", "--file", str(path)])

        assert result.exit_code == 0, result.output
        assert sql_store.get_menu("laab").ingredients == ("pork",)

    def test_bad_file_fails_cleanly(self, app, tmp_path):
        path = tmp_path / "menus.json"
        path.write_text(json.dumps({"id": "not-a-list"}))

        result = app.test_cli_runner().invoke(args=["seed", "menus", "--file", str(path)])

        assert result.exit_code == 1
        assert "Seeding failed" in result.output

    def test_fresh_requires_sql_backend(self, app, monkeypatch):
        monkeypatch.setitem(app.config, "COOK_STORE_BACKEND", "redis")

        result = app.test_cli_runner().invoke(args=["seed", "fresh", "--yes"])

        assert result.exit_code == 2
        assert "sql backend" in result.output
