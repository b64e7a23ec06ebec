"""
Unit tests for the theme library storage layer.
Tests the connection pool, schema, repository and ThemeLibrary facade.
"""
import json

import pytest

from prismagrid.core.color import ColumnMode, GridConfig, DEFAULT_CONFIG
from prismagrid.database.connection_pool import ConnectionPool
from prismagrid.database.schema_manager import SchemaManager
from prismagrid.database.models import SavedTheme
from prismagrid.database.repositories import SavedThemeRepository
from prismagrid.database.theme_library import (
    ThemeLibrary, UNTITLED_NAME, EXPORT_TYPE, get_theme_library, reset_theme_library,
)


@pytest.fixture
def pool(temp_db_path):
    """Create a connection pool on an initialized temporary database."""
    SchemaManager(temp_db_path).initialize()
    pool = ConnectionPool(temp_db_path, max_connections=3)
    yield pool
    pool.close_all()


class TestConnectionPool:
    """Test ConnectionPool functionality."""

    def test_get_connection(self, pool):
        """Test getting a connection from the pool."""
        with pool.get_connection() as conn:
            assert conn.execute("SELECT 1").fetchone()[0] == 1

    def test_connection_reuse(self, pool):
        """Test that connections are reused."""
        with pool.get_connection() as conn1:
            id1 = id(conn1)
        with pool.get_connection() as conn2:
            id2 = id(conn2)
        assert id1 == id2

    def test_transaction_rollback(self, pool):
        """Test transaction rollback on exception."""
        with pytest.raises(RuntimeError):
            with pool.transaction() as conn:
                conn.execute(
                    "INSERT INTO saved_themes (id, name, description, config, created_at) "
                    "VALUES ('x', 'X', '', '{}', 1)"
                )
                raise RuntimeError("boom")

        with pool.get_connection() as conn:
            assert conn.execute("SELECT COUNT(*) FROM saved_themes").fetchone()[0] == 0


class TestSchemaManager:
    """Test schema creation and versioning."""

    def test_initialize_sets_version(self, temp_db_path):
        """Test that initialize records the schema version."""
        schema = SchemaManager(temp_db_path)
        schema.initialize()
        assert schema.get_version() == SchemaManager.SCHEMA_VERSION

    def test_initialize_is_idempotent(self, temp_db_path):
        """Test that initialize can run on an existing database."""
        SchemaManager(temp_db_path).initialize()
        SchemaManager(temp_db_path).initialize()
        assert SchemaManager(temp_db_path).get_version() == SchemaManager.SCHEMA_VERSION

    def test_creates_parent_directory(self, tmp_path):
        """Test that a missing data directory is created."""
        db_path = tmp_path / "nested" / "dir" / "themes.db"
        SchemaManager(db_path).initialize()
        assert db_path.exists()


class TestSavedThemeModel:
    """Test SavedTheme defaults and serialization."""

    def test_generates_id_and_timestamp(self):
        """Test that a blank id and timestamp are filled in."""
        theme = SavedTheme(id="", name="A", config=DEFAULT_CONFIG)
        assert theme.id
        assert theme.created_at > 0

    def test_ids_are_unique(self):
        a = SavedTheme(id="", name="A", config=DEFAULT_CONFIG)
        b = SavedTheme(id="", name="B", config=DEFAULT_CONFIG)
        assert a.id != b.id

    def test_to_dict_shape(self):
        theme = SavedTheme(id="t1", name="A", config=DEFAULT_CONFIG,
                           description="d", created_at=1700000000000)
        data = theme.to_dict()
        assert data == {
            "id": "t1", "name": "A", "description": "d",
            "config": DEFAULT_CONFIG.to_dict(), "createdAt": 1700000000000,
        }
        assert SavedTheme.from_dict(data) == theme

    def test_from_dict_requires_name(self):
        with pytest.raises(KeyError):
            SavedTheme.from_dict({"id": "x", "config": DEFAULT_CONFIG.to_dict()})


class TestSavedThemeRepository:
    """Test SavedThemeRepository CRUD operations."""

    @pytest.fixture
    def repo(self, pool):
        return SavedThemeRepository(pool)

    def test_add_and_get(self, repo):
        """Test adding and retrieving a theme."""
        config = GridConfig(10, 20, 30, -5, 4, -3, 3, 4, ColumnMode.SATURATION)
        theme = SavedTheme(id="", name="Dusk", config=config, description="Warm")
        assert repo.add(theme)

        stored = repo.get_by_id(theme.id)
        assert stored == theme
        assert stored.config.column_mode is ColumnMode.SATURATION

    def test_get_missing_returns_none(self, repo):
        assert repo.get_by_id("missing") is None

    def test_duplicate_id_fails(self, repo):
        """Test that adding an existing id returns False."""
        theme = SavedTheme(id="dup", name="A", config=DEFAULT_CONFIG)
        assert repo.add(theme)
        assert not repo.add(theme)
        assert repo.count() == 1

    def test_update(self, repo):
        """Test updating a theme."""
        theme = SavedTheme(id="", name="Before", config=DEFAULT_CONFIG)
        repo.add(theme)
        theme.name = "After"
        assert repo.update(theme)
        assert repo.get_by_id(theme.id).name == "After"

    def test_update_missing_returns_false(self, repo):
        assert not repo.update(SavedTheme(id="ghost", name="G", config=DEFAULT_CONFIG))

    def test_newest_first(self, repo):
        """Test that get_all orders by creation time, newest first."""
        repo.add(SavedTheme(id="old", name="Old", config=DEFAULT_CONFIG, created_at=1000))
        repo.add(SavedTheme(id="new", name="New", config=DEFAULT_CONFIG, created_at=3000))
        repo.add(SavedTheme(id="mid", name="Mid", config=DEFAULT_CONFIG, created_at=2000))
        assert [t.id for t in repo.get_all()] == ["new", "mid", "old"]

    def test_same_timestamp_latest_insert_first(self, repo):
        repo.add(SavedTheme(id="first", name="1", config=DEFAULT_CONFIG, created_at=5000))
        repo.add(SavedTheme(id="second", name="2", config=DEFAULT_CONFIG, created_at=5000))
        assert [t.id for t in repo.get_all()] == ["second", "first"]

    def test_exists_and_delete(self, repo):
        theme = SavedTheme(id="", name="A", config=DEFAULT_CONFIG)
        repo.add(theme)
        assert repo.exists(theme.id)
        assert repo.delete(theme.id)
        assert not repo.exists(theme.id)


class TestThemeLibrary:
    """Test the ThemeLibrary facade."""

    def test_starts_empty(self, library):
        assert library.list() == []
        assert library.count() == 0

    def test_save_prepends(self, library):
        """Test that each save lands at the head of the list."""
        first = library.save("First", "", DEFAULT_CONFIG)
        second = library.save("Second", "", DEFAULT_CONFIG.replace(base_hue=10))
        names = [t.name for t in library.list()]
        assert names == ["Second", "First"]
        assert library.list()[0].id == second.id
        assert first.id != second.id

    def test_save_snapshots_config(self, library):
        """Test that the stored config equals the one passed in."""
        config = GridConfig(300, 45, 62, -20, 7, 12, 5, 9, ColumnMode.SATURATION)
        theme = library.save("Violet", "Deep purples", config)
        assert library.get(theme.id).config == config
        assert library.get(theme.id).description == "Deep purples"

    def test_blank_name_becomes_untitled(self, library):
        theme = library.save("   ", "", DEFAULT_CONFIG)
        assert theme.name == UNTITLED_NAME

    def test_name_is_trimmed(self, library):
        assert library.save("  Ocean  ", "", DEFAULT_CONFIG).name == "Ocean"

    def test_delete(self, library):
        """Test deleting removes only the given theme."""
        keep = library.save("Keep", "", DEFAULT_CONFIG)
        drop = library.save("Drop", "", DEFAULT_CONFIG)
        assert library.delete(drop.id)
        assert [t.id for t in library.list()] == [keep.id]

    def test_delete_unknown_id_is_noop(self, library):
        library.save("Keep", "", DEFAULT_CONFIG)
        assert library.delete("does-not-exist")
        assert library.count() == 1

    def test_survives_reopen(self, temp_db_path):
        """Test that saved themes persist across library instances."""
        lib = ThemeLibrary(temp_db_path)
        lib.save("A", "", DEFAULT_CONFIG)
        lib.save("B", "", DEFAULT_CONFIG)
        lib.close()

        reopened = ThemeLibrary(temp_db_path)
        try:
            assert [t.name for t in reopened.list()] == ["B", "A"]
        finally:
            reopened.close()


class TestExportImport:
    """Test JSON export and import of the library."""

    def test_export_structure(self, library):
        library.save("A", "desc", DEFAULT_CONFIG)
        data = library.export_data()
        assert data["export_type"] == EXPORT_TYPE
        assert len(data["themes"]) == 1
        assert data["themes"][0]["config"]["columnMode"] == "lightness"

    def test_round_trip_through_file(self, library, tmp_path):
        """Test exporting to a file and importing into a fresh library."""
        library.save("A", "", DEFAULT_CONFIG)
        library.save("B", "", DEFAULT_CONFIG.replace(column_mode=ColumnMode.SATURATION))
        path = tmp_path / "themes.json"
        assert library.export_to_json(path) == 2

        other = ThemeLibrary(tmp_path / "other.db")
        try:
            assert other.import_from_json(path) == 2
            assert [t.name for t in other.list()] == ["B", "A"]
        finally:
            other.close()

    def test_import_skips_existing_ids(self, library):
        library.save("A", "", DEFAULT_CONFIG)
        assert library.import_data(library.export_data()) == 0
        assert library.count() == 1

    def test_import_skips_malformed_records(self, library):
        data = {
            "export_type": EXPORT_TYPE,
            "themes": [
                {"id": "ok", "name": "Ok", "config": DEFAULT_CONFIG.to_dict(), "createdAt": 1},
                {"id": "no-name", "config": DEFAULT_CONFIG.to_dict()},
                {"id": "bad-mode", "name": "Bad", "config": {"columnMode": "diagonal"}},
                {"id": "bad-config", "name": "Bad", "config": "not a dict"},
            ],
        }
        assert library.import_data(data) == 1
        assert library.get("ok").name == "Ok"

    def test_import_rejects_other_exports(self, library, tmp_path):
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"export_type": "queries", "queries": []}), encoding="utf-8")
        with pytest.raises(ValueError):
            library.import_from_json(path)


class TestGlobalLibrary:
    """Test the global library accessor."""

    def test_singleton(self, temp_db_path):
        reset_theme_library()
        try:
            assert get_theme_library(temp_db_path) is get_theme_library()
        finally:
            reset_theme_library()

    def test_default_path_from_settings(self, app_home):
        reset_theme_library()
        try:
            library = get_theme_library()
            assert library.db_path == app_home / "themes.db"
        finally:
            reset_theme_library()


class TestImportValidation:
    """Test that malformed imports never reach the database."""

    def _export(self, **config_overrides):
        config = dict(DEFAULT_CONFIG.to_dict(), **config_overrides)
        return {
            "export_type": EXPORT_TYPE,
            "themes": [{"id": "x1", "name": "Bad", "config": config, "createdAt": 1}],
        }

    @pytest.mark.parametrize("overrides", [
        {"baseHue": "abc"},
        {"rows": "8"},
        {"satStep": None},
        {"cols": False},
    ])
    def test_wrongly_typed_config_skipped(self, library, overrides):
        """Test that records with non-numeric config values are skipped."""
        assert library.import_data(self._export(**overrides)) == 0
        assert library.count() == 0

    def test_wrongly_typed_record_fields_skipped(self, library):
        base = {"name": "Ok", "config": DEFAULT_CONFIG.to_dict()}
        data = {
            "export_type": EXPORT_TYPE,
            "themes": [
                dict(base, id="a", createdAt="yesterday"),
                dict(base, id="b", name=42),
                dict(base, id="c", description=["x"]),
            ],
        }
        assert library.import_data(data) == 0

    def test_zero_timestamp_kept(self, library):
        """Test that createdAt 0 is a real timestamp, not a missing one."""
        data = self._export()
        data["themes"][0]["createdAt"] = 0
        assert library.import_data(data) == 1
        assert library.get("x1").created_at == 0

    def test_missing_timestamp_filled(self, library):
        data = self._export()
        del data["themes"][0]["createdAt"]
        library.import_data(data)
        assert library.get("x1").created_at > 0

    def test_out_of_range_config_imported_as_is(self, library):
        """Test that numeric values outside the control ranges are kept."""
        assert library.import_data(self._export(rows=30, hueStep=90)) == 1
        config = library.get("x1").config
        assert config.rows == 30 and config.hue_step == 90


class TestRename:
    """Test renaming saved themes."""

    def test_rename_keeps_config_and_order(self, library):
        first = library.save("First", "desc", DEFAULT_CONFIG)
        library.save("Second", "", DEFAULT_CONFIG)
        renamed = library.rename(first.id, "  Renamed  ")
        assert renamed.name == "Renamed"
        stored = library.get(first.id)
        assert stored.name == "Renamed"
        assert stored.description == "desc"
        assert stored.created_at == first.created_at
        assert [t.name for t in library.list()] == ["Second", "Renamed"]

    def test_rename_blank_becomes_untitled(self, library):
        theme = library.save("Named", "", DEFAULT_CONFIG)
        assert library.rename(theme.id, " ").name == UNTITLED_NAME

    def test_rename_unknown_id(self, library):
        assert library.rename("missing", "X") is None
