"""
Tests para el módulo de base de datos SQLite.
"""

import sqlite3

import pytest

from agroforms.database import Database, get_database, reset_database
from agroforms.database.connection import SCHEMA_VERSION


@pytest.fixture
def harvest_data():
    return {"cropType": "Coconut", "fieldNumber": "AA1", "numberOfWorkers": 12}


class TestDatabaseRecords:
    """Tests para operaciones de registros."""

    def test_create_record(self, temp_db, harvest_data):
        record = temp_db.create_record("harvest", harvest_data)

        assert len(record["id"]) == 8
        assert record["cropType"] == "Coconut"
        assert record["created_at"] == record["updated_at"]

    def test_get_record(self, temp_db, harvest_data):
        created = temp_db.create_record("harvest", harvest_data)
        record = temp_db.get_record("harvest", created["id"])

        assert record == created

    def test_get_by_partial_id(self, temp_db, harvest_data):
        created = temp_db.create_record("harvest", harvest_data)
        record = temp_db.get_record("harvest", created["id"][:4])
        assert record["id"] == created["id"]

    def test_get_other_collection(self, temp_db, harvest_data):
        created = temp_db.create_record("harvest", harvest_data)
        assert temp_db.get_record("yield", created["id"]) is None

    def test_get_missing(self, temp_db):
        assert temp_db.get_record("harvest", "nope") is None

    def test_list_records(self, temp_db, harvest_data):
        temp_db.create_record("harvest", harvest_data)
        temp_db.create_record("harvest", {**harvest_data, "fieldNumber": "BB1"})
        temp_db.create_record("maintenance", {"task": "Spraying"})

        records = temp_db.list_records("harvest")
        assert len(records) == 2
        assert {r["fieldNumber"] for r in records} == {"AA1", "BB1"}
        assert temp_db.count_records("harvest") == 2
        assert temp_db.count_records("maintenance") == 1

    def test_update_record(self, temp_db, harvest_data):
        created = temp_db.create_record("harvest", harvest_data)
        updated = temp_db.update_record("harvest", created["id"], {**harvest_data, "numberOfWorkers": 20})

        assert updated["numberOfWorkers"] == 20
        assert updated["created_at"] == created["created_at"]
        assert temp_db.get_record("harvest", created["id"])["numberOfWorkers"] == 20

    def test_update_missing(self, temp_db, harvest_data):
        assert temp_db.update_record("harvest", "nope", harvest_data) is None

    def test_delete_record(self, temp_db, harvest_data):
        created = temp_db.create_record("harvest", harvest_data)
        assert temp_db.delete_record("harvest", created["id"]) is True
        assert temp_db.get_record("harvest", created["id"]) is None
        assert temp_db.delete_record("harvest", created["id"]) is False

    @pytest.mark.parametrize("record_id", ["", "%", "_", "________"])
    def test_empty_or_wildcard_id_matches_nothing(self, temp_db, harvest_data, record_id):
        temp_db.create_record("harvest", harvest_data)

        assert temp_db.get_record("harvest", record_id) is None
        assert temp_db.update_record("harvest", record_id, harvest_data) is None
        assert temp_db.delete_record("harvest", record_id) is False
        assert temp_db.count_records("harvest") == 1

    def test_find(self, temp_db, harvest_data):
        temp_db.create_record("harvest", harvest_data)
        temp_db.create_record("harvest", {**harvest_data, "fieldNumber": "BB1"})

        found = temp_db.records.find("harvest", fieldNumber="BB1")
        assert len(found) == 1
        assert temp_db.records.find("harvest", fieldNumber="CC1") == []


class TestDatabaseSchema:
    """Tests para esquema y migraciones."""

    def test_schema_version(self, temp_db):
        assert temp_db.get_schema_version() == SCHEMA_VERSION

    def test_migrates_old_schema(self, tmp_path):
        db_path = tmp_path / "old.db"
        conn = sqlite3.connect(db_path)
        conn.executescript(
            """
            CREATE TABLE records (
                id TEXT PRIMARY KEY, collection TEXT NOT NULL, data TEXT NOT NULL,
                created_at TEXT NOT NULL, updated_at TEXT NOT NULL
            );
            CREATE TABLE metadata (key TEXT PRIMARY KEY, value TEXT NOT NULL);
            INSERT INTO metadata (key, value) VALUES ('schema_version', '1');
            """
        )
        conn.commit()
        conn.close()

        assert Database(db_path).get_schema_version() == SCHEMA_VERSION

    def test_creates_parent_directory(self, tmp_path):
        db = Database(tmp_path / "nested" / "dir" / "agroforms.db")
        assert db.db_path.exists()


class TestGlobalDatabase:
    """Tests para la instancia global."""

    def test_same_instance(self, tmp_path):
        db = get_database(tmp_path / "a.db")
        assert get_database() is db
        assert get_database(tmp_path / "a.db") is db

    def test_new_path_new_instance(self, tmp_path):
        db = get_database(tmp_path / "a.db")
        assert get_database(tmp_path / "b.db") is not db

    def test_reset(self, tmp_path):
        db = get_database(tmp_path / "a.db")
        reset_database()
        assert get_database(tmp_path / "a.db") is not db
