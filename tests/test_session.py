"""
Tests para forms/session.py - Sesión de edición de formularios.
"""

import os
import time
from datetime import timedelta

import pytest

from agroforms.forms import (
    FormIncompleteError,
    FormSession,
    HARVEST_SCHEDULE,
    MAINTENANCE,
    SessionClosedError,
    UnknownFieldError,
    Validity,
    YIELD_RECORD,
)
from agroforms.forms.models import FieldType, to_raw

from conftest import fill


@pytest.fixture
def session():
    return FormSession(HARVEST_SCHEDULE)


class TestInitialState:
    """Tests para una sesión nueva."""

    def test_only_first_field_unlocked(self, session):
        assert session.locked == {
            "cropType": False,
            "harvestDate": True,
            "startTime": True,
            "endTime": True,
            "fieldNumber": True,
            "numberOfWorkers": True,
        }

    def test_all_pending(self, session):
        assert all(o.validity == Validity.PENDING for o in session.validity.values())

    def test_no_errors_before_input(self, session):
        assert session.errors() == {}
        assert not session.is_form_valid()

    def test_count_valid(self, session):
        assert session.count_valid() == (0, 6)


class TestFieldChange:
    """Tests para on_field_change."""

    def test_locked_field_ignored(self, session):
        assert session.on_field_change("endTime", "10:00") is False
        assert session.value("endTime") is None

    def test_unknown_field(self, session):
        with pytest.raises(UnknownFieldError):
            session.on_field_change("ghost", "x")

    def test_sequential_unlock(self, session, today):
        session.on_field_change("cropType", "Coconut")
        assert not session.is_locked("harvestDate")
        assert session.is_locked("startTime")

        session.on_field_change("harvestDate", today.isoformat())
        assert not session.is_locked("startTime")
        assert session.is_locked("endTime")

    def test_invalid_value_keeps_dependents_locked(self, session, today):
        fill(session, {"cropType": "Coconut", "harvestDate": (today - timedelta(days=1)).isoformat()})
        assert session.outcome("harvestDate").is_invalid
        assert session.is_locked("startTime")

    def test_end_time_before_start_then_fixed(self, session, today):
        fill(session, {
            "cropType": "Coconut",
            "harvestDate": today.isoformat(),
            "startTime": "09:00",
            "endTime": "08:30",
        })
        assert session.errors() == {"endTime": "End time must be after the start time!"}
        assert session.is_locked("fieldNumber")

        session.on_field_change("endTime", "10:00")
        assert session.outcome("endTime").is_valid
        assert not session.is_locked("fieldNumber")

    def test_clearing_required_field(self, session):
        session.on_field_change("cropType", "Coconut")
        session.on_field_change("cropType", "")
        assert session.errors() == {"cropType": "Please select a crop type!"}
        assert session.is_locked("harvestDate")

    def test_numeric_only_rejects_letters(self, session, harvest_values):
        values = dict(harvest_values)
        del values["numberOfWorkers"]
        fill(session, values)
        assert session.on_field_change("numberOfWorkers", "12a") is False
        assert session.value("numberOfWorkers") is None
        assert session.is_form_valid() is False

    def test_clearing_last_field_invalidates_form(self, session, harvest_values):
        fill(session, harvest_values)
        assert session.is_form_valid()

        session.on_field_change("numberOfWorkers", "")
        assert session.is_form_valid() is False
        assert session.errors() == {"numberOfWorkers": "Number of workers is required!"}
        assert all(
            session.outcome(field_id).is_valid
            for field_id in harvest_values if field_id != "numberOfWorkers"
        )

    def test_paste_rejected(self, session, harvest_values):
        fill(session, {k: harvest_values[k] for k in ("cropType", "harvestDate")})
        assert session.on_field_change("startTime", "08:00", pasted=True) is False
        assert session.on_field_change("startTime", "08:00") is True

    @pytest.mark.parametrize("workers,valid", [("41", False), ("0", False), ("1", True), ("40", True)])
    def test_number_of_workers_range(self, session, harvest_values, workers, valid):
        fill(session, {**harvest_values, "numberOfWorkers": workers})
        assert session.outcome("numberOfWorkers").is_valid is valid
        if not valid:
            assert session.errors()["numberOfWorkers"] == "Number of workers must be between 1 and 40!"


class TestRelock:
    """Tests para campos que se bloquean de nuevo."""

    def test_value_kept_while_locked(self, session, harvest_values):
        fill(session, harvest_values)
        assert session.is_form_valid()

        session.on_field_change("startTime", "11:00")
        assert session.outcome("endTime").is_invalid
        assert session.is_locked("fieldNumber")
        assert session.is_locked("numberOfWorkers")
        assert session.value("numberOfWorkers") == "12"
        assert session.outcome("numberOfWorkers").validity == Validity.PENDING
        assert not session.is_form_valid()

    def test_unlocked_fields_reevaluated(self, session, harvest_values):
        fill(session, harvest_values)
        session.on_field_change("startTime", "11:00")
        session.on_field_change("endTime", "12:00")

        assert not session.is_locked("numberOfWorkers")
        assert session.outcome("numberOfWorkers").is_valid
        assert session.is_form_valid()

    def test_locked_invalid_value_not_reported(self, session, harvest_values):
        fill(session, {**harvest_values, "numberOfWorkers": "99"})
        assert "numberOfWorkers" in session.errors()

        session.on_field_change("cropType", "")
        assert "numberOfWorkers" not in session.errors()


class TestPayload:
    """Tests para el payload a persistir."""

    def test_parsed_values(self, session, harvest_values, today):
        fill(session, harvest_values)
        assert session.payload() == {
            "cropType": "Coconut",
            "harvestDate": f"{today.isoformat()}T00:00:00",
            "startTime": "08:00",
            "endTime": "10:00",
            "fieldNumber": "AA1",
            "numberOfWorkers": 12,
        }

    def test_incomplete_form(self, session):
        session.on_field_change("cropType", "Coconut")
        with pytest.raises(FormIncompleteError):
            session.payload()

    def test_incomplete_error_carries_messages(self, session):
        session.on_field_change("cropType", "")
        with pytest.raises(FormIncompleteError) as exc_info:
            session.payload()
        assert exc_info.value.errors == {"cropType": "Please select a crop type!"}

    def test_maintenance_progress(self, today):
        session = FormSession(MAINTENANCE)
        fill(session, {
            "dateOfMaintenance": today.isoformat(),
            "task": "Spraying",
            "managerInCharge": "Nimal Perera",
            "progress": "40%",
        })
        assert session.payload()["progress"] == "40%"


class TestDiscard:
    """Tests para discard."""

    def test_discard_closes(self, session, harvest_values):
        fill(session, harvest_values)
        session.discard()
        assert session.closed
        assert not session.is_form_valid()
        assert session.value("cropType") is None

    def test_change_after_discard(self, session):
        session.discard()
        with pytest.raises(SessionClosedError):
            session.on_field_change("cropType", "Coconut")


class TestFromRecord:
    """Tests para sesiones de edición."""

    def test_prepopulated(self, yield_record, today):
        session = FormSession.from_record(YIELD_RECORD, yield_record)
        assert session.record_id == "r1"
        assert session.value("harvestdate") == (today - timedelta(days=2)).isoformat()
        assert session.value("quantity") == "500"
        assert session.is_form_valid()

    def test_id_key(self, yield_record):
        record = {k: v for k, v in yield_record.items() if k != "_id"}
        record["id"] = "a1b2c3d4"
        assert FormSession.from_record(YIELD_RECORD, record).record_id == "a1b2c3d4"

    def test_stale_date_is_invalid(self, yield_record, today):
        yield_record["harvestdate"] = (today - timedelta(days=30)).isoformat()
        session = FormSession.from_record(YIELD_RECORD, yield_record)
        assert session.errors() == {"harvestdate": "Harvest date must be within the past 7 days!"}
        assert session.is_locked("fieldNumber")

    def test_payload_types(self, yield_record):
        session = FormSession.from_record(YIELD_RECORD, yield_record)
        session.on_field_change("quantity", "800")
        payload = session.payload()
        assert payload["quantity"] == 800
        assert payload["treesPicked"] == 20
        assert payload["unit"] == "Kg"


@pytest.fixture
def colombo_time():
    """Zona local UTC+05:30 durante el test."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "IST-05:30"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="requiere time.tzset")
class TestStoredDates:
    """Tests para fechas persistidas con zona horaria."""

    def test_utc_timestamp_read_in_local_time(self, colombo_time):
        assert to_raw(FieldType.DATE, "2024-06-14T18:30:00.000Z") == "2024-06-15"

    def test_offset_timestamp(self, colombo_time):
        assert to_raw(FieldType.DATE, "2024-06-15T01:00:00+05:30") == "2024-06-15"

    def test_naive_timestamp_unchanged(self, colombo_time):
        assert to_raw(FieldType.DATE, "2024-06-14T23:30:00") == "2024-06-14"
