"""
Tests para forms/registry.py - Definición y registro de formularios.
"""

import pytest

from agroforms.forms import (
    CrossFieldRule,
    FieldSpec,
    FormDefinition,
    FormDefinitionError,
    FormRegistry,
    HARVEST_SCHEDULE,
    MAINTENANCE,
    Relation,
    UnknownFieldError,
    UnknownFormError,
    registry,
)


def make_form(*fields, kind="test"):
    return FormDefinition(kind=kind, title="Test", collection="tests", fields=tuple(fields))


class TestFormDefinition:
    """Tests para la verificación del grafo de campos."""

    def test_fields_sorted_by_order(self):
        form = make_form(
            FieldSpec(id="b", order=5, depends_on="a"),
            FieldSpec(id="a", order=1),
        )
        assert form.field_ids == ["a", "b"]

    def test_duplicate_id(self):
        with pytest.raises(FormDefinitionError, match="duplicado"):
            make_form(FieldSpec(id="a", order=0), FieldSpec(id="a", order=1))

    def test_duplicate_order(self):
        with pytest.raises(FormDefinitionError, match="repetido"):
            make_form(FieldSpec(id="a", order=0), FieldSpec(id="b", order=0))

    def test_negative_order(self):
        with pytest.raises(FormDefinitionError, match="negativo"):
            make_form(FieldSpec(id="a", order=-1))

    def test_unknown_dependency(self):
        with pytest.raises(FormDefinitionError, match="inexistente"):
            make_form(FieldSpec(id="a", order=0, depends_on="ghost"))

    def test_dependency_must_precede(self):
        with pytest.raises(FormDefinitionError, match="después"):
            make_form(FieldSpec(id="a", order=0, depends_on="b"), FieldSpec(id="b", order=1))

    def test_cycle_rejected(self):
        with pytest.raises(FormDefinitionError):
            make_form(
                FieldSpec(id="a", order=0, depends_on="b"),
                FieldSpec(id="b", order=1, depends_on="a"),
            )

    def test_cross_field_reference_must_exist(self):
        rule = CrossFieldRule("ghost", Relation.AFTER, "after")
        with pytest.raises(FormDefinitionError, match="ghost"):
            make_form(FieldSpec(id="a", order=0, rules=(rule,)))

    def test_empty_form(self):
        with pytest.raises(FormDefinitionError):
            make_form()

    def test_definition_error_is_value_error(self):
        with pytest.raises(ValueError):
            make_form(FieldSpec(id="a", order=-1))

    def test_get_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            HARVEST_SCHEDULE.get("ghost")


class TestGraphQueries:
    """Tests para descendants y referrers."""

    def test_descendants_of_first_field(self):
        assert HARVEST_SCHEDULE.descendants("cropType") == [
            "harvestDate", "startTime", "endTime", "fieldNumber", "numberOfWorkers",
        ]

    def test_descendants_of_last_field(self):
        assert HARVEST_SCHEDULE.descendants("numberOfWorkers") == []

    def test_descendants_of_branch(self):
        form = make_form(
            FieldSpec(id="root", order=0),
            FieldSpec(id="left", order=1, depends_on="root"),
            FieldSpec(id="right", order=2, depends_on="root"),
            FieldSpec(id="leaf", order=3, depends_on="left"),
        )
        assert form.descendants("left") == ["leaf"]
        assert form.descendants("root") == ["left", "right", "leaf"]

    def test_referrers(self):
        assert HARVEST_SCHEDULE.referrers("startTime") == ["endTime"]
        assert HARVEST_SCHEDULE.referrers("endTime") == []

    def test_evaluate(self):
        outcome = HARVEST_SCHEDULE.evaluate("endTime", "08:30", {"startTime": "09:00"})
        assert outcome.message == "End time must be after the start time!"


class TestFormRegistry:
    """Tests para FormRegistry."""

    def test_builtin_forms(self):
        assert registry.kinds() == ["harvest_schedule", "maintenance", "yield_record"]
        assert len(registry) == 3
        assert "maintenance" in registry

    def test_get(self):
        assert registry.get("maintenance") is MAINTENANCE

    def test_unknown_kind(self):
        with pytest.raises(UnknownFormError):
            registry.get("payroll")

    def test_unknown_kind_is_key_error(self):
        with pytest.raises(KeyError):
            registry.get("payroll")

    def test_duplicate_kind(self):
        reg = FormRegistry([MAINTENANCE])
        with pytest.raises(FormDefinitionError, match="ya registrado"):
            reg.register(MAINTENANCE)

    def test_iteration(self):
        reg = FormRegistry([HARVEST_SCHEDULE, MAINTENANCE])
        assert [d.kind for d in reg] == ["harvest_schedule", "maintenance"]
