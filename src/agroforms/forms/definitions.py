"""
Formularios de la finca.

Cada formulario es una cadena de campos: un campo se habilita recién cuando
el anterior está completo y válido.
"""

from agroforms.config import CropType, FieldNumber, StorageLocation, YieldUnit
from agroforms.models import HarvestSchedule, MaintenanceRecord, YieldRecord

from .models import FieldSpec, FieldType, SubmissionMessages
from .registry import FormDefinition, FormRegistry
from .rules import (
    ALPHABETIC,
    ChoiceRule,
    CrossFieldRule,
    DateWindowRule,
    PatternRule,
    RangeRule,
    Relation,
    days_ago,
    end_of_year,
    today,
)


def _options(enum_cls) -> tuple:
    return tuple(member.value for member in enum_cls)


# ============================================================================
# Programación de cosecha
# ============================================================================

HARVEST_SCHEDULE = FormDefinition(
    kind="harvest_schedule",
    title="Add Harvest Schedule",
    collection="harvest",
    return_route="/harvest/harvest-schedule",
    payload_model=HarvestSchedule,
    messages=SubmissionMessages(
        confirm_title="Confirmation Required",
        confirm_text="Are you sure you want to submit this harvest schedule?",
        success_text="Harvest Schedule added successfully!",
        failure_text="There was an error adding the harvest schedule.",
    ),
    fields=(
        FieldSpec(
            id="cropType",
            order=0,
            label="Crop Type",
            field_type=FieldType.SELECT,
            options=_options(CropType),
            required_message="Please select a crop type!",
            rules=(ChoiceRule("Please select a crop type!"),),
        ),
        FieldSpec(
            id="harvestDate",
            order=1,
            label="Harvest Date",
            field_type=FieldType.DATE,
            depends_on="cropType",
            required_message="Please select the harvest date!",
            rules=(
                DateWindowRule(
                    "Harvest date must be between today and the end of the year!",
                    earliest=today,
                    latest=end_of_year,
                ),
            ),
            hint="YYYY-MM-DD",
        ),
        FieldSpec(
            id="startTime",
            order=2,
            label="Start Time",
            field_type=FieldType.TIME,
            depends_on="harvestDate",
            required_message="Please select the start time!",
            allow_paste=False,
            hint="HH:MM",
        ),
        FieldSpec(
            id="endTime",
            order=3,
            label="End Time",
            field_type=FieldType.TIME,
            depends_on="startTime",
            required_message="Please select the end time!",
            rules=(
                CrossFieldRule("startTime", Relation.AFTER, "End time must be after the start time!"),
            ),
            allow_paste=False,
            hint="HH:MM",
        ),
        FieldSpec(
            id="fieldNumber",
            order=4,
            label="Field Number",
            field_type=FieldType.SELECT,
            depends_on="endTime",
            options=_options(FieldNumber),
            required_message="Please select a field number!",
            rules=(ChoiceRule("Please select a field number!"),),
        ),
        FieldSpec(
            id="numberOfWorkers",
            order=5,
            label="Number of Workers",
            field_type=FieldType.INTEGER,
            depends_on="fieldNumber",
            required_message="Number of workers is required!",
            rules=(
                RangeRule(
                    1, 40,
                    "Number of workers must be between 1 and 40!",
                    numeric_message="Number of workers must be numeric",
                ),
            ),
            numeric_only=True,
            allow_paste=False,
        ),
    ),
)


# ============================================================================
# Mantenimiento (enfermedades del cultivo)
# ============================================================================

MAINTENANCE = FormDefinition(
    kind="maintenance",
    title="New Maintenance Record",
    collection="maintenance",
    return_route="/Maintenance",
    payload_model=MaintenanceRecord,
    messages=SubmissionMessages(
        confirm_text="Are you sure you want to submit this maintenance record?",
        success_text="Maintenance record added successfully!",
        failure_text="There was an error creating the maintenance record.",
    ),
    fields=(
        FieldSpec(
            id="dateOfMaintenance",
            order=0,
            label="Date of Maintenance",
            field_type=FieldType.DATE,
            required_message="Please select a date of maintenance.",
            rules=(
                DateWindowRule(
                    "Please select a date that is not in the future.",
                    latest=today,
                ),
            ),
            hint="YYYY-MM-DD",
        ),
        FieldSpec(
            id="task",
            order=1,
            label="Task",
            depends_on="dateOfMaintenance",
            rules=(PatternRule(ALPHABETIC, "Only alphabetic characters are allowed."),),
        ),
        FieldSpec(
            id="managerInCharge",
            order=2,
            label="Manager in Charge",
            depends_on="task",
            rules=(PatternRule(ALPHABETIC, "Only alphabetic characters are allowed."),),
        ),
        FieldSpec(
            id="progress",
            order=3,
            label="Progress",
            depends_on="managerInCharge",
            rules=(
                RangeRule(
                    0, 100,
                    "Progress must be between 0% and 100%.",
                    numeric_message="Only numeric characters are allowed.",
                    suffix="%",
                ),
            ),
            hint="ej: 40%",
        ),
    ),
)


# ============================================================================
# Edición de rendimiento
# ============================================================================

YIELD_RECORD = FormDefinition(
    kind="yield_record",
    title="Edit Yield Record",
    collection="yield",
    return_route="/harvest/yield",
    payload_model=YieldRecord,
    messages=SubmissionMessages(
        confirm_title="Are you sure?",
        confirm_text="Do you want to update the yield record?",
        success_text="Yield Record updated successfully!",
        failure_text="Failed to update yield record.",
    ),
    fields=(
        FieldSpec(
            id="cropType",
            order=0,
            label="Crop Type",
            field_type=FieldType.SELECT,
            options=(CropType.COCONUT.value,),
            required_message="Please select a crop type!",
            rules=(ChoiceRule("Please select a crop type!"),),
        ),
        FieldSpec(
            id="harvestdate",
            order=1,
            label="Harvest Date",
            field_type=FieldType.DATE,
            depends_on="cropType",
            required_message="Please select the harvest date!",
            rules=(
                DateWindowRule(
                    "Harvest date must be within the past 7 days!",
                    earliest=days_ago(7),
                    latest=today,
                ),
            ),
            hint="YYYY-MM-DD",
        ),
        FieldSpec(
            id="fieldNumber",
            order=2,
            label="Field Number",
            field_type=FieldType.SELECT,
            depends_on="harvestdate",
            options=_options(FieldNumber),
            required_message="Please select a field number!",
            rules=(ChoiceRule("Please select a field number!"),),
        ),
        FieldSpec(
            id="quantity",
            order=3,
            label="Quantity",
            field_type=FieldType.INTEGER,
            depends_on="fieldNumber",
            required_message="Quantity is required!",
            rules=(RangeRule(1, None, "Quantity must be at least 1!"),),
            numeric_only=True,
            allow_paste=False,
        ),
        FieldSpec(
            id="unit",
            order=4,
            label="Unit",
            field_type=FieldType.SELECT,
            depends_on="quantity",
            options=_options(YieldUnit),
            required_message="Please select a unit!",
            rules=(ChoiceRule("Please select a unit!"),),
        ),
        FieldSpec(
            id="treesPicked",
            order=5,
            label="Trees Picked",
            field_type=FieldType.INTEGER,
            depends_on="unit",
            required_message="Please enter the number of trees picked!",
            rules=(
                RangeRule(
                    1, 1_000_000,
                    "Trees Picked must be between 1 and 1,000,000!",
                    numeric_message="Number of trees picked must be numeric",
                ),
            ),
            numeric_only=True,
            allow_paste=False,
        ),
        FieldSpec(
            id="storageLocation",
            order=6,
            label="Storage Location",
            field_type=FieldType.SELECT,
            depends_on="treesPicked",
            options=_options(StorageLocation),
            required_message="Please enter the storage location!",
            rules=(ChoiceRule("Please select a storage location!"),),
        ),
    ),
)


def build_registry() -> FormRegistry:
    """Registro con los formularios de la finca."""
    return FormRegistry([HARVEST_SCHEDULE, MAINTENANCE, YIELD_RECORD])


registry = build_registry()
