import logging
from sqlalchemy import (
    Table,
    Column,
    Integer,
    String,
    Text,
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    event,
)
from sqlalchemy.orm import registry, relationship
from imis.adapters.string_list import StringList
from imis.domain import model

logger = logging.getLogger(__name__)

# SQLAlchemy 2.0 pattern: use registry
mapper_registry = registry()
metadata = mapper_registry.metadata

patients = Table(
    "patients",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("last_name", String(255), nullable=False),
    Column("first_name", String(255), nullable=False),
    Column("gender", String(255)),
    Column("date_of_birth", Date),
    Column("email", String(255)),
    Column("phone_number", String(255)),
    Column("street", String(255)),
    Column("house_number", String(255)),
    Column("zip", Integer),
    Column("city", String(255)),
    Column("insurance_company", String(255)),
    Column("insurance_membership_number", String(255)),
    Column("confirmed", Boolean, nullable=False, default=False),
    Column("flu_immunization", Boolean),
    Column("speed_of_symptoms_outbreak", String(255)),
    Column("symptoms", StringList),
    Column("corona_contacts", Boolean),
    Column("risk_areas", StringList),
    Column("weakened_immune_system", Boolean),
    Column("pre_illnesses", StringList),
    Column("risk_occupation", Enum(model.RiskOccupation, native_enum=False, length=64)),
    Column("comment", Text),
    Column("occupation", String(255)),
)

patient_events = Table(
    "patient_events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("patient_id", String(255), ForeignKey("patients.id"), nullable=False),
    Column("event_type", Enum(model.PatientStatus, native_enum=False, length=64), nullable=False),
    Column("event_timestamp", DateTime(timezone=True), nullable=False),
    Column("comment", Text),
)

quarantine_incidents = Table(
    "quarantine_incidents",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("patient_id", String(255), ForeignKey("patients.id"), nullable=False),
    Column("event_date", Date),
    Column("until", Date),
    Column("comment", Text),
)


def start_mappers():
    logger.info("Starting mappers")
    mapper_registry.map_imperatively(
        model.Patient,
        patients,
        properties={
            "events": relationship(
                model.PatientEvent,
                back_populates="patient",
                order_by=patient_events.c.id,
            ),
        },
    )
    mapper_registry.map_imperatively(
        model.PatientEvent,
        patient_events,
        properties={
            "patient": relationship(model.Patient, back_populates="events"),
        },
    )
    mapper_registry.map_imperatively(
        model.QuarantineIncident,
        quarantine_incidents,
        properties={
            "patient": relationship(model.Patient),
        },
    )
    event.listen(model.Patient, "load", receive_load)
    event.listen(model.QuarantineIncident, "load", receive_load)


def receive_load(entity, _):
    entity.domain_events = []
