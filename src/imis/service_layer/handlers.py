import logging
from dataclasses import asdict
from uuid import uuid4

from imis.domain import model
from imis.domain.commands import CreatePatient, SaveQuarantineIncident
from imis.domain.errors import Conflict, ValidationFailed
from imis.domain.events import PatientCreated, QuarantineIncidentSaved
from imis.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


def create_patient(
    command: CreatePatient,
    uow: AbstractUnitOfWork
) -> str:
    """
    Register a new patient.

    Flow:
    1. Take the supplied id or generate a UUID4
    2. Refuse ids that are already taken
    3. Build the Patient and mark it registered (generates PatientCreated)
    4. Store and commit

    Returns:
        patient_id: The id of the created patient

    Raises:
        Conflict: If a patient with the supplied id already exists
    """
    patient_id = command.id or str(uuid4())
    logger.info(f"Processing CreatePatient command for patient {patient_id}")

    with uow:
        if uow.patients.get(patient_id) is not None:
            raise Conflict(
                f"Patient {patient_id} already exists",
                details=[{"loc": ["id"], "message": "already taken"}],
            )

        fields = asdict(command)
        fields["id"] = patient_id
        patient = model.Patient(**fields)
        patient.register()

        uow.patients.add(patient)
        uow.commit()
        logger.info(f"Committed patient {patient_id} to database")

    return patient_id


def record_registration(event: PatientCreated, uow: AbstractUnitOfWork):
    """Add the REGISTERED status entry to the patient's event history."""
    logger.info(f"Recording registration of patient {event.patient_id}")

    with uow:
        patient = uow.patients.get(event.patient_id)
        if patient is None:
            raise ValueError(f"Patient {event.patient_id} vanished before its registration was recorded")
        patient.record_event(model.PatientStatus.REGISTERED, timestamp=event.created_at)
        uow.commit()


def save_quarantine_incident(
    command: SaveQuarantineIncident,
    uow: AbstractUnitOfWork
) -> str:
    """
    Create the incident, or update it in place when its id is already stored.

    Returns:
        incident_id: The id of the saved incident (generated on first save
        when the command carries none)

    Raises:
        ValidationFailed: If the patient is unknown or the dates are inconsistent
    """
    incident_id = command.incident_id or str(uuid4())
    logger.info(f"Processing SaveQuarantineIncident command for incident {incident_id}")

    with uow:
        patient = uow.patients.get(command.patient_id)
        if patient is None:
            raise ValidationFailed(
                f"Patient {command.patient_id} does not exist",
                details=[{"loc": ["patient"], "message": "unknown patient"}],
            )

        incident = uow.incidents.get(incident_id)
        if incident is None:
            incident = model.QuarantineIncident(
                id=incident_id,
                patient=patient,
                event_date=command.event_date,
                until=command.until,
                comment=command.comment,
            )
            incident.open()
            uow.incidents.add(incident)
            logger.info(f"Created quarantine incident {incident_id} for patient {patient.id}")
        else:
            incident.revise(
                patient=patient,
                event_date=command.event_date,
                until=command.until,
                comment=command.comment,
            )
            logger.info(f"Updated quarantine incident {incident_id}")

        uow.commit()

    return incident_id


def publish_patient_created_event(event: PatientCreated, uow: AbstractUnitOfWork):
    """Publish PatientCreated to external consumers; failures are logged only."""
    logger.info(f"Publishing PatientCreated event for patient {event.patient_id}")
    try:
        from imis.adapters import redis_eventpublisher

        redis_eventpublisher.publish("imis:patients", event)
    except Exception as e:
        logger.error(f"Failed to publish PatientCreated event for {event.patient_id}: {e}")


def publish_incident_saved_event(event: QuarantineIncidentSaved, uow: AbstractUnitOfWork):
    """Publish QuarantineIncidentSaved to external consumers; failures are logged only."""
    logger.info(f"Publishing QuarantineIncidentSaved event for incident {event.incident_id}")
    try:
        from imis.adapters import redis_eventpublisher

        redis_eventpublisher.publish("imis:incidents", event)
    except Exception as e:
        logger.error(f"Failed to publish QuarantineIncidentSaved event for {event.incident_id}: {e}")
