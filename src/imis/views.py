"""
Views for read operations - separate from the command/write path.

Every view serializes inside the unit of work so that lazy relationships are
loaded while the session is still open.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from imis.adapters.json_graph import GraphEncoder, NodeSpec
from imis.domain import model
from imis.service_layer.selection import SelectionPolicy
from imis.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

PATIENT_FIELDS = (
    "id",
    "last_name",
    "first_name",
    "gender",
    "date_of_birth",
    "email",
    "phone_number",
    "street",
    "house_number",
    "zip",
    "city",
    "insurance_company",
    "insurance_membership_number",
    "confirmed",
    "flu_immunization",
    "speed_of_symptoms_outbreak",
    "symptoms",
    "corona_contacts",
    "risk_areas",
    "weakened_immune_system",
    "pre_illnesses",
    "risk_occupation",
    "comment",
    "occupation",
    "events",
)

encoder = GraphEncoder({
    model.Patient: NodeSpec(PATIENT_FIELDS),
    model.PatientEvent: NodeSpec(("id", "event_type", "event_timestamp", "comment", "patient")),
    model.QuarantineIncident: NodeSpec(("id", "patient", "event_date", "until", "comment")),
})


def get_patient(patient_id: str, uow: AbstractUnitOfWork) -> Optional[Dict[str, Any]]:
    with uow:
        patient = uow.patients.get(patient_id)
        if patient is None:
            return None
        return encoder.encode(patient)


def list_patients(uow: AbstractUnitOfWork) -> List[Dict[str, Any]]:
    with uow:
        return encoder.encode_many(uow.patients.list())


def get_incident(incident_id: str, uow: AbstractUnitOfWork) -> Optional[Dict[str, Any]]:
    with uow:
        incident = uow.incidents.get(incident_id)
        if incident is None:
            return None
        return encoder.encode(incident)


def selected_for_quarantine(
    uow: AbstractUnitOfWork,
    policy: SelectionPolicy,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """
    Incidents accepted by the selection policy, in repository order.

    A patient shared by several incidents is emitted in full once and
    referenced by id afterwards.
    """
    today = today or date.today()
    with uow:
        selected = [incident for incident in uow.incidents.list() if policy(incident, today)]
        logger.info(f"{len(selected)} incidents selected for quarantine on {today.isoformat()}")
        return encoder.encode_many(selected)
