"""Domain events for the patient and quarantine incident service."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from imis.domain.commands import Event


@dataclass
class PatientCreated(Event):
    """Event raised when a patient has been registered."""
    patient_id: str
    created_at: datetime


@dataclass
class QuarantineIncidentSaved(Event):
    """Event raised when a quarantine incident has been created or updated."""
    incident_id: str
    patient_id: str
    created: bool
    until: Optional[date] = None
