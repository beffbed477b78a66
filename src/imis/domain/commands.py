"""Commands for the patient and quarantine incident service."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from imis.domain.model import RiskOccupation


@dataclass
class Command:
    """Base class for all commands."""
    pass


@dataclass
class Event:
    """Base class for all domain events."""
    pass


@dataclass
class CreatePatient(Command):
    """Command to register a new patient."""
    last_name: str
    first_name: str
    id: Optional[str] = None  # generated when not supplied
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    zip: Optional[int] = None
    city: Optional[str] = None
    insurance_company: Optional[str] = None
    insurance_membership_number: Optional[str] = None
    confirmed: bool = False
    flu_immunization: Optional[bool] = None
    speed_of_symptoms_outbreak: Optional[str] = None
    symptoms: List[str] = field(default_factory=list)
    corona_contacts: Optional[bool] = None
    risk_areas: List[str] = field(default_factory=list)
    weakened_immune_system: Optional[bool] = None
    pre_illnesses: List[str] = field(default_factory=list)
    risk_occupation: Optional["RiskOccupation"] = None
    comment: Optional[str] = None
    occupation: Optional[str] = None


@dataclass
class SaveQuarantineIncident(Command):
    """Command to create a quarantine incident, or update it when the id is already stored."""
    patient_id: str
    incident_id: Optional[str] = None
    event_date: Optional[date] = None
    until: Optional[date] = None
    comment: Optional[str] = None
