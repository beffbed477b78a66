from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from imis.domain.errors import ValidationFailed
from imis.domain.events import PatientCreated, QuarantineIncidentSaved


class RiskOccupation(str, Enum):
    NO_RISK_OCCUPATION = "NO_RISK_OCCUPATION"
    FIRE_FIGHTER_POLICE = "FIRE_FIGHTER_POLICE"
    TEACHER = "TEACHER"
    CARETAKER = "CARETAKER"
    DOCTOR = "DOCTOR"
    NURSE = "NURSE"


class PatientStatus(str, Enum):
    REGISTERED = "REGISTERED"
    SUSPECTED = "SUSPECTED"
    SCHEDULED_FOR_TESTING = "SCHEDULED_FOR_TESTING"
    TEST_SUBMITTED_IN_PROGRESS = "TEST_SUBMITTED_IN_PROGRESS"
    TEST_FINISHED_POSITIVE = "TEST_FINISHED_POSITIVE"
    TEST_FINISHED_NEGATIVE = "TEST_FINISHED_NEGATIVE"
    TEST_FINISHED_INVALID = "TEST_FINISHED_INVALID"
    TEST_FINISHED_RECOVERED = "TEST_FINISHED_RECOVERED"
    TEST_FINISHED_NOT_RECOVERED = "TEST_FINISHED_NOT_RECOVERED"
    PATIENT_DEAD = "PATIENT_DEAD"
    DOCTORS_VISIT = "DOCTORS_VISIT"


@dataclass(eq=False)
class PatientEvent:
    event_type: PatientStatus
    event_timestamp: datetime
    comment: Optional[str] = None
    patient: Optional["Patient"] = None
    id: Optional[int] = None  # assigned by the store


@dataclass(eq=False)
class Patient:
    id: str                   # UUID4 unless supplied by the caller
    last_name: str
    first_name: str
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
    risk_occupation: Optional[RiskOccupation] = None

    comment: Optional[str] = None
    occupation: Optional[str] = None

    events: List[PatientEvent] = field(default_factory=list)
    domain_events: List = field(default_factory=list, repr=False)

    def __eq__(self, other):
        if not isinstance(other, Patient):
            return False
        return other.id == self.id

    def __hash__(self):
        return hash(self.id)

    def register(self) -> None:
        """
        Mark the patient as newly registered and generate the domain event.

        The REGISTERED status entry itself is written by the PatientCreated
        handler, once the patient row exists.
        """
        self.domain_events.append(
            PatientCreated(patient_id=self.id, created_at=datetime.now(timezone.utc))
        )

    def record_event(
        self,
        event_type: PatientStatus,
        timestamp: Optional[datetime] = None,
        comment: Optional[str] = None,
    ) -> PatientEvent:
        event = PatientEvent(
            event_type=event_type,
            event_timestamp=timestamp or datetime.now(timezone.utc),
            comment=comment,
        )
        self.events.append(event)
        # the ORM back-reference sets this already once mapped
        if event.patient is None:
            event.patient = self
        return event


@dataclass(eq=False)
class QuarantineIncident:
    id: str
    patient: Patient
    event_date: Optional[date] = None  # day the quarantine was ordered
    until: Optional[date] = None       # last day of quarantine
    comment: Optional[str] = None
    domain_events: List = field(default_factory=list, repr=False)

    def __eq__(self, other):
        if not isinstance(other, QuarantineIncident):
            return False
        return other.id == self.id

    def __hash__(self):
        return hash(self.id)

    def open(self) -> None:
        """Validate a freshly created incident and announce it."""
        self._check_dates()
        self._announce(created=True)

    def revise(
        self,
        patient: Patient,
        event_date: Optional[date],
        until: Optional[date],
        comment: Optional[str],
    ) -> None:
        """Replace the incident's state with a full new representation."""
        self.patient = patient
        self.event_date = event_date
        self.until = until
        self.comment = comment
        self._check_dates()
        self._announce(created=False)

    def has_ended_before(self, day: date) -> bool:
        return self.until is not None and self.until < day

    def _check_dates(self):
        if self.event_date and self.until and self.until < self.event_date:
            raise ValidationFailed(
                f"Quarantine of incident {self.id} ends before it starts",
                details=[{"loc": ["until"], "message": "must not be before eventDate"}],
            )

    def _announce(self, created: bool):
        self.domain_events.append(
            QuarantineIncidentSaved(
                incident_id=self.id,
                patient_id=self.patient.id,
                created=created,
                until=self.until,
            )
        )
