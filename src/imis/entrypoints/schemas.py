"""Request models for the HTTP API (camelCase on the wire)."""

from datetime import date
from typing import Annotated, List, Optional, Union

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from imis.adapters.string_list import DELIMITER
from imis.domain.model import RiskOccupation


def _checked_email(value: str) -> str:
    """Reject malformed addresses but keep the address exactly as submitted."""
    validate_email(value, check_deliverability=False)
    return value


Email = Annotated[str, AfterValidator(_checked_email)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatePatientDTO(CamelModel):
    id: Optional[str] = Field(default=None, min_length=1)
    last_name: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None

    email: Optional[Email] = None
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
    symptoms: List[str] = Field(default_factory=list)
    corona_contacts: Optional[bool] = None
    risk_areas: List[str] = Field(default_factory=list)
    weakened_immune_system: Optional[bool] = None
    pre_illnesses: List[str] = Field(default_factory=list)
    risk_occupation: Optional[RiskOccupation] = None

    comment: Optional[str] = None
    occupation: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "Ana",
                "lastName": "Lee",
                "gender": "f",
                "dateOfBirth": "1990-01-01",
                "city": "Berlin",
                "symptoms": ["COUGH", "FEVER"],
                "riskOccupation": "NO_RISK_OCCUPATION",
            }
        },
    )

    @field_validator("symptoms", "risk_areas", "pre_illnesses", mode="before")
    @classmethod
    def missing_list_is_empty(cls, value):
        return [] if value is None else value

    @field_validator("symptoms", "risk_areas", "pre_illnesses")
    @classmethod
    def no_delimiter_in_elements(cls, values: List[str]) -> List[str]:
        for value in values:
            if DELIMITER in value:
                raise ValueError(f"entries must not contain {DELIMITER!r}")
        return values


class PatientReference(CamelModel):
    """A patient given by identity; any further patient fields are ignored."""
    id: str


class QuarantineIncidentDTO(CamelModel):
    id: Optional[str] = Field(default=None, min_length=1)
    patient: Union[str, PatientReference]
    event_date: Optional[date] = None
    until: Optional[date] = None
    comment: Optional[str] = None

    @property
    def patient_id(self) -> str:
        if isinstance(self.patient, PatientReference):
            return self.patient.id
        return self.patient
