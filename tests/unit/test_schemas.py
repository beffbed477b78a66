"""Unit tests for request models."""
import pytest
from datetime import date
from pydantic import ValidationError

from imis.domain.model import RiskOccupation
from imis.entrypoints.schemas import CreatePatientDTO, QuarantineIncidentDTO


def test_create_patient_accepts_camel_case():
    dto = CreatePatientDTO.model_validate({
        "firstName": "Ana",
        "lastName": "Lee",
        "dateOfBirth": "1990-01-01",
        "riskOccupation": "NURSE",
        "preIllnesses": ["ASTHMA"],
    })

    assert dto.first_name == "Ana"
    assert dto.date_of_birth == date(1990, 1, 1)
    assert dto.risk_occupation == RiskOccupation.NURSE
    assert dto.pre_illnesses == ["ASTHMA"]
    assert dto.symptoms == []
    assert dto.id is None


def test_null_lists_become_empty():
    dto = CreatePatientDTO.model_validate({"firstName": "Ana", "lastName": "Lee", "symptoms": None})

    assert dto.symptoms == []


@pytest.mark.parametrize("payload", [
    {"firstName": "Ana"},
    {"firstName": "Ana", "lastName": ""},
    {"firstName": "Ana", "lastName": "Lee", "symptoms": ["fever;cough"]},
    {"firstName": "Ana", "lastName": "Lee", "riskOccupation": "ASTRONAUT"},
    {"firstName": "Ana", "lastName": "Lee", "email": "not-an-address"},
    {"firstName": "Ana", "lastName": "Lee", "dateOfBirth": "01.01.1990"},
])
def test_invalid_patient_payloads(payload):
    with pytest.raises(ValidationError):
        CreatePatientDTO.model_validate(payload)


def test_incident_patient_given_by_id():
    dto = QuarantineIncidentDTO.model_validate({"patient": "p-1", "until": "2020-04-04"})

    assert dto.patient_id == "p-1"
    assert dto.until == date(2020, 4, 4)


def test_incident_patient_given_as_object():
    dto = QuarantineIncidentDTO.model_validate({
        "id": "i-1",
        "patient": {"id": "p-1", "firstName": "Ana", "events": []},
    })

    assert dto.id == "i-1"
    assert dto.patient_id == "p-1"


def test_incident_requires_patient():
    with pytest.raises(ValidationError):
        QuarantineIncidentDTO.model_validate({"until": "2020-04-04"})


def test_email_is_kept_as_submitted():
    dto = CreatePatientDTO.model_validate({"firstName": "Ana", "lastName": "Lee", "email": "Ana.Lee@Example.ORG"})

    assert dto.email == "Ana.Lee@Example.ORG"
