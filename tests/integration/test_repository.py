"""Integration tests for SQLAlchemy repositories against SQLite."""
from datetime import date, datetime, timezone
from sqlalchemy import text

from imis.adapters.repository import SqlAlchemyIncidentRepository, SqlAlchemyPatientRepository
from imis.domain.model import Patient, PatientStatus, QuarantineIncident, RiskOccupation


def test_patient_round_trip_with_list_columns(session):
    repo = SqlAlchemyPatientRepository(session)
    repo.add(Patient(
        id="p-1",
        last_name="Lee",
        first_name="Ana",
        date_of_birth=date(1990, 1, 1),
        zip=10115,
        symptoms=["COUGH", "FEVER"],
        risk_areas=[],
        pre_illnesses=["ASTHMA"],
        risk_occupation=RiskOccupation.DOCTOR,
    ))
    session.commit()
    session.expunge_all()

    patient = SqlAlchemyPatientRepository(session).get("p-1")

    assert patient.symptoms == ["COUGH", "FEVER"]
    assert patient.risk_areas == []
    assert patient.pre_illnesses == ["ASTHMA"]
    assert patient.risk_occupation == RiskOccupation.DOCTOR
    assert patient.date_of_birth == date(1990, 1, 1)
    assert patient.domain_events == []


def test_list_columns_are_stored_as_delimited_text(session):
    SqlAlchemyPatientRepository(session).add(
        Patient(id="p-1", last_name="Lee", first_name="Ana", symptoms=["COUGH", "FEVER"])
    )
    session.commit()

    row = session.execute(text("SELECT symptoms, risk_areas FROM patients WHERE id = 'p-1'")).one()

    assert row == ("COUGH;FEVER", None)


def test_patient_events_are_persisted_with_back_reference(session):
    patient = Patient(id="p-1", last_name="Lee", first_name="Ana")
    patient.record_event(PatientStatus.REGISTERED, timestamp=datetime(2020, 3, 21, tzinfo=timezone.utc))
    SqlAlchemyPatientRepository(session).add(patient)
    session.commit()
    session.expunge_all()

    loaded = SqlAlchemyPatientRepository(session).get("p-1")

    assert len(loaded.events) == 1
    assert loaded.events[0].id is not None
    assert loaded.events[0].event_type == PatientStatus.REGISTERED
    assert loaded.events[0].patient is loaded


def test_get_unknown_patient_returns_none(session):
    assert SqlAlchemyPatientRepository(session).get("does-not-exist") is None


def test_patients_are_listed_by_name(session):
    repo = SqlAlchemyPatientRepository(session)
    repo.add(Patient(id="p-1", last_name="Meyer", first_name="Jo"))
    repo.add(Patient(id="p-2", last_name="Lee", first_name="Ben"))
    repo.add(Patient(id="p-3", last_name="Lee", first_name="Ana"))
    session.commit()

    assert [p.id for p in repo.list()] == ["p-3", "p-2", "p-1"]


def test_incidents_are_listed_by_event_date_undated_last(session):
    patient = Patient(id="p-1", last_name="Lee", first_name="Ana")
    repo = SqlAlchemyIncidentRepository(session)
    repo.add(QuarantineIncident(id="c", patient=patient))
    repo.add(QuarantineIncident(id="b", patient=patient, event_date=date(2020, 3, 22)))
    repo.add(QuarantineIncident(id="a", patient=patient, event_date=date(2020, 3, 22)))
    repo.add(QuarantineIncident(id="d", patient=patient, event_date=date(2020, 3, 20)))
    session.commit()

    assert [i.id for i in repo.list()] == ["d", "a", "b", "c"]
    assert repo.count() == 4
