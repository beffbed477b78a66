import abc
from typing import Set, List, Optional
from imis.domain import model

import logging

logger = logging.getLogger(__name__)


class AbstractPatientRepository(abc.ABC):
    def __init__(self):
        self.seen = set()  # type: Set[model.Patient]

    def add(self, patient: model.Patient) -> str:
        self._add(patient)
        self.seen.add(patient)
        return patient.id

    def get(self, patient_id) -> Optional[model.Patient]:
        patient = self._get(patient_id)
        if patient:
            self.seen.add(patient)
        return patient

    def list(self) -> List[model.Patient]:
        patients = self._list()
        for patient in patients:
            self.seen.add(patient)
        return patients

    @abc.abstractmethod
    def _add(self, patient: model.Patient):
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, patient_id) -> Optional[model.Patient]:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self) -> List[model.Patient]:
        raise NotImplementedError


class AbstractIncidentRepository(abc.ABC):
    def __init__(self):
        self.seen = set()  # type: Set[model.QuarantineIncident]

    def add(self, incident: model.QuarantineIncident) -> str:
        self._add(incident)
        self.seen.add(incident)
        return incident.id

    def get(self, incident_id) -> Optional[model.QuarantineIncident]:
        incident = self._get(incident_id)
        if incident:
            self.seen.add(incident)
        return incident

    def list(self) -> List[model.QuarantineIncident]:
        incidents = self._list()
        for incident in incidents:
            self.seen.add(incident)
        return incidents

    def count(self) -> int:
        return self._count()

    @abc.abstractmethod
    def _add(self, incident: model.QuarantineIncident):
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, incident_id) -> Optional[model.QuarantineIncident]:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self) -> List[model.QuarantineIncident]:
        raise NotImplementedError

    @abc.abstractmethod
    def _count(self) -> int:
        raise NotImplementedError


class SqlAlchemyPatientRepository(AbstractPatientRepository):
    def __init__(self, session):
        super().__init__()
        self.session = session

    def _add(self, patient):
        self.session.add(patient)

    def _get(self, patient_id):
        return self.session.query(model.Patient).filter_by(id=patient_id).first()

    def _list(self) -> List[model.Patient]:
        return self.session.query(model.Patient)\
            .order_by(model.Patient.last_name, model.Patient.first_name, model.Patient.id)\
            .all()


class SqlAlchemyIncidentRepository(AbstractIncidentRepository):
    def __init__(self, session):
        super().__init__()
        self.session = session

    def _add(self, incident):
        self.session.add(incident)

    def _get(self, incident_id):
        return self.session.query(model.QuarantineIncident).filter_by(id=incident_id).first()

    def _list(self) -> List[model.QuarantineIncident]:
        """All incidents, ordered by event date (undated last), then id."""
        return self.session.query(model.QuarantineIncident)\
            .order_by(
                model.QuarantineIncident.event_date.is_(None),
                model.QuarantineIncident.event_date,
                model.QuarantineIncident.id,
            )\
            .all()

    def _count(self) -> int:
        return self.session.query(model.QuarantineIncident).count()
