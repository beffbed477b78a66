# pylint: disable=attribute-defined-outside-init
from __future__ import annotations
import abc
import logging
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session


from imis import config
from imis.adapters import repository
from imis.domain.errors import Conflict

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(abc.ABC):
    patients: repository.AbstractPatientRepository
    incidents: repository.AbstractIncidentRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        self.rollback()

    def commit(self):
        self._commit()

    def collect_new_events(self):
        for entity in [*self.patients.seen, *self.incidents.seen]:
            while entity.domain_events:
                yield entity.domain_events.pop(0)

    @abc.abstractmethod
    def _commit(self):
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self):
        raise NotImplementedError


DEFAULT_SESSION_FACTORY = sessionmaker(
    bind=create_engine(
        config.get_postgres_uri(),
        isolation_level="REPEATABLE READ",
    )
)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory=DEFAULT_SESSION_FACTORY):
        self.session_factory = session_factory

    def __enter__(self):
        self.session = self.session_factory()  # type: Session
        self.patients = repository.SqlAlchemyPatientRepository(self.session)
        self.incidents = repository.SqlAlchemyIncidentRepository(self.session)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.session.close()

    def _commit(self):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.error(f"Integrity error on commit: {e.orig}")
            raise Conflict("A record with the same identity already exists") from e

    def rollback(self):
        self.session.rollback()
