import logging

from imis import config
from imis.domain.errors import Internal
from imis.service_layer import selection
from imis.service_layer.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)


def get_unit_of_work() -> AbstractUnitOfWork:
    return SqlAlchemyUnitOfWork()


def get_selection_policy() -> selection.SelectionPolicy:
    try:
        return selection.get_policy(config.get_quarantine_policy_name())
    except ValueError as e:
        logger.error(f"Quarantine selection is misconfigured: {e}")
        raise Internal("Internal server error") from e
