"""Rules deciding which quarantine incidents are selected for quarantine."""

import logging
from datetime import date
from typing import Callable, Dict

from imis.domain.model import QuarantineIncident

logger = logging.getLogger(__name__)

SelectionPolicy = Callable[[QuarantineIncident, date], bool]


def quarantine_not_ended(incident: QuarantineIncident, today: date) -> bool:
    """Selected while no end date is set or the end date is today or later."""
    return not incident.has_ended_before(today)


def all_incidents(incident: QuarantineIncident, today: date) -> bool:
    return True


POLICIES = {
    "active": quarantine_not_ended,
    "all": all_incidents,
}  # type: Dict[str, SelectionPolicy]


def get_policy(name: str) -> SelectionPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown quarantine selection policy {name!r}; expected one of {sorted(POLICIES)}")
