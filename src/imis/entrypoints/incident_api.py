"""Quarantine incident endpoints - thin API with command dispatch."""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from imis import views
from imis.domain.commands import SaveQuarantineIncident
from imis.domain.errors import ImisError, Internal
from imis.entrypoints.dependencies import get_selection_policy, get_unit_of_work
from imis.entrypoints.schemas import QuarantineIncidentDTO
from imis.service_layer import messagebus
from imis.service_layer.selection import SelectionPolicy
from imis.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/selected-for-quarantine", summary="Incidents selected for quarantine")
def get_selected_for_quarantine(
    uow: AbstractUnitOfWork = Depends(get_unit_of_work),
    policy: SelectionPolicy = Depends(get_selection_policy),
) -> List[Dict[str, Any]]:
    """Every incident accepted by the configured selection policy, unpaginated."""
    try:
        return views.selected_for_quarantine(uow, policy)
    except Exception as e:
        logger.error(f"Error listing incidents selected for quarantine: {e}")
        raise Internal("Internal server error")


@router.post("/quarantine", summary="Create or update a quarantine incident")
def add_or_update_quarantine_incident(
    dto: QuarantineIncidentDTO,
    uow: AbstractUnitOfWork = Depends(get_unit_of_work),
) -> Dict[str, Any]:
    """
    Upsert by incident id. An incident without id, or with an id not yet
    stored, is created; otherwise the stored incident is replaced.
    """
    try:
        cmd = SaveQuarantineIncident(
            patient_id=dto.patient_id,
            incident_id=dto.id,
            event_date=dto.event_date,
            until=dto.until,
            comment=dto.comment,
        )
        results = messagebus.handle(cmd, uow)
        incident_id = results[0]

        incident = views.get_incident(incident_id, uow)
        if incident is None:
            raise Internal(f"Incident {incident_id} could not be read back after saving")
        return incident

    except ImisError:
        raise
    except Exception as e:
        logger.error(f"Error saving quarantine incident: {e}")
        raise Internal("Internal server error")
