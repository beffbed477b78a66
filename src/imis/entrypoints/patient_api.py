"""
Patient endpoints - thin API with command dispatch.
Writes go through the message bus, reads through views.
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from imis import views
from imis.domain.commands import CreatePatient
from imis.domain.errors import ImisError, Internal, NotFound
from imis.entrypoints.dependencies import get_unit_of_work
from imis.entrypoints.schemas import CreatePatientDTO
from imis.service_layer import messagebus
from imis.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", summary="Register a patient")
def add_patient(dto: CreatePatientDTO, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Dict[str, Any]:
    """
    Register a new patient.

    The id is generated unless supplied. Returns the stored patient,
    including its REGISTERED event.
    """
    try:
        cmd = CreatePatient(**dto.model_dump())
        results = messagebus.handle(cmd, uow)
        patient_id = results[0]

        patient = views.get_patient(patient_id, uow)
        if patient is None:
            raise Internal(f"Patient {patient_id} could not be read back after creation")
        return patient

    except ImisError:
        raise
    except Exception as e:
        logger.error(f"Error creating patient: {e}")
        raise Internal("Internal server error")


@router.get("", summary="List all patients")
def get_patients(uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> List[Dict[str, Any]]:
    try:
        return views.list_patients(uow)
    except Exception as e:
        logger.error(f"Error listing patients: {e}")
        raise Internal("Internal server error")


@router.get("/{patient_id}", summary="Get patient by id")
def get_patient_for_id(patient_id: str, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Dict[str, Any]:
    """Exact id match; unknown ids answer 404 with an empty body."""
    try:
        patient = views.get_patient(patient_id, uow)
    except Exception as e:
        logger.error(f"Error retrieving patient {patient_id}: {e}")
        raise Internal("Internal server error")

    if patient is None:
        raise NotFound(f"Patient {patient_id} not found")
    return patient
