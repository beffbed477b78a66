"""
IMIS API Entrypoint - patient registration and quarantine incidents.
"""
import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy import create_engine

from imis import config
from imis.adapters import orm
from imis.domain.errors import ImisError, NotFound, ValidationFailed
from imis.entrypoints import incident_api, patient_api

logging.basicConfig(
    level=getattr(logging, config.get_log_level()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="IMIS Patient API",
    description="Patient registration and quarantine incident tracking",
    version="1.0.0"
)


# Initialize database and ORM mappers
@app.on_event("startup")
async def startup_event():
    engine = create_engine(config.get_postgres_uri())
    orm.metadata.create_all(engine)
    orm.start_mappers()
    logger.info("✓ IMIS database initialized")


# ---------- Error mapping ----------

@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return Response(status_code=exc.status_code)


@app.exception_handler(ImisError)
async def imis_error_handler(request: Request, exc: ImisError):
    logger.warning(f"{request.method} {request.url.path} failed with {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationFailed(
        "Request validation failed",
        details=[
            {"loc": [str(part) for part in e["loc"]], "message": e["msg"]}
            for e in exc.errors()
        ],
    )
    return await imis_error_handler(request, error)


# ---------- Endpoints ----------

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "imis-api",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


app.include_router(patient_api.router, prefix="/patients", tags=["Patients"])
app.include_router(incident_api.router, prefix="/api/incidents", tags=["Incidents"])


def main():
    uvicorn.run(app, **config.get_api_host_and_port(), log_level=config.get_log_level().lower())


if __name__ == "__main__":
    main()
