"""
TheraBot Web Server

FastAPI-based web server that turns a confirmed diagnosis into a
downloadable prescription PDF.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

# Setup paths
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from knowledge import disease_label, get_knowledge_base, normalize_disease_name
from therabot import __version__
from therabot.config import get_settings
from therabot.errors import DiseaseNotFound, MalformedInput, RecommendationNotFound, RenderingFailure
from therabot.log import configure_logging
from therabot.prescription import prescribe

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("therabot.server")

# Create FastAPI app
app = FastAPI(
    title="TheraBot",
    description="TheraBot - Diagnosis ChatBot prescription API",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Load the fact table before any request is served; it is read-only afterwards
knowledge_base = get_knowledge_base()


# Request/Response models
class PrescriptionRequest(BaseModel):
    """Request model for prescription generation."""
    confirmed_disease: Optional[str] = Field(None, description="Confirmed disease name, e.g. 'gastric ulcer'")


class ErrorResponse(BaseModel):
    """Error payload returned for every failed request."""
    success: bool = False
    error: str


class DiseaseSummary(BaseModel):
    """A disease known to the knowledge base."""
    id: str
    name: str


class DiseaseDetail(DiseaseSummary):
    """A disease with its recommendation and treatment text."""
    recommendation: str
    treatment: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


# Error handlers
@app.exception_handler(MalformedInput)
async def malformed_input_handler(request: Request, exc: MalformedInput):
    return _error(400, str(exc))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return _error(400, message)


@app.exception_handler(DiseaseNotFound)
async def not_found_handler(request: Request, exc: DiseaseNotFound):
    return _error(404, str(exc))


@app.exception_handler(RenderingFailure)
async def rendering_failure_handler(request: Request, exc: RenderingFailure):
    return _error(500, "Internal server error")


# Routes
@app.post(
    "/",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def create_prescription(request: PrescriptionRequest):
    """
    Generate a prescription PDF for a confirmed disease.

    The whole document is built before the response starts, so a failure
    never produces a truncated PDF.
    """
    prescription = prescribe(
        request.confirmed_disease,
        knowledge_base=knowledge_base,
        assets_dir=settings.assets_dir,
    )
    logger.info("Rendered prescription for %s", prescription.request.disease_identifier)
    return Response(
        content=prescription.content,
        media_type=prescription.media_type,
        headers={"Content-Disposition": f'attachment; filename="{prescription.filename}"'},
    )


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "diseases": len(knowledge_base),
        "timestamp": datetime.now().isoformat(),
    }


@app.get("/api/diseases", response_model=list[DiseaseSummary])
async def list_diseases():
    """List all diseases with a prescription."""
    return [
        DiseaseSummary(id=identifier, name=disease_label(identifier))
        for identifier in knowledge_base.identifiers()
    ]


@app.get("/api/diseases/{name}", response_model=DiseaseDetail)
async def get_disease(name: str):
    """Get the recommendation and treatment for a disease."""
    record = knowledge_base.get(name)
    if record is None:
        raise RecommendationNotFound(normalize_disease_name(name))
    return DiseaseDetail(
        id=record.identifier,
        name=disease_label(record.identifier),
        recommendation=record.recommendation,
        treatment=record.treatment,
    )


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """Run the server."""
    import uvicorn
    uvicorn.run(app, host=host or settings.host, port=port or settings.port_number)


if __name__ == "__main__":
    run_server()
