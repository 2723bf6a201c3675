"""
FastAPI server: thin transport over the oracle pipeline.

POST /verify takes one asset submission and returns the signed oracle result.
GET /health reports liveness and the oracle address. The aggregator is built
once per app (lifespan) or injected via create_app(aggregator=...).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from asset_oracle import __version__
from asset_oracle.core.exceptions import InvalidSubmissionError, OracleError
from asset_oracle.oracle_logging import get_logger
from asset_oracle.pipeline.aggregator import OracleAggregator, build_aggregator
from asset_oracle.verification.models import SubmissionData

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Request models (nested wire shape of a submission)
# -----------------------------------------------------------------------------

class CoordinatesModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")


class LocationModel(BaseModel):
    address: str = Field("", max_length=512)
    coordinates: CoordinatesModel
    city: str = Field("", max_length=128)
    state: str = Field("", max_length=128)


class SPVModel(BaseModel):
    reg_id: str = Field("", max_length=64, description="Legal-entity registration id (CIN)")
    directors: list[str] = Field(default_factory=list)


class DocumentsModel(BaseModel):
    deed_hash: str = Field("", max_length=256, description="Title deed integrity hash")


class FinancialsModel(BaseModel):
    valuation: float = Field(0.0, ge=0, description="Declared valuation")


class SubmissionRequest(BaseModel):
    """POST /verify body."""

    id: str = Field(..., min_length=1, max_length=128, description="Submission identifier")
    location: LocationModel
    spv: SPVModel = Field(default_factory=SPVModel)
    documents: DocumentsModel = Field(default_factory=DocumentsModel)
    financials: FinancialsModel = Field(default_factory=FinancialsModel)
    is_mock: bool = False

    def to_submission(self) -> SubmissionData:
        return SubmissionData.from_dict(self.model_dump())


class HealthResponse(BaseModel):
    status: str
    oracle_address: str
    ledger_enabled: bool


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------

def get_aggregator(request: Request) -> OracleAggregator:
    """Dependency: the app-scoped aggregator."""
    aggregator = getattr(request.app.state, "aggregator", None)
    if aggregator is None:
        raise HTTPException(status_code=503, detail="Oracle not initialised")
    return aggregator


def create_app(aggregator: OracleAggregator | None = None) -> FastAPI:
    """Build the API app. Without an injected aggregator, one is built from env at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.aggregator is None:
            app.state.aggregator = build_aggregator()
        logger.info(
            "api_oracle_ready",
            oracle_address=app.state.aggregator.oracle_address,
            ledger_enabled=app.state.aggregator.ledger_enabled,
        )
        yield
        logger.info("api_oracle_stopped")

    app = FastAPI(
        title="Asset Oracle API",
        description="Verifies asset submissions and returns signed attestations.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.aggregator = aggregator

    @app.get("/health", response_model=HealthResponse)
    def health(agg: OracleAggregator = Depends(get_aggregator)) -> HealthResponse:
        """Liveness probe: API is up and the signer is loaded."""
        return HealthResponse(status="ok", oracle_address=agg.oracle_address, ledger_enabled=agg.ledger_enabled)

    @app.post("/verify")
    def verify(body: SubmissionRequest, agg: OracleAggregator = Depends(get_aggregator)) -> JSONResponse:
        """
        Run one verification pass. Returns the oracle result; 500 only when no
        signed attestation could be produced.
        """
        try:
            submission = body.to_submission()
        except InvalidSubmissionError as e:
            raise HTTPException(status_code=400, detail=e.message) from e
        logger.info("verify_called", submission_id=submission.id)
        try:
            result = agg.verify_submission(submission)
        except OracleError as e:
            logger.error("verify_failed", submission_id=submission.id, code=e.code, error=e.message)
            raise HTTPException(status_code=500, detail=f"Verification failed: {e.message}") from e
        return JSONResponse(status_code=200, content=result.to_dict())

    @app.exception_handler(RequestValidationError)
    def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed submissions are rejected before the pipeline."""
        return JSONResponse(
            status_code=400,
            content={"detail": "Invalid request body", "errors": jsonable_errors(exc)},
        )

    @app.exception_handler(HTTPException)
    def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Consistent JSON error response for HTTPException."""
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": str(err.get("msg", ""))}
        for err in exc.errors()
    ]
