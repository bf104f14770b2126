"""
Chairside Assistant - FastAPI Application

API endpoints for:
- Pre-procedure chart evaluation (safety alerts, anesthesia, risk notes)
- Evaluation of stored patient charts
- Reference data (procedures, alert rules)
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from chairside import config
from chairside.core.clinical import (
    ClinicalRiskEvaluator,
    EvaluationResult,
    Procedure,
)
from chairside.core.records import InMemoryChartSource, PatientChartSource
from chairside.models import (
    EvaluationRequest,
    EvaluationResponse,
    HealthResponse,
    ProcedureInfo,
)
from chairside.utils import ChairsideError, setup_logging

logger = logging.getLogger(__name__)


# ---- Singletons ----
_evaluator = ClinicalRiskEvaluator()
_chart_source: PatientChartSource = (
    InMemoryChartSource.with_demo_patients() if config.SEED_DEMO_PATIENTS else InMemoryChartSource()
)


def set_chart_source(source: PatientChartSource) -> None:
    """Swap the chart backend (e.g. a database-backed source)."""
    global _chart_source
    _chart_source = source


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_FILE or None)
    app.state.evaluator = _evaluator
    logger.info(f"{config.API_TITLE} v{config.API_VERSION} ready to accept requests")
    yield
    logger.info(f"{config.API_TITLE} shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title=config.API_TITLE,
    description="Chairside clinical safety alerts and anesthesia recommendations",
    version=config.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

START_TIME = datetime.now()


@app.exception_handler(ChairsideError)
async def chairside_error_handler(request: Request, exc: ChairsideError):
    logger.warning(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ---- Helpers ----

def _to_response(
    procedure: str,
    result: EvaluationResult,
    patient_id: Optional[str] = None,
) -> Dict[str, Any]:
    summary = ClinicalRiskEvaluator.summarise(result)
    return {
        "procedure": procedure,
        "procedure_recognized": Procedure.parse(procedure) is not None,
        "patient_id": patient_id,
        "evaluated_at": datetime.now(),
        **summary,
    }


def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=config.API_VERSION,
        timestamp=datetime.now(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
    )


# ---- Health ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    return _health()


# ---- Reference ----

@app.get("/api/v1/procedures", response_model=List[ProcedureInfo], tags=["Reference"])
async def list_procedures():
    return [
        ProcedureInfo(code=p.value, label=p.label)
        for p in ClinicalRiskEvaluator.supported_procedures()
    ]


@app.get("/api/v1/rules", tags=["Reference"])
async def list_rules():
    """Alert rule catalog and the anesthesia override order (last wins)."""
    return {
        "alert_rules": ClinicalRiskEvaluator.alert_rules(),
        "anesthesia_overrides": ClinicalRiskEvaluator.override_order(),
    }


# ---- Evaluation ----

@app.post("/api/v1/chairside/evaluate", response_model=EvaluationResponse, tags=["Chairside"])
async def evaluate_chart(request: EvaluationRequest):
    """Evaluate a chart snapshot supplied in the request body."""
    result = _evaluator.evaluate_records(
        request.procedure,
        [a.model_dump() for a in request.allergies],
        [m.model_dump() for m in request.medications],
        [c.model_dump() for c in request.conditions],
    )
    return _to_response(request.procedure, result)


@app.get("/api/v1/patients", tags=["Chairside"])
async def list_patients():
    return {"patient_ids": _chart_source.patient_ids()}


@app.get(
    "/api/v1/patients/{patient_id}/chairside",
    response_model=EvaluationResponse,
    tags=["Chairside"],
)
async def evaluate_patient(
    patient_id: str,
    procedure: str = Query(..., description="Procedure code, e.g. root_canal"),
):
    """Evaluate a stored chart for the given procedure."""
    if not patient_id.strip():
        raise HTTPException(status_code=400, detail="patient_id must not be blank")

    chart = _chart_source.get_chart(patient_id)
    result = _evaluator.evaluate(
        procedure, chart.allergies, chart.medications, chart.conditions
    )
    return _to_response(procedure, result, patient_id=patient_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("chairside.main:app", host="0.0.0.0", port=8000, reload=False)
