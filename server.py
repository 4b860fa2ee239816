"""
Vaccine Helper Web Server

FastAPI-based web server exposing the vaccine catalog and schedule planner.
"""

import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

# Setup paths
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.engines import ScheduleEngine, get_catalog  # noqa: E402
from src.errors import SchedulingError, UnknownVaccine  # noqa: E402
from src.exporters import export_schedule_markdown, export_schedule_summary  # noqa: E402
from src.models import Vaccine, VaccineAppointment, VaccineRecord  # noqa: E402

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Vaccine Helper",
    description="Vaccine Helper - Vaccination Planner API",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize engine
engine = ScheduleEngine()


# Request/Response models
class VaccineSummary(BaseModel):
    """A catalog entry as shown to clients."""
    name: str
    treats: list[str]
    dose_schedule: str
    booster_schedule: str
    booster_interval_months: int
    notes: str
    recommended: bool


class ScheduleRequest(BaseModel):
    """Request model for schedule computation."""
    now: Optional[date] = Field(None, description="Reference date (default: today)")
    vaccines: list[str] = Field(description="Enabled vaccine names in priority order")
    end_plan_year: int = Field(description="Last year to plan boosters for")
    records: list[VaccineRecord] = Field(default_factory=list, description="Doses already received")


class ScheduleResponse(BaseModel):
    """Computed schedule."""
    now: date
    end_plan_year: int
    appointments: list[VaccineAppointment]
    summary: dict


def _vaccine_summary(vaccine: Vaccine) -> VaccineSummary:
    return VaccineSummary(
        name=vaccine.name,
        treats=list(vaccine.treats),
        dose_schedule=str(vaccine.initial_schedule),
        booster_schedule=str(vaccine.booster_schedule),
        booster_interval_months=vaccine.booster_schedule.duration,
        notes=vaccine.notes,
        recommended=vaccine.recommended,
    )


def _compute(request: ScheduleRequest) -> tuple[date, list[VaccineAppointment]]:
    now = request.now or date.today()
    try:
        appointments = engine.schedule(now, request.vaccines, request.end_plan_year, request.records)
    except UnknownVaccine as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SchedulingError as e:
        logger.warning("Schedule request rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    return now, appointments


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.get("/api/vaccines", response_model=list[VaccineSummary])
async def list_vaccines():
    """List catalog vaccines in default priority order."""
    return [_vaccine_summary(v) for v in get_catalog().ordered()]


@app.get("/api/vaccines/{name}", response_model=VaccineSummary)
async def get_vaccine(name: str):
    """Get one catalog vaccine."""
    try:
        vaccine = get_catalog().lookup(name)
    except UnknownVaccine:
        raise HTTPException(status_code=404, detail="Vaccine not found")
    return _vaccine_summary(vaccine)


@app.post("/api/schedule", response_model=ScheduleResponse)
async def compute_schedule(request: ScheduleRequest):
    """
    Compute a vaccination schedule.

    Returns every dose and booster sorted by year and month.
    """
    now, appointments = _compute(request)
    return ScheduleResponse(
        now=now,
        end_plan_year=request.end_plan_year,
        appointments=appointments,
        summary=export_schedule_summary(appointments),
    )


@app.post("/api/schedule/markdown", response_class=PlainTextResponse)
async def compute_schedule_markdown(request: ScheduleRequest):
    """Compute a schedule and return it as Markdown."""
    _, appointments = _compute(request)
    return PlainTextResponse(export_schedule_markdown(appointments), media_type="text/markdown")


def run_server(host: str = "0.0.0.0", port: int = 8000):
    """Run the server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
