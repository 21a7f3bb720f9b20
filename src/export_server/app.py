from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from cycly_export.transform import generate_csv
from . import settings as app_settings
from .settings import Settings, configure_logging, get_settings


log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # also applies when served as `uvicorn export_server.app:app`
    configure_logging(app_settings.get_settings().log_level)
    yield


app = FastAPI(title="Cycly → BikeExchange export", version="0.1.0", lifespan=lifespan)


class Health(BaseModel):
    status: str
    time: datetime


class ExportError(BaseModel):
    error: str
    message: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


def export_filename(when: datetime) -> str:
    return f"cycly_vehicles_{when.astimezone(timezone.utc).date().isoformat()}.csv"


@app.get("/health", response_model=Health)
def health() -> Dict:
    return {"status": "ok", "time": _now()}


@app.get(
    "/cycly/export/bikeexchange",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}, 500: {"model": ExportError}},
)
def export_bikeexchange(request: Request, settings: Settings = Depends(get_settings)):
    requested_at = _now()
    client = request.client.host if request.client else "unknown"
    log.info(f"/cycly/export/bikeexchange requested from {client}")
    try:
        content = generate_csv(settings.cycly_config(), sort_by_id=settings.sort_by_id)
    except Exception as e:
        log.error(f"Error in /cycly/export/bikeexchange: {e}")
        payload = ExportError(error="Failed to generate CSV", message=str(e))
        return JSONResponse(status_code=500, content=payload.model_dump())

    filename = export_filename(requested_at)
    return Response(
        content=content,
        status_code=200,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def run() -> None:
    import uvicorn

    s = app_settings.init_settings()
    configure_logging(s.log_level)
    log.info(f"Cycly export service listening on port {s.port}")
    uvicorn.run(app, host=s.host, port=s.port)


if __name__ == "__main__":
    run()
