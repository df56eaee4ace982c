"""WMM error API: FastAPI backend for the browser visualizer."""

import sqlite3
import threading
from dataclasses import asdict
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from wmmview.analysis.component_limits import (
    component_altitude_limit,
    limit_grid_summary,
)
from wmmview.config.loader import load_config
from wmmview.config.schema import EngineConfig, ErrorModel
from wmmview.ingest.dataset_loader import (
    DatasetFormatError,
    DatasetNotFoundError,
    load_activity_dataset,
)
from wmmview.ingest.forecast_fetcher import (
    ForecastFetcher,
    build_forecast_fetcher,
    current_activity_level,
)
from wmmview.models.common import Component
from wmmview.reporting.formatters import limit_result_to_dict
from wmmview.storage.database import open_database
from wmmview.storage.forecast_cache import SqliteForecastCache

DB_PATH = Path(__file__).parent.parent / "data" / "wmmview.db"
CONFIG_PATH = Path(__file__).parent.parent / "configs" / "default.yaml"

app = FastAPI(title="WMM Error API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Requests each open their own connection; the lock keeps the cache
# check-then-refresh to one writer at a time.
_forecast_lock = threading.Lock()


def _conn() -> sqlite3.Connection:
    return open_database(DB_PATH)


def _config() -> EngineConfig:
    return load_config(CONFIG_PATH)


def _fetcher(conn: sqlite3.Connection, config: EngineConfig) -> ForecastFetcher:
    cache = SqliteForecastCache(conn, key=config.forecast.cache_key)
    return build_forecast_fetcher(config.forecast, cache, lock=_forecast_lock)


def _component(component: str) -> Component:
    try:
        return Component(component)
    except ValueError:
        raise HTTPException(404, f"Unknown component: {component}") from None


def _error_model(model: str | None, config: EngineConfig) -> ErrorModel:
    if model is None:
        return config.analysis.default_error_model
    try:
        return ErrorModel(model)
    except ValueError:
        raise HTTPException(422, f"Unknown error model: {model}") from None


# ── Forecast endpoints ──────────────────────────────────────────


@app.get("/api/forecast")
def get_forecast():
    """Current activity level; G0 with an error message when NOAA is unavailable."""
    config = _config()
    conn = _conn()
    try:
        level = current_activity_level(_fetcher(conn, config))
        return asdict(level)
    finally:
        conn.close()


@app.post("/api/cache/clear")
def clear_forecast_cache():
    config = _config()
    conn = _conn()
    try:
        _fetcher(conn, config).clear_cache()
        return {"status": "cleared"}
    finally:
        conn.close()


# ── Dataset endpoints ───────────────────────────────────────────


@app.get("/api/altitude-limit/{g_scale}/{component}")
def get_altitude_limit(g_scale: int, component: str, model: str | None = None):
    """Altitude limit and the analyzed profile for one component."""
    config = _config()
    comp = _component(component)
    error_model = _error_model(model, config)
    try:
        dataset = load_activity_dataset(config.data.data_dir, g_scale)
        result = component_altitude_limit(dataset, comp, error_model, config)
    except DatasetNotFoundError as e:
        raise HTTPException(404, str(e)) from e
    except DatasetFormatError as e:
        raise HTTPException(422, str(e)) from e
    return limit_result_to_dict(result)


@app.get("/api/limit-grid/{g_scale}/{component}")
def get_limit_grid_summary(g_scale: int, component: str, model: str | None = None):
    """Data range of the precomputed altitude-limit grid."""
    config = _config()
    comp = _component(component)
    error_model = _error_model(model, config)
    try:
        dataset = load_activity_dataset(config.data.data_dir, g_scale)
        summary = limit_grid_summary(dataset, comp, error_model)
    except DatasetNotFoundError as e:
        raise HTTPException(404, str(e)) from e
    except DatasetFormatError as e:
        raise HTTPException(422, str(e)) from e
    return asdict(summary)


@app.get("/api/config")
def get_config():
    """Effective config, defaults included."""
    return _config().model_dump(mode="json")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8777)
