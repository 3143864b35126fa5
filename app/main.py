import logging
from typing import Optional
from urllib.parse import quote

from fastapi import Depends, FastAPI, File, HTTPException, Query, Response, UploadFile
from fastapi.concurrency import run_in_threadpool

from .config import Settings, get_settings
from .errors import CleanerError
from .models import CleanResponse, HealthResponse
from .normalize import CleanedFile, build_envelope, clean_csv_bytes
from .pipeline import CleanOptions

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="csv-cleaner",
    description="Contact CSV cleaning: phone, name, gender, points and date normalization with dedup by phone number",
    version="0.1.0",
)


async def _read_upload(file: UploadFile, settings: Settings) -> bytes:
    if not file.filename or not file.filename.lower().endswith(".csv"):
        logger.warning("Rejected upload %r: not a CSV file", file.filename)
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read(settings.max_upload_bytes + 1)
    if len(raw) > settings.max_upload_bytes:
        logger.warning("Rejected upload %r: larger than %d bytes", file.filename, settings.max_upload_bytes)
        raise HTTPException(status_code=413, detail="CSV file is too large")
    return raw


def _clean_upload(
    raw: bytes,
    filename: str,
    dedup: Optional[bool],
    sanitize: Optional[bool],
    settings: Settings,
) -> CleanedFile:
    options = CleanOptions(
        sanitize_fields=settings.sanitize_fields if sanitize is None else sanitize,
        deduplicate=settings.deduplicate if dedup is None else dedup,
    )
    try:
        return clean_csv_bytes(raw, filename, options, settings)
    except CleanerError as exc:
        logger.warning("Could not clean %r: %s", filename, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Unexpected failure while cleaning %r", filename)
        raise HTTPException(status_code=500, detail="Failed to clean CSV file") from exc


def content_disposition(filename: str) -> str:
    # RFC 6266: ASCII fallback plus RFC 5987 encoded UTF-8 name.
    fallback = filename.encode("ascii", "ignore").decode("ascii")
    fallback = fallback.replace('"', "").replace("\\", "").strip() or "cleaned.csv"
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/upload")
async def upload_csv(
    file: UploadFile = File(...),
    dedup: Optional[bool] = Query(default=None),
    sanitize: Optional[bool] = Query(default=None),
    settings: Settings = Depends(get_settings),
):
    raw = await _read_upload(file, settings)
    cleaned = await run_in_threadpool(_clean_upload, raw, file.filename, dedup, sanitize, settings)
    return Response(
        content=cleaned.content,
        media_type=f"text/csv; charset={cleaned.encoding}",
        headers={"Content-Disposition": content_disposition(cleaned.filename)},
    )

@app.post("/normalize", response_model=CleanResponse)
async def normalize_csv(
    file: UploadFile = File(...),
    dedup: Optional[bool] = Query(default=None),
    sanitize: Optional[bool] = Query(default=None),
    settings: Settings = Depends(get_settings),
):
    raw = await _read_upload(file, settings)
    cleaned = await run_in_threadpool(_clean_upload, raw, file.filename, dedup, sanitize, settings)
    return build_envelope(cleaned)
