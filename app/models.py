from __future__ import annotations

from typing import Dict, Optional
from pydantic import BaseModel, Field


class CleanedCsv(BaseModel):
    filename: str
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class ReportSummary(BaseModel):
    rows_in: int = 0
    rows_out: int = 0
    duplicates_dropped: int = 0


class DecodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class CleanReport(BaseModel):
    summary: ReportSummary
    encoding: DecodingReport
    roles: Dict[str, Optional[str]] = Field(default_factory=dict)


class CleanResponse(BaseModel):
    cleaned_csv: CleanedCsv
    report: CleanReport

class HealthResponse(BaseModel):
    ok: bool = True
