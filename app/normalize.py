"""
Byte-level glue between an uploaded file and the cleaning engine.

Responsibilities:
- encoding detection + decoding to text
- newline normalization
- cleaning + serialization
- run report
"""

from __future__ import annotations

import base64
import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from charset_normalizer import from_bytes

from .config import Settings, get_settings
from .pipeline import CleanOptions, CleanStats, clean_text
from .serializer import serialize

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


@dataclass
class CleanedFile:
    filename: str
    content: bytes
    encoding: str
    stats: CleanStats
    decoding: Dict[str, Any]


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_csv_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text with LF line endings.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed rather than leaking into the first header.
    - If decode fails, try UTF-8, then UTF-8 with replacement characters.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8-sig", errors="replace")
            decode_used = "utf-8-sig"
            logger.warning("Upload is not valid UTF-8; undecodable bytes replaced")

    # --- Newline normalization: CRLF/CR -> LF ---
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def output_filename(filename: str, settings: Settings) -> str:
    return f"{settings.output_prefix}{filename}"


def clean_csv_bytes(
    raw: bytes,
    filename: str,
    options: Optional[CleanOptions] = None,
    settings: Optional[Settings] = None,
) -> CleanedFile:
    settings = settings or get_settings()
    options = options or CleanOptions(
        sanitize_fields=settings.sanitize_fields,
        deduplicate=settings.deduplicate,
    )

    text, decoding = decode_csv_bytes(raw)
    result = clean_text(text, options)
    content = serialize(result.header, result.records).encode(settings.output_encoding)

    return CleanedFile(
        filename=output_filename(filename, settings),
        content=content,
        encoding=settings.output_encoding,
        stats=result.stats,
        decoding=decoding,
    )


def build_envelope(cleaned: CleanedFile) -> Dict[str, Any]:
    """Returns a dict matching the API's JSON response envelope."""
    stats = cleaned.stats
    return {
        "cleaned_csv": {
            "filename": cleaned.filename,
            "sha256": _sha256_hex(cleaned.content),
            "encoding": cleaned.encoding,
            "content_b64": base64.b64encode(cleaned.content).decode("ascii"),
        },
        "report": {
            "summary": {
                "rows_in": stats.rows_in,
                "rows_out": stats.rows_out,
                "duplicates_dropped": stats.duplicates_dropped,
            },
            "encoding": cleaned.decoding,
            "roles": stats.roles,
        },
    }
