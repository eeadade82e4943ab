"""
Cohort Timetable Extractor - Main Application
Upload a cohort timetable PDF, get back its structured weekly schedule.
"""

import csv
import io
import os
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from dotenv import load_dotenv
import structlog

from extraction.errors import EXTERNAL_SERVICE_ERRORS, FileReadError, ResponseValidationError
from extraction.gemini_parser import SchedulePDFParser
from extraction.settings import ExtractorSettings
from timetable.constants import TIME_SLOTS
from timetable.models import DayOfWeek, GroupData

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
load_dotenv()

MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE_MB", "20")) * 1024 * 1024
ALLOWED_CONTENT_TYPES = {"application/pdf", "application/x-pdf"}

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)
logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# App Init
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Cohort Timetable Extractor",
    description="Upload a cohort timetable PDF → get its weekly schedule as structured JSON",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Singleton
pdf_parser = SchedulePDFParser(ExtractorSettings.from_env())


def get_parser() -> SchedulePDFParser:
    return pdf_parser


async def _parse_upload(file: UploadFile, parser: SchedulePDFParser) -> GroupData:
    """Validate the upload, then run the extraction pipeline on it."""
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(400, f"Unsupported file type: {file.content_type}. Upload a PDF.")

    content = await file.read()
    if len(content) > MAX_UPLOAD_SIZE:
        raise HTTPException(400, f"File too large. Max {MAX_UPLOAD_SIZE // (1024*1024)} MB.")

    filename = file.filename or "upload.pdf"
    logger.info("file_uploaded", filename=filename, size=len(content))

    try:
        return await parser.parse_schedule_pdf(content, filename)
    except FileReadError as e:
        raise HTTPException(400, f"Could not read upload: {e}")
    except EXTERNAL_SERVICE_ERRORS as e:
        logger.error("gemini_error", filename=filename, code=getattr(e, "code", None), error=str(e))
        raise HTTPException(502, f"Extraction service error: {e}")
    except ResponseValidationError as e:
        logger.error("gemini_response_invalid", filename=filename, errors=len(e.errors))
        raise HTTPException(502, f"Extraction service returned an unexpected shape: {e}")
    except Exception as e:
        logger.error("pipeline_error", filename=filename, error=str(e))
        raise HTTPException(500, f"Processing error: {str(e)}")


# ---------------------------------------------------------------------------
# Routes - API
# ---------------------------------------------------------------------------

@app.post("/api/parse")
async def parse_timetable(
    file: UploadFile = File(...),
    parser: SchedulePDFParser = Depends(get_parser),
):
    """Extract one cohort's schedule from an uploaded timetable PDF."""
    group = await _parse_upload(file, parser)
    return JSONResponse(group.model_dump(mode="json", by_alias=True))


@app.post("/api/parse/csv")
async def parse_timetable_csv(
    file: UploadFile = File(...),
    parser: SchedulePDFParser = Depends(get_parser),
):
    """Same as /api/parse, returned as a CSV download of the entries."""
    group = await _parse_upload(file, parser)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Group", "Day", "Time Slot", "Room", "Professor"])

    for entry in group.entries:
        day = entry.day.value if isinstance(entry.day, DayOfWeek) else entry.day
        writer.writerow([entry.group_name, day, entry.time_slot, entry.room, entry.professor])

    output.seek(0)
    name = group.name or "schedule"
    return StreamingResponse(
        io.BytesIO(output.getvalue().encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{name}.csv"'},
    )


@app.get("/api/time-slots")
async def time_slots():
    """Allowed time slot labels."""
    return {"time_slots": TIME_SLOTS}


@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", os.getenv("APP_PORT", "8000"))),
        reload=os.getenv("DEBUG", "false").lower() == "true",
    )
