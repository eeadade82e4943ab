"""
Gemini Timetable Extraction
Sends a cohort timetable PDF to Google Gemini with a fixed prompt and a
response schema, then reshapes the JSON it returns into GroupData.

One request per PDF. No retries, no model fallback: an API or network
failure propagates to the caller as-is.
"""

import base64
import json
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

import structlog
from google import genai
from google.genai import types
from pydantic import ValidationError

from extraction.encoder import file_to_base64
from extraction.errors import MalformedResponseError, ResponseValidationError
from extraction.settings import PLACEHOLDER_API_KEY, ExtractorSettings
from timetable.cohort import normalize_cohort_id
from timetable.constants import DAY_MAP, TIME_SLOTS
from timetable.models import GroupData, GroupStatus, RawSchedule, ScheduleEntry

logger = structlog.get_logger()

PDF_MIME_TYPE = "application/pdf"

EXTRACTION_PROMPT = """
Extract schedule data.
Group Name: Extract from filename "{filename}" or content. Simplify to format like DEV101.
Entries: Map to days (Lundi-Samedi) and slots ({slots}).
Return JSON.
"""

_STRING = types.Schema(type=types.Type.STRING)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "groupName": _STRING,
        "entries": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "day": _STRING,
                    "timeSlot": _STRING,
                    "room": _STRING,
                    "professor": _STRING,
                },
            ),
        ),
    },
)


def build_prompt(filename: str, time_slots: Sequence[str] = TIME_SLOTS) -> str:
    return EXTRACTION_PROMPT.format(filename=filename, slots=", ".join(time_slots))


def parse_response_text(text: Optional[str], strict: bool = False) -> RawSchedule:
    """
    Decode Gemini's JSON body into a RawSchedule.

    An empty body counts as {}. A body that is not JSON is logged and also
    treated as {} unless strict is set, in which case MalformedResponseError
    is raised. JSON of the wrong shape always raises ResponseValidationError.
    """
    try:
        data: Any = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        if strict:
            raise MalformedResponseError(f"Gemini returned invalid JSON: {e}", body=text) from e
        logger.warning("gemini_json_parse_failed", preview=text[:200])
        data = {}

    try:
        return RawSchedule.model_validate(data)
    except ValidationError as e:
        logger.warning("gemini_response_invalid", error_count=e.error_count())
        raise ResponseValidationError(
            f"Gemini response does not match the schedule schema: {e}",
            errors=e.errors(),
        ) from e


def build_group_data(raw: RawSchedule) -> GroupData:
    """Attach the normalized cohort id to every entry and map French day names."""
    group_name = normalize_cohort_id(raw.group_name or "")

    entries: List[ScheduleEntry] = [
        ScheduleEntry(
            group_name=group_name,
            day=DAY_MAP.get(e.day, e.day),
            time_slot=e.time_slot,
            room=e.room,
            professor=e.professor,
        )
        for e in raw.entries or []
    ]

    return GroupData(
        name=group_name,
        last_updated=datetime.now(timezone.utc),
        entries=entries,
        status=GroupStatus.OK,
        monday_summary=[],
    )


class SchedulePDFParser:
    """
    Extracts one cohort's weekly schedule from a timetable PDF using Gemini.

    Settings are injected; when no API key is configured a warning is logged
    and a placeholder key is used, so the failure shows up as an auth error
    on the first request instead of at construction.
    """

    def __init__(
        self,
        settings: ExtractorSettings,
        client: Optional[Any] = None,
        time_slots: Sequence[str] = TIME_SLOTS,
    ):
        self.settings = settings
        self.time_slots = list(time_slots)

        api_key = settings.api_key
        if not settings.has_api_key():
            logger.warning("gemini_no_api_key",
                           msg="Set GEMINI_API_KEY in .env (free from aistudio.google.com)")
            api_key = PLACEHOLDER_API_KEY

        self._client = client if client is not None else genai.Client(api_key=api_key)

    async def request_extraction(self, payload: str, filename: str) -> Optional[str]:
        """Send the base64 PDF and the prompt to Gemini; return the raw response text."""
        prompt = build_prompt(filename, self.time_slots)

        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text=prompt),
                    types.Part(
                        inline_data=types.Blob(
                            mime_type=PDF_MIME_TYPE,
                            # The SDK takes raw bytes and re-encodes them for the wire
                            data=base64.b64decode(payload),
                        )
                    ),
                ],
            )
        ]

        logger.info("gemini_request", model=self.settings.model_name, filename=filename)
        response = await self._client.aio.models.generate_content(
            model=self.settings.model_name,
            contents=contents,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )

        text = response.text
        logger.info("gemini_response_ok", model=self.settings.model_name,
                    length=len(text or ""))
        return text

    async def parse_schedule_pdf(self, file: Any, filename: str) -> GroupData:
        """Full pipeline: encode, ask Gemini, decode, normalize."""
        payload = await file_to_base64(file)
        text = await self.request_extraction(payload, filename)
        group = build_group_data(parse_response_text(text))
        logger.info("schedule_parsed", filename=filename, group=group.name,
                    entries=len(group.entries))
        return group


async def parse_schedule_pdf(
    file: Any, filename: str, settings: Optional[ExtractorSettings] = None
) -> GroupData:
    """One-shot helper building a parser from the given (or environment) settings."""
    parser = SchedulePDFParser(settings or ExtractorSettings.from_env())
    return await parser.parse_schedule_pdf(file, filename)
