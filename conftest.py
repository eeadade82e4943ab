import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from extraction.gemini_parser import SchedulePDFParser
from extraction.settings import ExtractorSettings

PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF\n"


def make_client(text=None, error=None):
    """Stand-in for genai.Client exposing only client.aio.models.generate_content."""
    generate = AsyncMock(return_value=SimpleNamespace(text=text), side_effect=error)
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))


def make_parser(text=None, error=None):
    client = make_client(text=text, error=error)
    settings = ExtractorSettings(api_key="test-key", model_name="gemini-test")
    return SchedulePDFParser(settings, client=client), client.aio.models.generate_content


@pytest.fixture
def pdf_bytes():
    return PDF_BYTES


@pytest.fixture
def dev101_response():
    return json.dumps({
        "groupName": "Groupe dev-101",
        "entries": [
            {"day": "Lundi", "timeSlot": "08:30-11:00", "room": "A1", "professor": "M. Alami"},
            {"day": "Mercredi", "timeSlot": "13:30-16:00", "room": "Salle 4", "professor": "Mme Idrissi"},
        ],
    })
