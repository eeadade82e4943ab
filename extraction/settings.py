"""Gemini extractor settings, read once from the environment and passed in explicitly."""

import os

from pydantic import BaseModel

DEFAULT_MODEL = "gemini-2.5-flash"

# Lets the client be built without a key; the first request then fails with an auth error
PLACEHOLDER_API_KEY = "missing-gemini-api-key"


class ExtractorSettings(BaseModel):
    api_key: str = ""
    model_name: str = DEFAULT_MODEL

    @classmethod
    def from_env(cls) -> "ExtractorSettings":
        return cls(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        )

    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())
