"""Cohort identifier canonicalization."""

import re

# Letters followed by digits, with optional separators: "DEV 101", "dev-101", "DEVOWFS201"
_COHORT_CODE = re.compile(r"([A-Z]{2,})[\s_.\-]*(\d+)")
_PDF_SUFFIX = re.compile(r"\.PDF$")
_GROUP_PREFIX = re.compile(r"^GROUPE?(?![A-Z0-9])[\s_.\-]*")
_SEPARATORS = re.compile(r"[^A-Z0-9]")


def _normalize_once(text: str) -> str:
    text = _PDF_SUFFIX.sub("", text.strip().upper())
    text = _GROUP_PREFIX.sub("", text)

    match = _COHORT_CODE.search(text)
    if match:
        return f"{match.group(1)}{match.group(2)}"

    return _SEPARATORS.sub("", text)


def normalize_cohort_id(raw: str) -> str:
    """
    Turn whatever the model extracted ("Groupe dev-101", "DEV101.pdf", " dev 101 ")
    into the compact upper-case code used everywhere else ("DEV101").

    A leading "Groupe"/"Group" word is dropped. Without a letters+digits code
    the result is the upper-cased input with separators removed. The rules are
    reapplied until the value stops changing, so applying it twice gives the
    same result.
    """
    if not raw:
        return ""

    current = _normalize_once(raw)
    while True:
        # After one pass the text is [A-Z0-9] only, so every further pass shortens or stops
        following = _normalize_once(current)
        if following == current:
            return current
        current = following
