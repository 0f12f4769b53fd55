from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional

from pydantic import BaseModel

from src.models.sales import (
    UNASSIGNED_ATTENDANT_CODE,
    UNDEFINED_CAMPAIGN_CODE,
    AttendantRecord,
)

ATTENDANT_CODE_RE = re.compile(r"^[a-z0-9]{4}$")
CAMPAIGN_CODE_RE = re.compile(r"^[a-z0-9]{1,10}$")
CANDIDATE_LENGTHS = (5, 4)


class ContactMetadata(BaseModel):
    email: Optional[str] = None
    local_part: str = ""
    campaign_code: str = UNDEFINED_CAMPAIGN_CODE


def normalize_code(code: object) -> Optional[str]:
    if code is None:
        return None
    trimmed = str(code).strip().lower()
    return trimmed or None


def is_valid_attendant_code(code: Optional[str]) -> bool:
    return bool(code) and bool(ATTENDANT_CODE_RE.match(code))


def normalize_campaign_code(code: object) -> Optional[str]:
    normalized = normalize_code(code)
    if normalized is None or not CAMPAIGN_CODE_RE.match(normalized):
        return None
    return normalized


def parse_contact_metadata(email: Optional[str]) -> ContactMetadata:
    if not isinstance(email, str) or not email.strip():
        return ContactMetadata()
    normalized_email = email.strip().lower()
    local_part = normalized_email.split("@", 1)[0] if "@" in normalized_email else normalized_email
    campaign_code = UNDEFINED_CAMPAIGN_CODE
    if "+" in local_part:
        local_part, tag = local_part.split("+", 1)
        campaign_code = normalize_campaign_code(tag) or UNDEFINED_CAMPAIGN_CODE
    return ContactMetadata(email=normalized_email, local_part=local_part, campaign_code=campaign_code)


def build_candidate_codes(email: Optional[str]) -> List[str]:
    metadata = parse_contact_metadata(email)
    source = metadata.local_part
    candidates: List[str] = []
    for length in CANDIDATE_LENGTHS:
        if len(source) < length:
            continue
        candidate = normalize_code(source[:length])
        if candidate and candidate not in candidates:
            candidates.append(candidate)
    return candidates


def resolve_attendant(
    candidates: Iterable[str],
    lookup: Callable[[str], Optional[AttendantRecord]],
) -> Optional[AttendantRecord]:
    for candidate in candidates:
        normalized = normalize_code(candidate)
        if not normalized or normalized == UNASSIGNED_ATTENDANT_CODE:
            continue
        attendant = lookup(normalized)
        if attendant is not None:
            return attendant
    return None
