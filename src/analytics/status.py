from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from src.models.sales import StatusClass

# Text matches win over numeric codes; providers are more consistent with status words.
TEXT_RULES: List[Tuple[Tuple[str, ...], StatusClass]] = [
    (("pago", "aprov"), StatusClass.PAID),
    (("agend", "aguard", "pend"), StatusClass.SCHEDULED),
    (("frustr", "cancel", "reemb"), StatusClass.FAILED),
    (("cobran", "recorr"), StatusClass.IN_COLLECTION),
]

CODE_RULES = {
    3: StatusClass.PAID,
    2: StatusClass.SCHEDULED,
    5: StatusClass.FAILED,
    4: StatusClass.IN_COLLECTION,
}


def _contains_any(fragments: Tuple[str, ...]) -> Callable[[str], bool]:
    return lambda text: any(fragment in text for fragment in fragments)


STATUS_RULES: List[Tuple[Callable[[str], bool], StatusClass]] = [
    (_contains_any(fragments), status_class) for fragments, status_class in TEXT_RULES
]


def _coerce_code(code: object) -> Optional[int]:
    if code is None or isinstance(code, bool):
        return None
    try:
        numeric = float(str(code).strip())
    except ValueError:
        return None
    if not numeric.is_integer():
        return None
    return int(numeric)


def classify_status(text: Optional[str], code: object = None) -> StatusClass:
    normalized_text = str(text).lower() if text is not None else ""
    for predicate, status_class in STATUS_RULES:
        if predicate(normalized_text):
            return status_class
    numeric_code = _coerce_code(code)
    if numeric_code is not None:
        return CODE_RULES.get(numeric_code, StatusClass.UNKNOWN)
    return StatusClass.UNKNOWN


STATUS_CLASS_ALIASES = {
    "pago": StatusClass.PAID,
    "agendado": StatusClass.SCHEDULED,
    "frustrado": StatusClass.FAILED,
    "cobranca": StatusClass.IN_COLLECTION,
    "desconhecido": StatusClass.UNKNOWN,
}


def parse_status_class(value: Optional[str]) -> Optional[StatusClass]:
    if not value:
        return None
    normalized = value.strip().lower()
    if normalized in STATUS_CLASS_ALIASES:
        return STATUS_CLASS_ALIASES[normalized]
    try:
        return StatusClass(normalized)
    except ValueError:
        return None
