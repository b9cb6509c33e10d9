# File: canon_scout/reasons.py
"""Коды нарушений canonical и их текст для отчётов.

Код без деталей (``missing``) или с деталями через двоеточие
(``bad-status:404``, ``fetch-error:timeout``).
"""
from __future__ import annotations

from typing import Dict, Sequence

__all__: Sequence[str] = ("with_detail", "fetch_error", "explain")

MISSING = "missing"
MULTIPLE = "multiple"
EMPTY = "empty"
NOT_IN_HEAD = "not-in-head"
BAD_STATUS = "bad-status"
REDIRECTING = "redirecting"
CANONICAL_UNREACHABLE = "canonical-unreachable"
NOT_ABSOLUTE = "not-absolute"
CROSS_DOMAIN = "cross-domain"
CROSS_PROTOCOL = "cross-protocol"
NOT_LOWERCASE = "not-lowercase"
NOT_SELF_REFERENCING = "not-self-referencing"
PARSE_ERROR = "parse-error"
FETCH_ERROR = "fetch-error"

_EXPLANATIONS: Dict[str, str] = {
    MISSING: "Canonical tag is missing.",
    MULTIPLE: "Multiple canonical tags detected.",
    EMPTY: "Canonical tag is empty.",
    NOT_IN_HEAD: "Canonical tag is not in the head section.",
    REDIRECTING: "Canonical URL is redirecting.",
    NOT_ABSOLUTE: "Canonical URL is not absolute.",
    CROSS_DOMAIN: "Canonical URL uses a different domain.",
    CROSS_PROTOCOL: "Canonical URL uses a different protocol.",
    NOT_LOWERCASE: "Canonical URL is not lowercase.",
    NOT_SELF_REFERENCING: "Canonical URL does not reference itself.",
}

_DETAILED_EXPLANATIONS: Dict[str, str] = {
    BAD_STATUS: "Canonical URL returned status {}.",
    CANONICAL_UNREACHABLE: "Error fetching canonical URL: {}.",
    PARSE_ERROR: "URL cannot be parsed: {}.",
    FETCH_ERROR: "Fetch error: {}",
}


def with_detail(code: str, detail: object) -> str:
    return f"{code}:{detail}"


def fetch_error(message: str) -> str:
    """Код для страницы, которую не удалось загрузить."""
    return with_detail(FETCH_ERROR, message)


def explain(reason: str) -> str:
    """Предложение для отчёта по коду нарушения; неизвестный код возвращается как есть."""
    if reason in _EXPLANATIONS:
        return _EXPLANATIONS[reason]
    code, sep, detail = reason.partition(":")
    template = _DETAILED_EXPLANATIONS.get(code)
    if sep and template:
        return template.format(detail)
    return reason
