# app/utils/json_parser.py
"""
Helpers for reading spreadsheet-API JSON envelopes and persisted JSON blobs.
The API wraps every collection under one top-level key, e.g. {"carros": [...]}.
"""

import json
from typing import Optional, Any, Union


def safe_parse_json(raw: Union[bytes, str, None]) -> Optional[Any]:
    """Parse JSON bytes/text safely. Returns None on error."""
    if raw is None:
        return None
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError):
        return None


def discover_collection_key(envelope: Any) -> Optional[str]:
    """Name of the first top-level key that holds a list. None if there is none."""
    if not isinstance(envelope, dict):
        return None
    for key, value in envelope.items():
        if isinstance(value, list):
            return key
    return None


def unwrap_collection(envelope: Any, key: Optional[str] = None) -> list:
    """
    Return the record list from a collection envelope.
    With ``key`` set the fixed key is read; otherwise it is discovered.
    A missing or null collection is an empty list.
    """
    if not isinstance(envelope, dict):
        return []
    if key is None:
        key = discover_collection_key(envelope)
        if key is None:
            return []
    records = envelope.get(key)
    return records if isinstance(records, list) else []


def unwrap_record(envelope: Any, key: str) -> Optional[dict]:
    """Return the single record wrapped under ``key`` ({"carro": {...}})."""
    if not isinstance(envelope, dict):
        return None
    record = envelope.get(key)
    return record if isinstance(record, dict) else None
