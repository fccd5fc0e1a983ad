"""Versioned JSON documents for persisted journal data.

Stored documents are envelopes::

    {"schemaVersion": 1, "entries": [...]}
    {"schemaVersion": 1, "profile": {...}}

Version 0 is the unversioned layout written by the first app release: a
bare entry list, or a bare profile object.
"""

import json
import logging

from .entries import JournalEntry
from .profile import UserProfile

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
VERSION_KEY = "schemaVersion"


class SchemaError(ValueError):
    """Raised when a stored document cannot be understood."""

    pass


def _parse(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON: {e}") from e


def _version_of(doc) -> int:
    if not isinstance(doc, dict) or VERSION_KEY not in doc:
        return 0
    version = doc[VERSION_KEY]
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise SchemaError(f"Invalid schema version: {version!r}")
    if version > SCHEMA_VERSION:
        raise SchemaError(
            f"Schema version {version} is newer than supported version {SCHEMA_VERSION}"
        )
    return version


def migrate_entries(doc) -> dict:
    """Bring an entries document up to the current schema version."""
    version = _version_of(doc)
    if version == 0:
        if not isinstance(doc, list):
            raise SchemaError(f"Expected an entry list, got {type(doc).__name__}")
        doc = {VERSION_KEY: 1, "entries": doc}
    if not isinstance(doc.get("entries"), list):
        raise SchemaError("Entries document has no entry list")
    return doc


def migrate_profile(doc) -> dict:
    """Bring a profile document up to the current schema version."""
    version = _version_of(doc)
    if version == 0:
        if not isinstance(doc, dict):
            raise SchemaError(f"Expected a profile object, got {type(doc).__name__}")
        doc = {VERSION_KEY: 1, "profile": doc}
    if not isinstance(doc.get("profile"), dict):
        raise SchemaError("Profile document has no profile object")
    return doc


def decode_entries(raw: str) -> list[JournalEntry]:
    """
    Parse a stored entries document.

    Raises SchemaError if the document as a whole is unusable. Entries
    that fail to parse individually are skipped and logged.
    """
    doc = migrate_entries(_parse(raw))
    entries = []
    for i, item in enumerate(doc["entries"]):
        try:
            entries.append(JournalEntry.from_dict(item))
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            logger.warning(f"Skipping malformed journal entry at index {i}: {e!r}")
    return entries


def encode_entries(entries: list[JournalEntry]) -> str:
    return json.dumps(
        {VERSION_KEY: SCHEMA_VERSION, "entries": [e.to_dict() for e in entries]},
        ensure_ascii=False,
    )


def decode_profile(raw: str) -> UserProfile:
    """Parse a stored profile document. Raises SchemaError if unusable."""
    doc = migrate_profile(_parse(raw))
    try:
        return UserProfile.from_dict(doc["profile"])
    except (KeyError, ValueError, TypeError, OverflowError) as e:
        raise SchemaError(f"Malformed profile: {e!r}") from e


def encode_profile(profile: UserProfile) -> str:
    return json.dumps(
        {VERSION_KEY: SCHEMA_VERSION, "profile": profile.to_dict()},
        ensure_ascii=False,
    )
