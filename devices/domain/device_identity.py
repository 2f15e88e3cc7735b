"""
Device identity matching.

Clients report a full-length device hash, while support staff and the
desktop UI work with its first eight characters (the display prefix).
Bans and license records may hold either form.
"""

DISPLAY_PREFIX_LENGTH = 8


def display_prefix(device_id: str) -> str:
    """Return the uppercase 8-character display form of a device identifier."""
    return device_id[:DISPLAY_PREFIX_LENGTH].upper()


def device_ids_match(query: str, candidate: str) -> bool:
    """
    Decide whether two device identifiers refer to the same device.

    Case-insensitive. True when the identifiers are equal, when ``query``
    is a prefix of ``candidate``, or when the display prefix of
    ``candidate`` is a prefix of ``query``. The check is asymmetric: the
    query is what an administrator or client supplied, the candidate is
    what was stored.

    Any 8-character query matches every full hash that starts with it,
    so short identifiers can produce false positives.

    Args:
        query: Identifier supplied by the caller
        candidate: Identifier held by the registry or ledger

    Returns:
        True if both identifiers denote the same device
    """
    query_upper = query.upper()
    candidate_upper = candidate.upper()
    return (
        query_upper == candidate_upper
        or candidate_upper.startswith(query_upper)
        or query_upper.startswith(candidate_upper[:DISPLAY_PREFIX_LENGTH])
    )
