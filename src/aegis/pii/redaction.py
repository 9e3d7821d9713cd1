"""Value masking and in-place content redaction."""

from collections.abc import Callable, Iterable

from aegis.pii.types import PIIMatch


def redact_value(value: str, char: str) -> str:
    """Mask a matched value.

    Values of four characters or fewer are fully masked. Longer values keep
    ``min(2, len // 4)`` characters at each end.

    Example:
        >>> redact_value("123-45-6789", "X")
        '12XXXXXXX89'

    """
    if len(value) <= 4:
        return char * len(value)
    keep = min(2, len(value) // 4)
    return value[:keep] + char * (len(value) - keep * 2) + value[-keep:]


def placeholder(match: PIIMatch) -> str:
    """Typed placeholder used in place of a match, e.g. ``[REDACTED_SSN]``."""
    return f"[REDACTED_{match.type.upper()}]"


def redaction_spans(matches: Iterable[PIIMatch]) -> list[tuple[int, int, PIIMatch]]:
    """Collapse overlapping matches into disjoint regions.

    Each region covers every match that overlaps it and is represented by
    its longest match (the earliest one on ties). Regions are returned in
    ascending order.
    """
    spans: list[tuple[int, int, PIIMatch]] = []
    for match in sorted(matches, key=lambda m: (m.location.start, -m.location.end)):
        start, end = match.location.start, match.location.end
        if spans and start < spans[-1][1]:
            region_start, region_end, representative = spans[-1]
            if _length(match) > _length(representative):
                representative = match
            spans[-1] = (region_start, max(region_end, end), representative)
        else:
            spans.append((start, end, match))
    return spans


def _length(match: PIIMatch) -> int:
    return match.location.end - match.location.start


def apply_redactions(
    content: str,
    matches: Iterable[PIIMatch],
    replacement: Callable[[PIIMatch], str] | None = None,
) -> str:
    """Replace matched regions of content.

    Overlapping matches are merged first, so a region is replaced once as a
    whole and no part of an enclosing match survives. Regions are applied
    from the highest offset downwards so earlier offsets stay valid.

    Args:
        content: The original content the matches were found in
        matches: Matches positioned against ``content``
        replacement: Text for each region's representative match; defaults
            to its masked value

    Returns:
        The redacted content

    """
    replace = replacement or (lambda match: match.redacted_value)
    redacted = content
    for start, end, match in reversed(redaction_spans(matches)):
        redacted = redacted[:start] + replace(match) + redacted[end:]
    return redacted
