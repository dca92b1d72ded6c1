"""
Byte-range (V8) coverage merging.

Each fragment is the list of script entries Chromium reported for one test:
``{"url": ..., "functions": [{"ranges": [{"startOffset", "endOffset",
"count"}]}]}``. The same static script shows up in many fragments, so per URL
the merged total and covered byte counts are the maximum seen, never the sum.
"""

import logging

from coverage_report.summary import CoverageCount

logger = logging.getLogger(__name__)


def entry_byte_counts(entry):
    """Total and covered byte counts for one script entry."""
    total = 0
    covered = 0
    for function in entry.get("functions") or []:
        for rng in function.get("ranges") or []:
            size = rng["endOffset"] - rng["startOffset"]
            total += size
            if rng.get("count", 0) > 0:
                covered += size
    return CoverageCount(covered=covered, total=total)


def short_url(url, origin):
    origin = origin.rstrip("/")
    if url.startswith(origin):
        return url[len(origin):] or "/"
    return url


def merge_v8_fragments(fragments, origin):
    """Fold fragments into ``{short url: CoverageCount}``.

    Args:
        fragments: iterable of entry lists, one per fragment file
        origin: first-party origin; entries served elsewhere are ignored
    """
    merged = {}
    for entries in fragments:
        if not isinstance(entries, list):
            logger.warning("Skipping V8 fragment that is not a list of entries")
            continue
        for entry in entries:
            url = entry.get("url", "")
            if not url.startswith(origin):
                continue
            counts = entry_byte_counts(entry)
            if counts.total == 0:
                continue
            key = short_url(url, origin)
            existing = merged.get(key, CoverageCount())
            merged[key] = existing.merge_max(counts)
    return merged


def rows_and_total(merged):
    """Rows sorted by URL and the summed total across URLs."""
    total = CoverageCount()
    rows = []
    for url in sorted(merged):
        counts = merged[url]
        total = total + counts
        rows.append((url, counts))
    return rows, total


def merge_named_fragments(named_fragments, origin):
    """Merge ``(name, entries)`` pairs, skipping fragments with a bad shape.

    Each fragment is merged on its own first, so a bad one leaves nothing
    behind in the result.
    """
    merged = {}
    for name, entries in named_fragments:
        try:
            counts = merge_v8_fragments([entries], origin)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            logger.warning("Skipping malformed V8 fragment %s: %r", name, e)
            continue
        for url, count in counts.items():
            merged[url] = merged.get(url, CoverageCount()).merge_max(count)
    return merged
