"""
Statement/branch/function (Istanbul) coverage merging.

Fragments are ``window.__coverage__`` snapshots keyed by source path. Each
file record carries hit maps ``s`` (statements), ``f`` (functions) and ``b``
(branches, one count per arm). Merging takes the maximum per id, and per arm
for branches.
"""

import copy
import logging
from dataclasses import dataclass

from coverage_report.summary import CoverageCount

logger = logging.getLogger(__name__)

CONTAINER_PREFIX = "/app/"


def rewrite_path(container_path):
    """Convert a path inside the UI container (/app/src/...) to src/..."""
    if container_path.startswith(CONTAINER_PREFIX):
        return container_path[len(CONTAINER_PREFIX):]
    return container_path


def merge_branch_counts(existing, incoming):
    length = max(len(existing), len(incoming))
    return [
        max(
            existing[i] if i < len(existing) else 0,
            incoming[i] if i < len(incoming) else 0,
        )
        for i in range(length)
    ]


def merge_file(existing, incoming):
    for stmt_id, count in (incoming.get("s") or {}).items():
        existing.setdefault("s", {})
        existing["s"][stmt_id] = max(existing["s"].get(stmt_id, 0), count)

    for branch_id, counts in (incoming.get("b") or {}).items():
        existing.setdefault("b", {})
        if branch_id not in existing["b"]:
            existing["b"][branch_id] = list(counts)
        else:
            existing["b"][branch_id] = merge_branch_counts(
                existing["b"][branch_id], counts
            )

    for fn_id, count in (incoming.get("f") or {}).items():
        existing.setdefault("f", {})
        existing["f"][fn_id] = max(existing["f"].get(fn_id, 0), count)


def merge_istanbul(fragments):
    """Merge fragments into one coverage map keyed by rewritten path.

    The result never shares mutable structure with the input fragments.
    """
    merged = {}
    for fragment in fragments:
        for key, value in fragment.items():
            path = rewrite_path(key)
            if path not in merged:
                record = copy.deepcopy(value)
                record["path"] = path
                merged[path] = record
            else:
                merge_file(merged[path], value)
    return merged


def _all_counts(values):
    return all(isinstance(c, (int, float)) for c in values)


def check_fragment(fragment):
    """Raise ValueError unless ``fragment`` looks like a coverage map."""
    if not isinstance(fragment, dict):
        raise ValueError("fragment is not an object")
    for key, record in fragment.items():
        if not isinstance(record, dict):
            raise ValueError(f"{key}: file record is not an object")
        for field in ("s", "f"):
            hits = record.get(field) or {}
            if not isinstance(hits, dict) or not _all_counts(hits.values()):
                raise ValueError(f"{key}: bad '{field}' map")
        branches = record.get("b") or {}
        if not isinstance(branches, dict) or not all(
            isinstance(arms, list) and _all_counts(arms)
            for arms in branches.values()
        ):
            raise ValueError(f"{key}: bad 'b' map")


def merge_named_fragments(named_fragments):
    """Merge ``(name, fragment)`` pairs, skipping fragments with a bad shape."""
    valid = []
    for name, fragment in named_fragments:
        try:
            check_fragment(fragment)
        except ValueError as e:
            logger.warning("Skipping malformed Istanbul fragment %s: %s", name, e)
            continue
        valid.append(fragment)
    return merge_istanbul(valid)


@dataclass
class FileStats:
    path: str
    statements: CoverageCount
    branches: CoverageCount
    functions: CoverageCount


def _hits(counts):
    counts = list(counts)
    return CoverageCount(covered=sum(1 for c in counts if c > 0), total=len(counts))


def file_stats(merged):
    stats = []
    for path, data in merged.items():
        branch_arms = [c for arms in (data.get("b") or {}).values() for c in arms]
        stats.append(
            FileStats(
                path=path,
                statements=_hits((data.get("s") or {}).values()),
                branches=_hits(branch_arms),
                functions=_hits((data.get("f") or {}).values()),
            )
        )
    stats.sort(key=lambda s: s.path)
    return stats


def totals(stats):
    result = {
        "statements": CoverageCount(),
        "branches": CoverageCount(),
        "functions": CoverageCount(),
    }
    for s in stats:
        result["statements"] = result["statements"] + s.statements
        result["branches"] = result["branches"] + s.branches
        result["functions"] = result["functions"] + s.functions
    return result

