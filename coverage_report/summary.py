"""
Coverage arithmetic shared by every report.

Counts merge by maximum rather than sum: the question a report answers is
whether any test reached a unit of code, not how many times.
"""

from dataclasses import dataclass

HIGH_THRESHOLD = 80
MEDIUM_THRESHOLD = 50


def percentage(covered, total):
    """Covered/total as a percentage in [0, 100]; 0 when total is 0."""
    if total <= 0:
        return 0.0
    return min(max(covered / total * 100, 0.0), 100.0)


def classify(pct):
    """Map a percentage to its band: "high", "medium" or "low"."""
    if pct >= HIGH_THRESHOLD:
        return "high"
    if pct >= MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def combined_percentage(frontend_pct, backend_pct):
    """Arithmetic mean of the frontend and backend percentages.

    Not weighted by size: frontend bytes and backend lines are different
    units and the two codebases can differ greatly in size.
    """
    return (frontend_pct + backend_pct) / 2


def text_bar(pct, width=20):
    filled = round(pct / 100 * width)
    return "█" * filled + "░" * (width - filled)


@dataclass
class CoverageCount:
    covered: int = 0
    total: int = 0

    @property
    def pct(self):
        return percentage(self.covered, self.total)

    @property
    def css_class(self):
        return classify(self.pct)

    def merge_max(self, other):
        return CoverageCount(
            covered=max(self.covered, other.covered),
            total=max(self.total, other.total),
        )

    def __add__(self, other):
        return CoverageCount(
            covered=self.covered + other.covered,
            total=self.total + other.total,
        )
