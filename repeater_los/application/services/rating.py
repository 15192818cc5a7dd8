"""Qualitative rating of a clearance margin, for display."""

from dataclasses import dataclass

from repeater_los.domain.models.profile import ClearanceResult

# (minimum margin ratio, stars, label), best first
RATING_THRESHOLDS: tuple[tuple[float, int, str], ...] = (
    (0.20, 5, "Always"),
    (-0.20, 4, "Most of the time"),
    (-0.60, 3, "Often"),
    (-1.00, 2, "Sometimes"),
)
LOWEST_RATING = (1, "Rarely")


@dataclass(frozen=True, slots=True)
class Rating:
    stars: int
    label: str

    @property
    def text(self) -> str:
        return f"{'★' * self.stars}{'☆' * (5 - self.stars)} ({self.label})"

    def __str__(self) -> str:
        return self.text


def star_rating(margin_ratio: float) -> Rating:
    """
    Map a margin ratio (worst clearance over 60% of the first Fresnel
    radius at that point) to one to five stars.
    """
    for threshold, stars, label in RATING_THRESHOLDS:
        if margin_ratio >= threshold:
            return Rating(stars, label)
    return Rating(*LOWEST_RATING)


def rate_clearance(result: ClearanceResult) -> Rating:
    return star_rating(result.margin_ratio)
