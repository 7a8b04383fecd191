"""Map raw community risk levels onto presentation tiers."""

from county_risk.domain import PresentationTier

_LEVEL_TIERS = {
    0: PresentationTier.LOW,
    1: PresentationTier.MEDIUM,
    2: PresentationTier.HIGH,
}


def classify(raw_level: int) -> PresentationTier:
    """Return the tier for `raw_level`; anything outside 0-2 is UNKNOWN."""
    return _LEVEL_TIERS.get(raw_level, PresentationTier.UNKNOWN)
