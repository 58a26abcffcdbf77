"""Review score → label rules.

Rules
-----
* Scores are on a 0–100 scale; bounds below are inclusive.
* Buckets are checked top to bottom and the first match wins, so the 0–19
  band resolves to the highest review-count tier the product reaches.
* Fewer than 10 reviews never earns a label.
"""
from typing import Optional, Tuple

OVERWHELMINGLY_POSITIVE = 'Overwhelmingly Positive'
VERY_POSITIVE = 'Very Positive'
POSITIVE = 'Positive'
MOSTLY_POSITIVE = 'Mostly Positive'
MIXED = 'Mixed'
MOSTLY_NEGATIVE = 'Mostly Negative'
OVERWHELMINGLY_NEGATIVE = 'Overwhelmingly Negative'
VERY_NEGATIVE = 'Very Negative'
NEGATIVE = 'Negative'

# (min_score, max_score, min_reviews, label)
SUMMARY_BUCKETS: Tuple[Tuple[float, float, int, str], ...] = (
    (95, 100, 500, OVERWHELMINGLY_POSITIVE),
    (85, 100, 50,  VERY_POSITIVE),
    (80, 100, 10,  POSITIVE),
    (70, 79,  10,  MOSTLY_POSITIVE),
    (40, 69,  10,  MIXED),
    (20, 39,  10,  MOSTLY_NEGATIVE),
    (0,  19,  500, OVERWHELMINGLY_NEGATIVE),
    (0,  19,  50,  VERY_NEGATIVE),
    (0,  19,  10,  NEGATIVE),
)

SENTIMENT_POSITIVE = 'positive'
SENTIMENT_MIXED = 'mixed'
SENTIMENT_NEGATIVE = 'negative'


def review_summary(score: Optional[float],
                   total_reviews: Optional[int]) -> Optional[str]:
    """Return the store-style label for *score* given *total_reviews*.

    Returns:
        One of the label constants above, or ``None`` when either value is
        missing or no bucket matches (typically too few reviews).
    """
    if score is None or total_reviews is None:
        return None
    for low, high, min_reviews, label in SUMMARY_BUCKETS:
        if low <= score <= high and total_reviews >= min_reviews:
            return label
    return None


def review_sentiment(score: Optional[float]) -> Optional[str]:
    """Coarse three-way bucket used for colour coding."""
    if score is None:
        return None
    if 80 <= score <= 100:
        return SENTIMENT_POSITIVE
    if 40 <= score <= 79:
        return SENTIMENT_MIXED
    if 0 <= score < 40:
        return SENTIMENT_NEGATIVE
    return None
