"""
trend_scorer.py — Volume and velocity scoring for a location's trend list.

Turns the raw X trends list for one location into a TrendSample:

  total_volume    sum of reported tweet counts. When the API reports no
                  usable counts at all, a synthetic estimate of
                  1000 per trend is used instead of 0.
  velocity_score  rewards trends that rank high but are still small
                  (< 10k tweets). Within the top 10 ranks, each emerging
                  trend adds position_weight * 100 and each established
                  one adds position_weight * 10, where position_weight
                  falls linearly from 1.0 at rank 0 to 0.1 at rank 9.
                  The sum is then boosted by 10% per emerging trend.
  top_trend       name of the rank-0 trend.
  emerging_trend  first emerging trend in rank order, else top_trend.

Pure and deterministic: no I/O, no randomness.

USAGE
─────
    from globe_api.models.hotspot import XTrend
    from globe_api.services.trend_scorer import score_trends

    sample = score_trends(44418, [XTrend(trend_name="#Euro2028", tweet_count=52000)])
"""

from __future__ import annotations

from typing import Optional, Sequence

from globe_api.models.hotspot import TrendSample, XTrend

# ── Scoring constants ─────────────────────────────────────────────────────────

VELOCITY_WINDOW          = 10       # only the top N ranks feed velocity
EMERGING_TWEET_THRESHOLD = 10_000   # below this a trend counts as emerging
EMERGING_WEIGHT          = 100.0
ESTABLISHED_WEIGHT       = 10.0
EMERGING_BOOST           = 0.1      # per emerging trend
SYNTHETIC_VOLUME_PER_TREND = 1000


def position_weight(rank: int) -> float:
    """Linear weight: 1.0 at rank 0 down to 0.1 at rank 9."""
    return (VELOCITY_WINDOW - rank) / VELOCITY_WINDOW


def is_emerging(trend: XTrend) -> bool:
    # A missing (or zero) count is treated as "not big yet".
    return not trend.tweet_count or trend.tweet_count < EMERGING_TWEET_THRESHOLD


def compute_total_volume(trends: Sequence[XTrend]) -> int:
    total = sum(t.tweet_count for t in trends if t.tweet_count)
    if total == 0:
        total = len(trends) * SYNTHETIC_VOLUME_PER_TREND
    return total


def compute_velocity(trends: Sequence[XTrend]) -> tuple[float, Optional[str]]:
    """
    Return (velocity_score, first emerging trend name or None).
    """
    velocity = 0.0
    emerging_count = 0
    emerging_trend: Optional[str] = None

    for rank, trend in enumerate(trends[:VELOCITY_WINDOW]):
        weight = position_weight(rank)
        if is_emerging(trend):
            velocity += weight * EMERGING_WEIGHT
            emerging_count += 1
            if not emerging_trend:
                emerging_trend = trend.trend_name
        else:
            velocity += weight * ESTABLISHED_WEIGHT

    velocity *= 1 + emerging_count * EMERGING_BOOST
    return velocity, emerging_trend


def score_trends(location_id: int, trends: Sequence[XTrend]) -> Optional[TrendSample]:
    """
    Score one location. Returns None for an empty trend list so callers
    can skip the location for this cycle.
    """
    if not trends:
        return None

    top_trend = trends[0].trend_name or ""
    velocity, emerging_trend = compute_velocity(trends)

    return TrendSample(
        location_id=location_id,
        total_volume=compute_total_volume(trends),
        velocity_score=velocity,
        top_trend=top_trend,
        emerging_trend=emerging_trend or top_trend,
    )
