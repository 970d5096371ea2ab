"""
hotspot.py — Pydantic models for the trend hotspot engine.

Three layers of data flow through these models:

  XTrend / XTrendsResponse   raw upstream payload from the X trends API
  TrendSample                per-location scores, one per refresh cycle
  RedHotspot / BlueZone      ranked markers the globe renders
  HotspotSnapshot            the cached aggregate served by GET /api/trends

Wire-format field names (redHotspots, blueZones, lastUpdated, topTrend)
are camelCase because the globe frontend reads them verbatim.

The `volume` field is shared by both hotspot variants but means different
things: an engagement count for red hotspots, a weighted velocity score
for blue zones. The `type` discriminator tells them apart, and
BlueZone.velocity gives the score its real name in Python code.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SnapshotSource = Literal["api", "cache", "fallback"]


class Location(BaseModel):
    """A registry entry: one city polled for trends."""

    model_config = ConfigDict(frozen=True)

    location_id: int             # WOEID — key into the X trends namespace
    name: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    country: Optional[str] = None


# ── Upstream payload ──────────────────────────────────────────────────────────

class XTrend(BaseModel):
    """
    One item of the X API v2 trends-by-woeid response.

    The upstream body is untrusted: a null or odd-typed field falls back to
    its default instead of failing the whole trend list.
    """

    trend_name: str = ""
    tweet_count: Optional[int] = None

    @field_validator("trend_name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("tweet_count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None


class XTrendsResponse(BaseModel):
    data: list[XTrend] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: Any) -> list:
        # null data or stray non-object items are treated as absent.
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, XTrend))]


# ── Scores ────────────────────────────────────────────────────────────────────

class TrendSample(BaseModel):
    """Scores derived from a single location's trend list."""

    model_config = ConfigDict(frozen=True)

    location_id: int
    total_volume: int
    velocity_score: float
    top_trend: str
    emerging_trend: str


# ── Hotspots ──────────────────────────────────────────────────────────────────

class RedHotspot(BaseModel):
    """High current activity: volume is the aggregate tweet count."""

    name: str
    lat: float
    lng: float
    volume: int
    type: Literal["red"] = "red"
    topTrend: Optional[str] = None


class BlueZone(BaseModel):
    """Emerging activity: volume carries the velocity score."""

    name: str
    lat: float
    lng: float
    volume: float
    type: Literal["blue"] = "blue"
    topTrend: Optional[str] = None

    @property
    def velocity(self) -> float:
        return self.volume


class HotspotSnapshot(BaseModel):
    """Combined snapshot returned by GET /api/trends."""

    redHotspots: list[RedHotspot]
    blueZones: list[BlueZone]
    lastUpdated: str             # ISO-8601
    source: SnapshotSource
