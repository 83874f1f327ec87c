"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from hostel_picker.utils.text import normalize_header

from .duration import DurationParseError, parse_duration, validate_duration_range

DEFAULT_VIBE_KEYWORDS: Dict[str, List[str]] = {
    "party": ["party", "bar", "club", "nightlife", "drinks", "pub crawl", "music"],
    "chill": ["chill", "relax", "calm", "laid-back", "cozy", "hammock"],
    "social": ["social", "friendly", "community", "events", "family dinner", "meet"],
    "work": ["work", "cowork", "wifi", "desk", "nomad", "laptop"],
    "nature": ["nature", "garden", "beach", "mountain", "jungle", "hiking", "green"],
}

DEFAULT_FACILITY_KEYWORDS: Dict[str, List[str]] = {
    "work": ["coworking", "desk", "wifi", "workspace"],
    "digital nomad": ["coworking", "wifi", "desk", "workspace", "monitor"],
    "party": ["bar", "club", "events", "pub crawl"],
    "social": ["common room", "lounge", "events", "family dinner", "tours"],
    "kitchen": ["kitchen"],
    "food": ["breakfast", "restaurant", "cafe", "kitchen", "dinner"],
    "pool": ["pool"],
    "gym": ["gym", "fitness"],
    "privacy": ["curtain", "private", "pod", "locker"],
    "ac": ["air conditioning", "a/c", "aircon", "airco"],
}


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SourceConfig(BaseModel):
    """Where the venue table comes from and how long a fetched copy stays fresh."""

    sheet_url: Optional[str] = Field(
        None, description="Published spreadsheet CSV export URL"
    )
    cache_ttl: str = Field("1h", description="How long a fetched table is reused")
    request_timeout: int = Field(
        30, ge=1, le=300, description="HTTP timeout for the sheet fetch (seconds)"
    )
    user_agent: str = Field(
        "HostelPicker/1.0", min_length=1, description="User-Agent for the sheet fetch"
    )

    # Computed field
    cache_ttl_seconds: Optional[int] = None

    @field_validator("sheet_url")
    @classmethod
    def validate_sheet_url(cls, v: Optional[str]) -> Optional[str]:
        """Strip the URL and require an http(s) scheme."""
        if v is None:
            return None
        stripped = v.strip()
        if not stripped:
            return None
        if not stripped.lower().startswith(("http://", "https://")):
            raise ValueError(f"sheet_url must start with http:// or https://, got: {stripped}")
        return stripped

    @field_validator("cache_ttl")
    @classmethod
    def validate_cache_ttl(cls, v: str) -> str:
        """Validate the cache TTL duration string."""
        try:
            validate_duration_range(
                parse_duration(v), min_seconds=1, max_seconds=7 * 86400, label="cache_ttl"
            )
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def compute_ttl_seconds(self):
        """Store the parsed TTL alongside the raw string."""
        self.cache_ttl_seconds = parse_duration(self.cache_ttl)
        return self


class FieldMap(BaseModel):
    """Normalized column keys the scorers read from each record."""

    name: str = "hostel_name"
    location: str = "city"
    price: str = "pricing"
    vibe: str = "vibe_dna"
    facilities: str = "facilities"
    noise: str = "noise_level"
    age: str = "avg_age"
    size: str = "rooms_info"
    nationality: str = "country_info"
    nomad: str = "digital_nomad_score"
    solo: str = "solo_verdict"
    image: str = "hostel_img"

    @field_validator("*")
    @classmethod
    def normalize_key(cls, v: str) -> str:
        """Apply the same normalization the parser applies to header cells."""
        key = normalize_header(v)
        if not key:
            raise ValueError(f"Field key '{v}' is empty after normalization")
        return key


class ScoringWeights(BaseModel):
    """Weight of each sub-score in the aggregate ranking signal."""

    price: float = Field(1.0, ge=0)
    facilities: float = Field(0.8, ge=0)
    vibe: float = Field(1.0, ge=0)
    noise: float = Field(0.5, ge=0)
    nomad: float = Field(0.5, ge=0)
    nomad_boost: float = Field(1.5, ge=0, description="Nomad weight when nomadMode is on")
    solo: float = Field(0.5, ge=0)
    solo_boost: float = Field(1.5, ge=0, description="Solo weight when soloMode is on")
    age: float = Field(0.5, ge=0)
    size: float = Field(0.5, ge=0)
    nationality: float = Field(0.1, ge=0)


def _normalize_table(table: Dict[str, List[str]]) -> Dict[str, List[str]]:
    normalized: Dict[str, List[str]] = {}
    for key, terms in table.items():
        bucket = key.strip().lower()
        if not bucket:
            continue
        normalized[bucket] = [t.strip().lower() for t in terms if t and t.strip()]
    return normalized


class KeywordTables(BaseModel):
    """Bucket tables used by the vibe and facility scorers.

    Each bucket maps a coarse preference label (matched against the user's
    text) to the venue-side terms that count as satisfying it.
    """

    vibe: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_VIBE_KEYWORDS.items()}
    )
    facilities: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_FACILITY_KEYWORDS.items()}
    )

    @field_validator("vibe", "facilities")
    @classmethod
    def normalize_buckets(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Lower-case and strip bucket keys and terms, dropping blanks."""
        return _normalize_table(v)


class ShortlistConfig(BaseModel):
    """Shortlist sizing."""

    top_k: int = Field(15, ge=1, le=500, description="Candidates returned per shortlist")
    fallback_pool_size: Optional[int] = Field(
        None,
        ge=1,
        description="Records taken when no venue matches the destination (defaults to top_k)",
    )
    max_workers: Optional[int] = Field(
        None, ge=1, le=64, description="Thread pool size for scoring (None = sequential)"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the hostel picker."""

    source: SourceConfig = Field(default_factory=SourceConfig)
    columns: FieldMap = Field(default_factory=FieldMap)
    scoring: ScoringWeights = Field(default_factory=ScoringWeights)
    keywords: KeywordTables = Field(default_factory=KeywordTables)
    shortlist: ShortlistConfig = Field(default_factory=ShortlistConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
