"""Field normalizers: one record field plus one profile field to a 0-100 fit.

Every normalizer is a total function with the same call shape,
``(record, profile, columns=None, tables=None) -> float``, so the engine
can drive them from the NORMALIZERS registry. Malformed or missing input
never raises; it falls back to the neutral value documented per function.
"""

import json
from typing import Any, Callable, Dict, List, Mapping, Optional

from hostel_picker.config.models import FieldMap, KeywordTables
from hostel_picker.domain.models import JsonCell, Record, TextCell, UserProfile
from hostel_picker.utils.text import clamp_score, parse_number, round_half_up

NEUTRAL = 50.0
DEFAULT_RANK = 5
DEFAULT_TARGET_PRICE = 30.0
DEFAULT_AGE = 25.0

PRICE_DECAY = 2.5
AGE_DECAY = 5.0
SIZE_EXACT = 100.0
SIZE_ADJACENT = 70.0
SIZE_MISMATCH = 30.0
NATIONALITY_MATCH = 100.0
NATIONALITY_MISS = 20.0

# First match wins, in this order
NOISE_LEVELS = (
    (("loud", "party", "music"), 90.0),
    (("medium", "social"), 50.0),
    (("quiet", "peace", "nature"), 15.0),
)

# Room sizes one step apart earn partial credit
ADJACENT_SIZES = {
    "small": ("medium",),
    "large": ("medium",),
    "medium": ("small", "large"),
}

_DEFAULT_COLUMNS = FieldMap()
_DEFAULT_TABLES = KeywordTables()


def _plain_text(record: Record, key: str) -> Optional[str]:
    """Text of a TextCell; None for JSON or missing cells."""
    cell = record.get(key)
    if isinstance(cell, TextCell):
        return cell.value
    return None


def _rank_score(record: Record, key: str) -> float:
    data = record.json(key)
    if data is None:
        return NEUTRAL
    rank = parse_number(data.get("rank", DEFAULT_RANK))
    if rank is None:
        return NEUTRAL
    return clamp_score(rank * 10)


def bucket_match(user_text: str, venue_text: str, table: Mapping[str, List[str]]) -> float:
    """Share of the user's bucket labels that the venue text satisfies.

    For every bucket whose label appears in the user text, the bucket is
    checked; it hits when any of its terms appears in the venue text.

    Returns:
        round(hits / checks * 100), or 50 when no bucket label was mentioned
    """
    user = (user_text or "").lower()
    venue = (venue_text or "").lower()

    checks = 0
    hits = 0
    for label, terms in table.items():
        if label and label in user:
            checks += 1
            if any(term and term in venue for term in terms):
                hits += 1

    if checks == 0:
        return NEUTRAL
    return float(round_half_up(hits / checks * 100))


def score_nomad(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    """``rank * 10`` from the digital-nomad JSON cell; 50 when absent or unreadable."""
    return _rank_score(record, (columns or _DEFAULT_COLUMNS).nomad)


def score_solo(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    """``rank * 10`` from the solo-verdict JSON cell; 50 when absent or unreadable."""
    return _rank_score(record, (columns or _DEFAULT_COLUMNS).solo)


def score_price(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    """Proximity of the venue price to the profile's ideal price.

    Scores 100 at the target and loses 2.5 points per currency unit in
    either direction, so a cheaper venue is not automatically a better one.
    """
    price = parse_number(_plain_text(record, (columns or _DEFAULT_COLUMNS).price))
    if price is None:
        return NEUTRAL

    target = profile.max_price if profile.max_price is not None else DEFAULT_TARGET_PRICE
    return clamp_score(100 - abs(price - target) * PRICE_DECAY)


def backend_noise_level(noise_text: str) -> float:
    """Map a free-text noise description onto 90 / 50 / 15."""
    text = (noise_text or "").lower()
    for keywords, level in NOISE_LEVELS:
        if any(keyword in text for keyword in keywords):
            return level
    return NEUTRAL


def score_noise(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    level = backend_noise_level(record.text((columns or _DEFAULT_COLUMNS).noise))
    return clamp_score(100 - abs(profile.noise_level - level))


def score_vibe(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    """Bucket match of the user's vibe against the venue's vibe text.

    A venue whose vibe text contains the user's whole vibe string scores 100
    outright.
    """
    venue_vibe = record.text((columns or _DEFAULT_COLUMNS).vibe)
    user_vibe = profile.vibe.strip().lower()
    if user_vibe and user_vibe in venue_vibe.lower():
        return 100.0

    table = (tables or _DEFAULT_TABLES).vibe
    return clamp_score(bucket_match(profile.vibe, venue_vibe, table))


def score_facilities(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    wanted = f"{profile.vibe} {profile.requirements}"
    table = (tables or _DEFAULT_TABLES).facilities
    venue_facilities = record.text((columns or _DEFAULT_COLUMNS).facilities)
    return clamp_score(bucket_match(wanted, venue_facilities, table))


def score_age(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    venue_age = parse_number(_plain_text(record, (columns or _DEFAULT_COLUMNS).age))
    if venue_age is None:
        venue_age = DEFAULT_AGE
    user_age = profile.age if profile.age is not None else DEFAULT_AGE
    return clamp_score(100 - abs(user_age - venue_age) * AGE_DECAY)


def score_size(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    """Room-size fit: exact 100, one step apart 70, otherwise 30.

    Stays at 50 when either the preference or the venue rooms text is empty.
    """
    wanted = profile.size.strip().lower()
    rooms = record.text((columns or _DEFAULT_COLUMNS).size).lower()
    if not wanted or not rooms.strip():
        return NEUTRAL

    if wanted in rooms:
        return SIZE_EXACT
    if any(other in rooms for other in ADJACENT_SIZES.get(wanted, ())):
        return SIZE_ADJACENT
    return SIZE_MISMATCH


def _country_mapping(record: Record, key: str) -> Optional[Dict[str, Any]]:
    """The country->count object, decoding text cells (even double-encoded ones)."""
    data = record.json(key)
    if data is not None:
        return data

    text = _plain_text(record, key)
    if not text:
        return None

    value = _loads_or_none(text)
    if value is None and '""' in text:
        value = _loads_or_none(text.replace('""', '"'))
    if isinstance(value, str):
        value = _loads_or_none(value)
    return value if isinstance(value, dict) else None


def _loads_or_none(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def score_nationality(record: Record, profile: UserProfile, columns=None, tables=None) -> float:
    """Whether the venue's guest mix includes the preferred nationality.

    No preference is full credit. Otherwise any country key that contains
    the preference, or is contained in it, scores 100 ("german" matches
    "Germany"); no such key scores 20; an unreadable country cell scores 50.
    """
    wanted = profile.nationality_pref.strip().lower()
    if not wanted:
        return 100.0

    countries = _country_mapping(record, (columns or _DEFAULT_COLUMNS).nationality)
    if countries is None:
        return NEUTRAL

    for country in countries:
        name = str(country).strip().lower()
        if name and (wanted in name or name in wanted):
            return NATIONALITY_MATCH
    return NATIONALITY_MISS


Normalizer = Callable[..., float]

NORMALIZERS: Dict[str, Normalizer] = {
    "price": score_price,
    "vibe": score_vibe,
    "facilities": score_facilities,
    "noise": score_noise,
    "age": score_age,
    "size": score_size,
    "nationality": score_nationality,
    "nomad": score_nomad,
    "solo": score_solo,
}
