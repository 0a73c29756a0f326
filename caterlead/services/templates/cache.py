"""Process-local cache for generated outreach templates.

Entries are keyed by normalized category (plus an optional profile hash) and
are fresh for ``ttl`` seconds after they were written. Freshness is checked on
read; stale entries stay in place until overwritten. Writes are
last-write-wins, so concurrent generations for one key may each overwrite the
other. The cache is per process and is not shared between instances.
"""

import base64
import time
from typing import Any, Callable, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from caterlead.config import settings

KEY_PREFIX = "category:"


class CateringProfile(BaseModel):
    """The caterer's own profile, used to personalise templates."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    company_name: str = Field("", alias="companyName")
    specialties: list[str] = []


class CacheEntry(BaseModel):
    value: Any
    timestamp: float
    category: str


class CacheStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: str
    cached: bool
    age_seconds: Optional[float] = Field(None, alias="ageSeconds")


def normalize_category(category: str) -> str:
    normalized = category.lower().strip()
    if normalized.startswith(KEY_PREFIX):
        normalized = normalized[len(KEY_PREFIX):].strip()
    return normalized


def profile_hash(profile: CateringProfile) -> str:
    raw = f"{profile.company_name}|{','.join(profile.specialties)}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")[:10]


def cache_key(category: str, profile: Optional[CateringProfile] = None) -> str:
    key = f"{KEY_PREFIX}{normalize_category(category)}"
    if profile is None:
        return key
    return f"{key}:profile:{profile_hash(profile)}"


class TemplateCache:
    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds is None:
            ttl_seconds = settings.template_cache_ttl_hours * 3600
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def _fresh_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            return None
        return entry

    def get(self, category: str, profile: Optional[CateringProfile] = None) -> Any:
        """Return the cached value, or None when missing or stale."""
        entry = self._fresh_entry(cache_key(category, profile))
        return entry.value if entry else None

    def put(
        self, category: str, value: Any, profile: Optional[CateringProfile] = None
    ) -> None:
        key = cache_key(category, profile)
        self._entries[key] = CacheEntry(
            value=value, timestamp=self._clock(), category=normalize_category(category)
        )
        logger.debug(f"Cached templates under {key}")

    def status(
        self, category: str, profile: Optional[CateringProfile] = None
    ) -> CacheStatus:
        entry = self._fresh_entry(cache_key(category, profile))
        return CacheStatus(
            category=normalize_category(category),
            cached=entry is not None,
            age_seconds=round(self._clock() - entry.timestamp, 3) if entry else None,
        )

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


template_cache = TemplateCache()
