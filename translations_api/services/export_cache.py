"""Per-locale cache of export payloads (translation key -> value)."""

import json
import logging
import redis

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "translations.export."
EXPORT_VERSION_PREFIX = "translations.export_version."
EXPORT_TTL = 3600  # 1 hour


class ExportCache:
    """Thin wrapper over a Redis client holding one JSON payload per locale code.

    Entries are derived data. Writers only ever delete them; the next export
    request rebuilds the entry from the database.

    Each locale also carries a version counter that every invalidation bumps.
    A reader that rebuilds an entry passes the version it saw before reading
    the database, and ``set`` refuses to store the payload if an invalidation
    landed in between. Without it a slow reader could put a pre-write mapping
    back for a whole TTL.
    """

    def __init__(self, client, ttl=EXPORT_TTL):
        self.client = client
        self.ttl = ttl

    @property
    def enabled(self) -> bool:
        return self.client is not None

    @staticmethod
    def key_for(locale_code: str) -> str:
        return f"{EXPORT_PREFIX}{locale_code}"

    @staticmethod
    def version_key_for(locale_code: str) -> str:
        return f"{EXPORT_VERSION_PREFIX}{locale_code}"

    def get(self, locale_code: str):
        """Return the cached mapping for a locale, or None on miss."""
        if not self.enabled:
            return None

        try:
            raw = self.client.get(self.key_for(locale_code))
        except redis.RedisError as e:
            logger.error(f"Redis export cache get error: {e}")
            return None

        if raw is None:
            return None
        return json.loads(raw)

    def version(self, locale_code: str):
        """Current invalidation counter for a locale, or None when unavailable."""
        if not self.enabled:
            return None

        try:
            return int(self.client.get(self.version_key_for(locale_code)) or 0)
        except redis.RedisError as e:
            logger.error(f"Redis export cache version error: {e}")
            return None

    def set(self, locale_code: str, mapping: dict, version=None) -> bool:
        """Store a locale's export mapping with the configured TTL.

        When ``version`` is given the entry is only written if no
        invalidation happened since that version was read.
        """
        if not self.enabled:
            return False

        key = self.key_for(locale_code)
        payload = json.dumps(mapping)

        try:
            if version is None:
                self.client.setex(key, self.ttl, payload)
                return True

            version_key = self.version_key_for(locale_code)
            with self.client.pipeline() as pipe:
                pipe.watch(version_key)
                if int(pipe.get(version_key) or 0) != version:
                    logger.debug(f"Export for '{locale_code}' invalidated while rebuilding, not cached")
                    return False
                pipe.multi()
                pipe.setex(key, self.ttl, payload)
                pipe.execute()
                return True
        except redis.WatchError:
            logger.debug(f"Export for '{locale_code}' invalidated while caching, not cached")
            return False
        except redis.RedisError as e:
            logger.error(f"Redis export cache set error: {e}")
            return False

    def delete(self, *locale_codes: str) -> int:
        """Invalidate the export entries for the given locale codes."""
        if not self.enabled:
            return 0

        codes = [code for code in dict.fromkeys(locale_codes) if code]
        if not codes:
            return 0

        keys = [self.key_for(code) for code in codes]
        try:
            pipe = self.client.pipeline()
            pipe.delete(*keys)
            for code in codes:
                pipe.incr(self.version_key_for(code))
            return pipe.execute()[0]
        except redis.RedisError as e:
            logger.error(f"Redis export cache delete error for {keys}: {e}")
            return 0

    def exists(self, locale_code: str) -> bool:
        if not self.enabled:
            return False

        try:
            return self.client.exists(self.key_for(locale_code)) > 0
        except redis.RedisError as e:
            logger.error(f"Redis export cache exists error: {e}")
            return False
