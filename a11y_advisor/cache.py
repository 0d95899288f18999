# cache.py
import hashlib
import logging

import redis.asyncio as aioredis

from a11y_advisor import config

log = logging.getLogger("a11y-advisor")

redis: aioredis.Redis | None = None


async def init_cache(url: str | None = None):
    global redis
    url = url or config.REDIS_URL
    if not url:
        log.info("REDIS_URL not set, remediation cache disabled")
        return
    redis = aioredis.Redis.from_url(url, decode_responses=True)
    try:
        await redis.ping()
        log.info("Connected to Redis at %s", url)
    except Exception as e:
        log.error("Failed to connect to Redis: %s", e)
        redis = None


async def close_cache():
    global redis
    if redis:
        await redis.close()
        redis = None


def cache_key_for_issues(issues_text: str, model: str) -> str:
    digest = hashlib.sha256(f"{model}\n{issues_text}".encode("utf-8")).hexdigest()
    return "fixes:" + digest


async def get_cached_fixes(key: str) -> str | None:
    if not redis:
        return None
    try:
        return await redis.get(key)
    except Exception as e:
        log.warning("Cache read failed: %s", e)
        return None


async def set_cached_fixes(key: str, fixes: str, ttl: int | None = None):
    if not redis:
        return
    try:
        await redis.set(key, fixes, ex=ttl or config.CACHE_TTL)
    except Exception as e:
        log.warning("Cache write failed: %s", e)
