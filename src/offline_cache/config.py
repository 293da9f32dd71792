import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


def _split_paths(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _optional_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Upstream origin all intercepted requests are forwarded to
    upstream_url: str = os.getenv("UPSTREAM_URL", "http://localhost:3000")

    # Partitions: <prefix>-<core|assets|api>-<version>
    cache_prefix: str = os.getenv("CACHE_PREFIX", "jkdp")
    cache_version: str = os.getenv("CACHE_VERSION", "v1")
    core_assets: tuple[str, ...] = _split_paths(
        os.getenv("CORE_ASSETS", "/,/manifest.json,/JK_Logo.jpg")
    )

    # Routing
    api_prefix: str = os.getenv("API_PREFIX", "/api/")
    bundle_prefix: str = os.getenv("BUNDLE_PREFIX", "/_next/")

    # Storage backend: "memory" or "redis"
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_namespace: str = os.getenv("REDIS_NAMESPACE", "offline_cache")

    # Network (None = no timeout, rely on the upstream/client)
    fetch_timeout: float | None = _optional_float(os.getenv("FETCH_TIMEOUT"))

    # Lifecycle
    skip_waiting_on_install: bool = os.getenv("SKIP_WAITING_ON_INSTALL", "true").lower() == "true"

    # API
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def uses_redis(self) -> bool:
        """Check if the Redis storage backend is configured."""
        return self.cache_backend == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.cache_version.strip():
            raise ValueError("CACHE_VERSION must not be empty")

        if not self.cache_prefix.strip():
            raise ValueError("CACHE_PREFIX must not be empty")

        for name, prefix in (("API_PREFIX", self.api_prefix), ("BUNDLE_PREFIX", self.bundle_prefix)):
            if not (prefix.startswith("/") and prefix.endswith("/")):
                raise ValueError(f"{name} must start and end with '/', got {prefix!r}")

        if self.cache_backend not in ("memory", "redis"):
            raise ValueError(
                f"CACHE_BACKEND must be one of ['memory', 'redis'], got {self.cache_backend!r}"
            )

        for path in self.core_assets:
            if not path.startswith("/"):
                raise ValueError(f"CORE_ASSETS entries must be site-relative paths, got {path!r}")

        if self.fetch_timeout is not None and self.fetch_timeout <= 0:
            raise ValueError("FETCH_TIMEOUT must be positive when set")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=False,
    )
