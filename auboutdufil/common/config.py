"""Service configuration.

The CLI builds a ServiceConfig from its options (each of which can also be
set through an ``AUBOUTDUFIL_*`` environment variable); tests build one
directly.
"""

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://www.auboutdufil.com/index.php?"
DEFAULT_PROJECT_URL = "https://github.com/Shywim/auboutdufil-api"
DEFAULT_USER_AGENT = "auboutdufil-api/0.1 (+https://github.com/Shywim/auboutdufil-api)"


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime settings for the catalog service.

    Attributes:
        base_url: Catalog endpoint that query parameters are appended to.
            Must end with ``?``.
        fetch_timeout: Seconds before a catalog fetch is abandoned.
        cache_ttl: Seconds a cached track list stays valid after insertion.
        cache_maxsize: Upper bound on the number of cached filter sets.
        user_agent: User-Agent header sent upstream.
        project_url: Where ``GET /`` redirects to.
    """

    base_url: str = DEFAULT_BASE_URL
    fetch_timeout: float = 15.0
    cache_ttl: float = 3600.0
    cache_maxsize: int = 4096
    user_agent: str = DEFAULT_USER_AGENT
    project_url: str = DEFAULT_PROJECT_URL

    def __post_init__(self) -> None:
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be positive")
        if self.cache_ttl <= 0:
            raise ValueError("cache_ttl must be positive")
        if self.cache_maxsize < 1:
            raise ValueError("cache_maxsize must be at least 1")
