from pydantic import field_validator
from pydantic_settings import BaseSettings

from badgecount.core.modules.render.renderer import validate_label
from badgecount.errors import InvalidLabelError


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL, the path names the database, e.g. mongodb://localhost:27017/badgecount
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    forwarded_allow_ips: str = "127.0.0.1"  # Proxies trusted to set X-Forwarded-* headers, used to build badge URLs
    default_label: str = "visitors"  # Label rendered when neither the badge nor the request provides one
    # Connection pool limits; a request waiting longer than these fails with 503 instead of hanging
    store_max_pool_size: int = 100
    store_pool_wait_timeout_ms: int = 2000
    store_server_selection_timeout_ms: int = 3000
    store_connect_timeout_ms: int = 3000
    store_socket_timeout_ms: int = 5000

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BADGECOUNT_",
        "extra": "ignore",
    }

    @field_validator("default_label")
    @classmethod
    def check_default_label(cls, value: str) -> str:
        try:
            return validate_label(value)
        except InvalidLabelError as e:
            raise ValueError(str(e)) from e
