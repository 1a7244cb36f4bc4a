from service_common.settings import ServiceSettings

# Local development fallbacks, matching the ports the sibling services bind to.
DEFAULT_USER_SERVICE_URL = "http://localhost:8080"
DEFAULT_PRODUCT_SERVICE_URL = "http://localhost:8081"
DEFAULT_DATABASE_URL = "sqlite:///./orders.db"


class Settings(ServiceSettings):
    user_service_url: str = DEFAULT_USER_SERVICE_URL
    product_service_url: str = DEFAULT_PRODUCT_SERVICE_URL
    database_url: str = DEFAULT_DATABASE_URL
    remote_timeout: float = 5.0
    remote_retries: int = 0
    parallel_fetch: bool = False
