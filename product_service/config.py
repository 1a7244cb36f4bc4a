from service_common.settings import ServiceSettings


class ProductSettings(ServiceSettings):
    database_url: str = "sqlite:///./products.db"
