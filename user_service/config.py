from service_common.settings import ServiceSettings


class UserSettings(ServiceSettings):
    database_url: str = "sqlite:///./users.db"
