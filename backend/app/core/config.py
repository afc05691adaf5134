from pydantic import ConfigDict
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="ignore")

    db_host: str = "mysql"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = "password"
    db_name: str = "event_db"

    # full URL wins over the DB_* parts when set (sqlite in tests)
    database_url: str | None = None
    db_synchronize: bool = True
    db_echo: bool = True

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self) -> str | URL:
        if self.database_url:
            return self.database_url
        return URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


settings = Settings()
