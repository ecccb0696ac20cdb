from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database
    DATABASE_PATH: str = "devconnector.db"
    DATABASE_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    # Auth
    AUTH_JWT_SECRET: str = "devconnector-dev-secret"
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_TOKEN_EXPIRE_SECONDS: int = 3600000000
    AUTH_TOKEN_HEADERS: str = "x-auth-token,authorization"
    BCRYPT_ROUNDS: int = 10

    # Gravatar
    GRAVATAR_SIZE: str = "200"
    GRAVATAR_RATING: str = "pg"
    GRAVATAR_DEFAULT: str = "mm"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
