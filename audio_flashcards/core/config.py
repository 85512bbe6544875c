from pathlib import Path
from typing import Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_DIR = Path.home() / ".audio-flashcards"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="audio-flashcards", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    host: str = Field(default="127.0.0.1", alias="APP_HOST")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    path: Path = Field(
        default=DEFAULT_DATA_DIR / "audio-flashcard-projects.sqlite",
        alias="DB_PATH",
    )
    echo: bool = Field(default=False, alias="DB_ECHO")

    @field_validator("path")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @computed_field
    def connection_string(self) -> str:
        return f"sqlite+aiosqlite:///{self.path}"


class AudioSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    max_file_size: int = Field(default=30 * 1024 * 1024, alias="AUDIO_MAX_FILE_SIZE")
    allowed_mime_types: list[str] = Field(
        default_factory=lambda: [
            "audio/mpeg",
            "audio/mp3",
            "audio/wav",
            "audio/x-wav",
            "audio/wave",
            "audio/ogg",
        ],
        alias="AUDIO_ALLOWED_MIME_TYPES",
    )
    allowed_extensions: list[str] = Field(
        default_factory=lambda: [".mp3", ".wav", ".ogg"],
        alias="AUDIO_ALLOWED_EXTENSIONS",
    )


class QuizSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    num_choices: int = Field(default=5, ge=1, alias="QUIZ_NUM_CHOICES")


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    base_url: str = Field(default="http://127.0.0.1:9000", alias="API_BASE_URL")
    timeout: Optional[float] = Field(default=30.0, alias="API_TIMEOUT")


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    level: str = Field(default="INFO", alias="LOG_LEVEL")
    file: Optional[Path] = Field(default=None, alias="LOG_FILE")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    database: DatabaseSettings = Field(default_factory=lambda: DatabaseSettings())
    audio: AudioSettings = Field(default_factory=lambda: AudioSettings())
    quiz: QuizSettings = Field(default_factory=lambda: QuizSettings())
    client: ClientSettings = Field(default_factory=lambda: ClientSettings())
    logging: LoggingSettings = Field(default_factory=lambda: LoggingSettings())


settings = Settings()
