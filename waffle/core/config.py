from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from waffle.game.clock import LAUNCH_DATE, REFERENCE_TIMEZONE
from waffle.game.generator import DEFAULT_MAX_ATTEMPTS
from waffle.game.scramble import GREEN_COUNT_PRESETS, GreenCountDistribution
from waffle.game.session import DEFAULT_SWAP_BUDGET

DEFAULT_CORS_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]
DEFAULT_WORDS_PATH = Path(__file__).resolve().parent.parent / "data" / "words.txt"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    service_name: str = Field(default="waffle-backend", alias="SERVICE_NAME")
    env: str = Field(default="local", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allowed_origins: str | list[str] = Field(
        default_factory=lambda: DEFAULT_CORS_ALLOWED_ORIGINS.copy(),
        alias="CORS_ALLOWED_ORIGINS",
    )
    launch_date: date = Field(default=LAUNCH_DATE, alias="LAUNCH_DATE")
    reference_timezone: str = Field(default=REFERENCE_TIMEZONE, alias="REFERENCE_TIMEZONE")
    words_path: Path = Field(default=DEFAULT_WORDS_PATH, alias="WORDS_PATH")
    swap_budget: int = Field(default=DEFAULT_SWAP_BUDGET, alias="SWAP_BUDGET")
    generator_max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, alias="GENERATOR_MAX_ATTEMPTS")
    scramble_difficulty: str = Field(default="standard", alias="SCRAMBLE_DIFFICULTY")
    scramble_green_weights: str | dict[int, float] | None = Field(default=None, alias="SCRAMBLE_GREEN_WEIGHTS")

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_allowed_origins(cls, value: Any) -> list[str]:
        if value is None:
            return DEFAULT_CORS_ALLOWED_ORIGINS.copy()

        if isinstance(value, str):
            parsed = [origin.strip() for origin in value.split(",") if origin.strip()]
            return parsed or DEFAULT_CORS_ALLOWED_ORIGINS.copy()

        if isinstance(value, list):
            parsed = [str(origin).strip() for origin in value if str(origin).strip()]
            return parsed or DEFAULT_CORS_ALLOWED_ORIGINS.copy()

        return DEFAULT_CORS_ALLOWED_ORIGINS.copy()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized

    @field_validator("reference_timezone")
    @classmethod
    def validate_reference_timezone(cls, value: str) -> str:
        normalized = value.strip()
        try:
            ZoneInfo(normalized)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"REFERENCE_TIMEZONE is not a known IANA zone: {normalized}") from None
        return normalized

    @field_validator("swap_budget", "generator_max_attempts")
    @classmethod
    def validate_positive_values(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("SWAP_BUDGET and GENERATOR_MAX_ATTEMPTS must be > 0")
        return value

    @field_validator("scramble_difficulty")
    @classmethod
    def validate_scramble_difficulty(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in GREEN_COUNT_PRESETS:
            raise ValueError(f"SCRAMBLE_DIFFICULTY must be one of: {', '.join(sorted(GREEN_COUNT_PRESETS))}")
        return normalized

    @field_validator("scramble_green_weights", mode="before")
    @classmethod
    def parse_scramble_green_weights(cls, value: Any) -> dict[int, float] | None:
        # Accepts "4:0.2,5:0.35" as well as a JSON object / mapping.
        if value is None or (isinstance(value, str) and not value.strip()):
            return None

        if isinstance(value, str):
            parsed: dict[int, float] = {}
            for item in value.split(","):
                count, separator, weight = item.partition(":")
                if not separator:
                    raise ValueError("SCRAMBLE_GREEN_WEIGHTS entries must look like <count>:<weight>")
                parsed[int(count.strip())] = float(weight.strip())
            value = parsed

        if not isinstance(value, dict):
            raise ValueError("SCRAMBLE_GREEN_WEIGHTS must be a mapping of green count to weight")

        weights = {int(count): float(weight) for count, weight in value.items()}
        GreenCountDistribution.from_mapping(weights)
        return weights

    @property
    def green_count_distribution(self) -> GreenCountDistribution:
        if isinstance(self.scramble_green_weights, dict):
            return GreenCountDistribution.from_mapping(self.scramble_green_weights)
        return GREEN_COUNT_PRESETS[self.scramble_difficulty]


@lru_cache
def get_settings() -> Settings:
    return Settings()
