"""
Application settings with environment variable support.

Uses Pydantic Settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arbscan.config.constants import (
    BITSTAMP_REST_URL,
    BITSTAMP_WS_URL,
    DEFAULT_CONFIG_PATH,
    DEFAULT_CYCLE_LENGTH,
    DEFAULT_FX_PATH,
    DEFAULT_MIN_PNL,
    DEFAULT_PAIR_CYCLES_PATH,
    DEFAULT_PAIRS_PATH,
    DEFAULT_TAKER_FEE,
    DEFAULT_TAKER_FEE_REDUCED,
    DEFAULT_TICKERS_PATH,
    MIN_CYCLE_LENGTH,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    (TAKER_FEE, CONFIG_PATH, COMBO, ...) or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Input / Output Files
    # =========================================================================

    pairs_path: Path = Field(
        default=Path(DEFAULT_PAIRS_PATH),
        description="JSON array of [currency, currency] edges",
    )
    tickers_path: Path = Field(
        default=Path(DEFAULT_TICKERS_PATH),
        description="Comma delimited list of exchange symbols",
    )
    config_path: Path = Field(
        default=Path(DEFAULT_CONFIG_PATH),
        description="Persisted cycle configs (written by find-cycles)",
    )
    pair_cycles_path: Path = Field(
        default=Path(DEFAULT_PAIR_CYCLES_PATH),
        description="Persisted symbol -> cycle ids index",
    )
    fx_path: Path = Field(
        default=Path(DEFAULT_FX_PATH),
        description="JSON array of symbols charged the reduced taker fee",
    )

    # =========================================================================
    # Cycle Discovery
    # =========================================================================

    cycle_length: int = Field(
        default=DEFAULT_CYCLE_LENGTH,
        ge=MIN_CYCLE_LENGTH,
        le=8,
        description="Number of legs in every enumerated cycle",
    )

    # =========================================================================
    # Fees & Alerting
    # =========================================================================

    taker_fee: float = Field(
        default=DEFAULT_TAKER_FEE,
        ge=0.0,
        lt=100.0,
        description="Standard taker fee in percent (e.g., 0.5 = 0.5%)",
    )

    taker_fee_reduced: float = Field(
        default=DEFAULT_TAKER_FEE_REDUCED,
        ge=0.0,
        lt=100.0,
        description="Taker fee in percent for symbols listed in fx.json",
    )

    min_pnl: float = Field(
        default=DEFAULT_MIN_PNL,
        description="Alert when a cycle returns more than this percentage",
    )

    combo: str | None = Field(
        default=None,
        description="Restrict scanning to a single cycle id (eth-usd-btc)",
    )

    # =========================================================================
    # Exchange Endpoints
    # =========================================================================

    ws_url: str = Field(
        default=BITSTAMP_WS_URL,
        description="Streaming endpoint",
    )

    rest_url: str = Field(
        default=BITSTAMP_REST_URL,
        description="REST endpoint for initial order book snapshots",
    )

    # =========================================================================
    # Operation Mode
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional file receiving a DEBUG level copy of the log",
    )

    use_uvloop: bool = Field(
        default=True,
        description="Use uvloop for improved async performance",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("taker_fee_reduced", mode="after")
    @classmethod
    def validate_reduced_fee(cls, v: float, info: ValidationInfo) -> float:
        """Reduced fee must not exceed the standard fee."""
        standard = info.data.get("taker_fee")
        if standard is not None and v > standard:
            raise ValueError(
                f"taker_fee_reduced ({v}) cannot exceed taker_fee ({standard})"
            )
        return v

    @field_validator("combo", mode="after")
    @classmethod
    def normalize_combo(cls, v: str | None) -> str | None:
        """Treat an empty COMBO as unset."""
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def fee_rate(self) -> float:
        """Standard taker fee as a fraction."""
        return self.taker_fee / 100

    @property
    def reduced_fee_rate(self) -> float:
        """Reduced taker fee as a fraction."""
        return self.taker_fee_reduced / 100
