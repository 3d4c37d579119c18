"""
Shared configuration management for the token gateway.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Algorand zero address; used as the sender of read-only simulations.
ZERO_ADDRESS = "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAY5HFKQ"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Ledger node
    algod_token: str = Field(default="")
    algod_url: str = Field(default="")
    algod_port: str = Field(default="")

    # Sender used for read-only contract simulations
    simulate_sender: str = Field(default=ZERO_ADDRESS)

    @property
    def algod_address(self) -> str:
        """Node address as expected by the ledger client."""
        if self.algod_port:
            return f"{self.algod_url}:{self.algod_port}"
        return self.algod_url

    def masked_algod_token(self) -> str:
        """Node token safe for logs."""
        if not self.algod_token:
            return ""
        if len(self.algod_token) <= 8:
            return "***"
        return f"{self.algod_token[:4]}***{self.algod_token[-4:]}"


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
