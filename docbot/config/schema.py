"""Configuration schema using Pydantic."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TelegramConfig(BaseModel):
    """Telegram channel configuration."""
    token: str = ""  # Bot token from @BotFather
    proxy: str | None = None  # e.g. "http://127.0.0.1:7890" or "socks5://..."


class PagingConfig(BaseModel):
    """Page rendering limits."""
    page_limit: int = Field(default=1000, gt=0)  # visible characters per page
    group_size: int = Field(default=3, gt=0)  # listing buttons per group


class DocsConfig(BaseModel):
    """Where documentation is fetched from and how much of it is kept."""
    docs_base_url: str = "https://docs.rs"
    std_base_url: str = "https://doc.rust-lang.org"
    version: str = "latest"
    timeout: float = 15.0
    cache_size: int = Field(default=256, gt=0)  # documents kept in memory
    session_limit: int = Field(default=4096, gt=0)  # paged messages tracked


class Config(BaseSettings):
    """Root configuration for docbot."""
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    paging: PagingConfig = Field(default_factory=PagingConfig)
    docs: DocsConfig = Field(default_factory=DocsConfig)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCBOT_",
        env_nested_delimiter="__",
    )
