from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (BRANCH_SYNC_* env or .env)."""

    model_config = SettingsConfigDict(env_prefix="BRANCH_SYNC_", env_file=None, extra="ignore")

    github_org: str | None = Field(default=None, description="Organization to operate on")
    github_owner: str | None = Field(default=None, description="User account to operate on")
    github_token: str | None = Field(default=None, description="Token handed to gh as GH_TOKEN")

    @property
    def explicit_owner(self) -> str | None:
        return self.github_org or self.github_owner or None


def get_settings(**overrides) -> Settings:
    return Settings(**overrides)
