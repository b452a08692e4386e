"""Runtime configuration for the land generator."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="LANDGEN_", env_file=".env", extra="ignore")

    app_name: str = "landgen"
    log_level: str = "INFO"
    site_size: int = Field(default=2, ge=1, description="Side of a resource site box, in grid cells.")
    min_plot_size: int = Field(default=32, ge=1, description="Smallest plot size accepted from blueprints.")
    max_coord_rerolls: int = Field(
        default=10_000,
        ge=0,
        description="Cap on duplicate re-rolls while drawing site coordinates.",
    )
    plot_version: int = Field(default=1, ge=0, le=255)
    telemetry_enabled: bool = True


settings = Settings()
