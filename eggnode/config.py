# eggnode/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime configuration for eggnode.
    Values are read from `EGGNODE_*` environment variables or a `.env` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EGGNODE_",
        env_file=".env",
        env_file_encoding="utf-8",
        # Unrelated EGGNODE_* variables are not an error.
        extra="ignore",
    )

    # Subdivision count given to curve nodes that do not specify one.
    default_subdiv: int = 0
    # Log a warning when a curve-type keyword is not recognised.
    warn_unknown_curve_type: bool = True


# Global instance imported by the rest of the package.
settings = Settings()
