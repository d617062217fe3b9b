from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    rpc_timeout_seconds: float = 30.0
    rpc_connect_timeout_seconds: float = 5.0
    probe_timeout_seconds: float = 5.0
    vault_service_name: str = "VerusIDX"
    main_root_override: Path | None = None  # replaces <MainRoot>, e.g. ~/.komodo
    sibling_root_override: Path | None = None  # replaces <SiblingRoot>, e.g. ~/.verus/pbaas
    resolve_sibling_names: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VERUSCONNECT_",
        env_file_encoding="utf-8",
    )


settings = Settings()
