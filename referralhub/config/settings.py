from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for admin reads that bypass RLS

    # BscScan (read-only chain lookups)
    bscscan_api_url: str = "https://api.bscscan.com/api"
    bscscan_api_key: str = ""
    bscscan_timeout_seconds: float = 10.0
    bsc_explorer_url: str = "https://bscscan.com"
    bsc_network_name: str = "BSC Mainnet"
    usdt_contract_address: str = "0x55d398326f99059fF775485246999027B3197955"
    hot_wallet_address: str = ""

    # Business rules mirrored from the frontend
    p2p_min_transfer_amount: float = 1.0
    network_max_depth: int = 10
    activation_fee: float = 21.0
    withdrawal_min_amount: float = 10.0
    withdrawal_fee_rate: float = 0.15  # charged on every payout
    fund_transfer_fee_rate: float = 0.10  # fund -> main move before a fund wallet payout
    deposit_min_amount: float = 1.0
    deposit_confirmations: int = 12
    frontend_url: str = "http://localhost:3000"

    # Pool progression scheduler
    pool_scheduler_enabled: bool = False
    pool_scheduler_interval_seconds: int = 60

    # App
    app_name: str = "referralhub-api"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
