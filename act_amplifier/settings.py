import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    # Google Ads API
    google_ads_config_path: str
    google_ads_customer_id: Optional[str]

    # SMTP (reporting mail)
    smtp_host: Optional[str]
    smtp_port: int
    smtp_user: Optional[str]
    smtp_password: Optional[str]
    smtp_from: Optional[str]

    log_level: str

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password)


def get_settings() -> Settings:
    load_dotenv()  # reads .env if present

    return Settings(
        google_ads_config_path=os.getenv("GOOGLE_ADS_CONFIG", "secrets/google-ads.yaml"),
        google_ads_customer_id=os.getenv("GOOGLE_ADS_CUSTOMER_ID") or None,
        smtp_host=os.getenv("SMTP_HOST") or None,
        smtp_port=int(os.getenv("SMTP_PORT", "587")),
        smtp_user=os.getenv("SMTP_USER") or None,
        smtp_password=os.getenv("SMTP_PASSWORD") or None,
        smtp_from=os.getenv("SMTP_FROM") or None,
        log_level=os.getenv("AMPLIFIER_LOG_LEVEL", "INFO").strip().upper(),
    )
