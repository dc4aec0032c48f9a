"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Static settings for the coffee cart core."""

    app_name: str = "Awaken"
    app_version: str = "1.0.0"
    database_url: str = getenv("AWAKEN_DATABASE_URL", "sqlite:///./awaken.db")

    cart_name: str = "Awaken Coffee Cart"
    cart_open: bool = True
    currency_symbol: str = "$"
    default_prep_time_minutes: int = 5
    max_items_per_order: int = 10
    # 875 basis points = 8.75%
    tax_rate_basis_points: int = 875
    baristas: list[str] = ["Sarah", "Michael", "Emma", "David", "Luna", "Alex"]

    default_font_size: str = "large"
    default_high_contrast: bool = False
    default_voice_announcements: bool = True
    default_haptic_feedback: bool = True

    printer_address_key: str = "printerIP"
    printer_model: str = "QL-810W"
    label_line1_max_chars: int = 20
    label_line2_max_chars: int = 30


settings: Settings = Settings()
