"""Application settings for the Ordering domain.

Protean infrastructure (databases, brokers, event store) is configured in
``domain.toml``. The knobs below are business settings read from the
environment, so they can differ between deployments without a config overlay.
"""

import os
import re
from dataclasses import dataclass, field


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    postal_code_pattern: str = r"^\d{6}$"
    invoice_pdf_engine: str = "fake"
    currency_symbol: str = "$"
    store_name: str = "ShopStream"
    notification_recipients: list[str] = field(default_factory=list)
    orders_page_size_max: int = 100

    def is_valid_postal_code(self, postal_code: str | None) -> bool:
        if not postal_code:
            return False
        return re.match(self.postal_code_pattern, postal_code.strip()) is not None


def get_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    return Settings(
        postal_code_pattern=os.environ.get("POSTAL_CODE_PATTERN", Settings.postal_code_pattern),
        invoice_pdf_engine=os.environ.get("INVOICE_PDF_ENGINE", Settings.invoice_pdf_engine).lower(),
        currency_symbol=os.environ.get("INVOICE_CURRENCY_SYMBOL", Settings.currency_symbol),
        store_name=os.environ.get("STORE_NAME", Settings.store_name),
        notification_recipients=_split_csv(os.environ.get("ORDER_NOTIFICATION_RECIPIENTS", "")),
        orders_page_size_max=int(os.environ.get("ORDERS_PAGE_SIZE_MAX", Settings.orders_page_size_max)),
    )
