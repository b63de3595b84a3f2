"""Application configuration loaded from environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()


def parse_caps(value: str) -> dict[str, float]:
    """``"80C:150000,80D:25000"`` -> ``{"80C": 150000.0, "80D": 25000.0}``."""
    caps: dict[str, float] = {}
    for item in filter(None, (part.strip() for part in value.split(","))):
        code, sep, amount = item.partition(":")
        if not sep or not code.strip():
            raise ValueError(f"Invalid deduction cap '{item}', expected CODE:AMOUNT")
        caps[code.strip().upper()] = float(amount)
    return caps


def parse_rates(value: str) -> tuple[float, ...]:
    """``"0,5,12"`` -> ``(0.0, 5.0, 12.0)``."""
    return tuple(float(part) for part in value.split(",") if part.strip())


class Settings:
    """Centralized application settings."""

    # Server
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "5477"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Income tax
    CESS_RATE: float = float(os.getenv("CESS_RATE", "0.04"))
    DEFAULT_FINANCIAL_YEAR: str = os.getenv("DEFAULT_FINANCIAL_YEAR", "2024-25")

    # Chapter VI-A caps (codes missing here are summed uncapped)
    DEDUCTION_CAPS: dict[str, float] = parse_caps(
        os.getenv("DEDUCTION_CAPS", "80C:150000,80D:25000,80TTA:10000")
    )

    # Deposits
    FD_COMPOUNDING_FREQUENCY: int = int(os.getenv("FD_COMPOUNDING_FREQUENCY", "4"))
    NSC_RATE: float = float(os.getenv("NSC_RATE", "6.8"))   # percent p.a.

    # Loans
    MAX_LOAN_SCHEDULE_MONTHS: int = int(os.getenv("MAX_LOAN_SCHEDULE_MONTHS", "600"))

    # GST slabs offered to clients (percent)
    GST_SLABS: tuple[float, ...] = parse_rates(os.getenv("GST_SLABS", "0,5,12,18,28"))


settings = Settings()
