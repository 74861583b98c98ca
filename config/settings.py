import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_COUNTRIES_URL = "https://restcountries.com/v3.1/all?fields=name,flags"


class FormConfig(BaseModel):
    countries_url: str = DEFAULT_COUNTRIES_URL
    countries_timeout: Optional[float] = None
    encryption_key: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "FormConfig":
        timeout = os.getenv("COUNTRIES_TIMEOUT")
        return cls(
            countries_url=os.getenv("COUNTRIES_API_URL", DEFAULT_COUNTRIES_URL),
            countries_timeout=float(timeout) if timeout else None,
            encryption_key=os.getenv("ENCRYPTION_KEY") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
