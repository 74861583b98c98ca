"""
Country directory client.

Fetches the list of countries (name + flag image) used to fill the country
choice on the registration form. The fetch is best effort: one request, no
retry, and any failure leaves the list empty.
"""
import logging
from typing import Any, Iterable, List, Optional, Set

import requests
from pydantic import BaseModel

from config.settings import DEFAULT_COUNTRIES_URL, FormConfig

logger = logging.getLogger(__name__)


class CountryEntry(BaseModel):
    name: str
    flag: str


class CountryDirectory:
    def __init__(
        self,
        url: str = DEFAULT_COUNTRIES_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: FormConfig) -> "CountryDirectory":
        return cls(url=config.countries_url, timeout=config.countries_timeout)

    def fetch(self) -> List[CountryEntry]:
        """
        Returns:
            Countries in the order the directory lists them, or an empty list
            when the request or the payload fails.
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching countries from %s: %s", self.url, e)
            return []

        if not isinstance(payload, list):
            logger.error(
                "Error fetching countries from %s: expected a list, got %s",
                self.url,
                type(payload).__name__,
            )
            return []

        entries: List[CountryEntry] = []
        for item in payload:
            entry = self._parse_entry(item)
            if entry is None:
                logger.warning("Skipping malformed country entry: %r", item)
                continue
            entries.append(entry)

        logger.info("Loaded %d countries", len(entries))
        return entries

    @staticmethod
    def _parse_entry(item: Any) -> Optional[CountryEntry]:
        try:
            return CountryEntry(name=item["name"]["common"], flag=item["flags"]["svg"])
        except (KeyError, TypeError, ValueError):
            return None


def names(entries: Iterable[CountryEntry]) -> Set[str]:
    return {entry.name for entry in entries}
