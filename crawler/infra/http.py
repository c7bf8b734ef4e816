"""
HTTP fetching with polite defaults. One request per call; retry policy lives
with the caller.
"""
from __future__ import annotations

import requests


class HttpFetcher:
    """
    Thin wrapper over requests.Session with feed-friendly headers.
    """

    def __init__(self, user_agent: str, timeout: int = 15) -> None:
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept": "application/rss+xml,application/atom+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.8",
            }
        )
        self.timeout = timeout

    def fetch(self, url: str) -> requests.Response:
        """
        GET ``url`` and return the response.

        Raises requests.HTTPError for 4xx/5xx answers (the response, and so
        the status code, stays attached) and the usual RequestException
        subclasses for transport failures.
        """
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response
