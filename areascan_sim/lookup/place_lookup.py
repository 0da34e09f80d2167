"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

from dataclasses import dataclass

import requests

from ..errors import LookupFailed
from ..math.partition import LatLng
from ..utils.logger import create_logger

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


@dataclass(frozen=True)
class Place:
    label: str
    lat: float
    lon: float

    @property
    def position(self) -> LatLng:
        return (self.lat, self.lon)


class PlaceLookup:
    """
    Free-text place search against an OpenStreetMap Nominatim endpoint.
    """

    def __init__(
        self,
        session: requests.Session = None,
        url: str = NOMINATIM_URL,
        limit: int = 5,
        min_query_length: int = 3,
        timeout: float = 10.0,
        user_agent: str = "areascan_sim/0.1",
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.url = url
        self.limit = limit
        self.min_query_length = min_query_length
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}

        self.logger = create_logger(name="PlaceLookup", level="INFO")

    def search_places(self, query: str) -> list[Place]:
        """
        Returns up to `limit` candidate places for `query`, best match first.

        Raises
        ------
        LookupFailed
            If the request fails or the response cannot be parsed.
        """
        params = {
            "format": "json",
            "addressdetails": 1,
            "limit": self.limit,
            "q": query,
        }
        try:
            response = self.session.get(
                self.url, params=params, headers=self.headers, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise LookupFailed(f"Place lookup for '{query}' failed: {e}") from e

        if not isinstance(data, list):
            raise LookupFailed(f"Unexpected lookup response for '{query}'")
        try:
            places = [
                Place(
                    label=str(item["display_name"]),
                    lat=float(item["lat"]),
                    lon=float(item["lon"]),
                )
                for item in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise LookupFailed(f"Malformed lookup result for '{query}': {e}") from e
        return places[: self.limit]

    def suggestions(self, query: str) -> list[Place]:
        """
        Autocomplete candidates for a partial query. Short queries and
        lookup failures give no suggestions.
        """
        query = query.strip()
        if len(query) < self.min_query_length:
            return []
        try:
            return self.search_places(query)
        except LookupFailed as e:
            self.logger.warning(str(e))
            return []

    def search(self, query: str) -> Place | None:
        """
        Best match for `query`, or None if nothing was found.

        Raises
        ------
        ValueError
            If the query is blank.
        LookupFailed
            If the lookup service could not be reached.
        """
        query = query.strip()
        if not query:
            raise ValueError("Enter a place name first")
        places = self.search_places(query)
        return places[0] if places else None
