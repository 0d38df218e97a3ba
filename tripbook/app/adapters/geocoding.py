"""Places adapter using a Nominatim-compatible API (reverse + forward search)."""

import time
from typing import Any, Protocol

import httpx

from tripbook.app.config import Settings
from tripbook.app.errors import GeocodeFailure
from tripbook.app.models.common import GeoBounds, GeoPosition
from tripbook.app.models.map import PlaceResult
from tripbook.app.utils.metrics import PrometheusTripMetrics, metrics as default_metrics


class Geocoder(Protocol):
    """Mapping/places collaborator."""

    async def reverse(self, position: GeoPosition) -> str:
        """Resolve a coordinate to a formatted place label.

        Raises:
            GeocodeFailure: If the lookup fails or finds nothing
        """
        ...

    async def search(self, query: str, limit: int | None = None) -> list[PlaceResult]:
        """Forward place search / autocomplete; ``None`` uses the configured limit.

        Raises:
            GeocodeFailure: If the lookup fails
        """
        ...


def fallback_label(position: GeoPosition) -> str:
    """Deterministic label derived from the raw coordinate."""
    return f"{position.lat:.5f}, {position.lng:.5f}"


class NominatimGeocoder:
    """Geocoder over the Nominatim HTTP API.

    Every transport error, error status or unexpected payload is raised as
    GeocodeFailure so callers only need to handle one error kind.
    """

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "tripbook/0.1 (itinerary planner)",
        timeout_s: float = 4.0,
        language: str = "en",
        result_limit: int = 5,
        client: httpx.AsyncClient | None = None,
        metrics: PrometheusTripMetrics | None = None,
    ) -> None:
        """Initialize geocoder.

        Args:
            base_url: API base URL
            user_agent: User-Agent header (required by the public Nominatim policy)
            timeout_s: Per-request timeout in seconds
            language: Preferred label language
            result_limit: Default number of search hits
            client: Optional httpx client (for testing with mocks)
            metrics: Metrics recorder (defaults to the Prometheus one)
        """
        self._base_url = base_url.rstrip("/")
        self._headers = {"User-Agent": user_agent}
        self._timeout_s = timeout_s
        self._language = language
        self._result_limit = result_limit
        self._client = client
        self._metrics = metrics or default_metrics

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient | None = None
    ) -> "NominatimGeocoder":
        return cls(
            base_url=settings.geocoder_base_url,
            user_agent=settings.geocoder_user_agent,
            timeout_s=settings.geocoder_timeout_s,
            language=settings.geocoder_language,
            result_limit=settings.search_result_limit,
            client=client,
        )

    async def reverse(self, position: GeoPosition) -> str:
        """Resolve a coordinate to Nominatim's ``display_name``."""
        params: dict[str, str | float] = {
            "format": "jsonv2",
            "lat": position.lat,
            "lon": position.lng,
            "accept-language": self._language,
        }
        data = await self._get_json("reverse", "/reverse", params)

        if not isinstance(data, dict) or "error" in data:
            reason = data.get("error") if isinstance(data, dict) else "unexpected payload"
            raise GeocodeFailure(f"reverse geocode of {fallback_label(position)} failed: {reason}")

        label = data.get("display_name")
        if not label:
            raise GeocodeFailure(f"no label for {fallback_label(position)}")
        return str(label)

    async def search(self, query: str, limit: int | None = None) -> list[PlaceResult]:
        """Search places by free text; results keep the API's ranking order."""
        params: dict[str, str | float] = {
            "format": "jsonv2",
            "q": query,
            "limit": limit or self._result_limit,
            "accept-language": self._language,
        }
        data = await self._get_json("search", "/search", params)

        if not isinstance(data, list):
            raise GeocodeFailure(f"search for {query!r} returned an unexpected payload")

        try:
            return [_parse_place(hit) for hit in data]
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodeFailure(f"search for {query!r} returned a malformed hit: {exc}") from exc

    async def _get_json(self, kind: str, path: str, params: dict[str, str | float]) -> Any:
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        started = time.perf_counter()
        outcome = "error"
        try:
            response = await client.get(
                f"{self._base_url}{path}", params=params, headers=self._headers
            )
            response.raise_for_status()
            data = response.json()
            outcome = "success"
            return data
        except httpx.HTTPError as exc:
            raise GeocodeFailure(f"{kind} request failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodeFailure(f"{kind} response is not JSON: {exc}") from exc
        finally:
            self._metrics.record_geocode(kind, outcome, (time.perf_counter() - started) * 1000)
            if close_client:
                await client.aclose()


def _parse_place(hit: dict[str, Any]) -> PlaceResult:
    """Map one Nominatim hit; ``boundingbox`` is [south, north, west, east]."""
    bounds = None
    box = hit.get("boundingbox")
    if box:
        south, north, west, east = (float(v) for v in box)
        bounds = GeoBounds(north=north, south=south, east=east, west=west)

    return PlaceResult(
        label=hit["display_name"],
        position=GeoPosition(lat=float(hit["lat"]), lng=float(hit["lon"])),
        bounds=bounds,
    )
