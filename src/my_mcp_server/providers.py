"""HTTP clients for the remote data providers (Nominatim, Open-Meteo, Hugging Face)."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


@dataclass
class ProviderResponse:
    """Structured response from a provider API."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    http_code: Optional[int] = None


def _failed_status(response: requests.Response) -> ProviderResponse:
    return ProviderResponse(
        success=False,
        error=f"API request failed: {response.status_code}",
        http_code=response.status_code,
    )


class NominatimClient:
    """Client for the OpenStreetMap Nominatim search endpoint."""

    def __init__(self, base_url: str, user_agent: str, timeout: Optional[float] = None):
        """
        Initialize Nominatim client.

        Args:
            base_url: Search endpoint URL
            user_agent: Value for the User-Agent header (required by the usage policy)
            timeout: Optional request timeout in seconds
        """
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout

    def search(self, query: str) -> ProviderResponse:
        """
        Look up the best match for a free-text place query.

        Returns:
            ProviderResponse with the list of candidates (possibly empty) or error
        """
        params = {
            "q": query,
            "format": "jsonv2",
            "limit": "1",
            "addressdetails": "1",
        }
        try:
            response = requests.get(
                self.base_url,
                params=params,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            if not response.ok:
                return _failed_status(response)

            data = response.json()
            if not isinstance(data, list):
                return ProviderResponse(
                    success=False,
                    error="Unexpected geocoding response format",
                    http_code=response.status_code,
                )
            return ProviderResponse(success=True, data=data, http_code=response.status_code)

        except requests.ConnectionError:
            return ProviderResponse(success=False, error=f"Cannot reach {self.base_url}. Check network connectivity.")
        except requests.Timeout:
            return ProviderResponse(success=False, error="Geocoding request timed out.")
        except ValueError:
            return ProviderResponse(success=False, error="Geocoding service returned invalid JSON")
        except requests.RequestException as e:
            return ProviderResponse(success=False, error=f"Geocoding request failed: {e}")


class OpenMeteoClient:
    """Client for the Open-Meteo forecast endpoint."""

    HOURLY = "temperature_2m,precipitation,weathercode"
    DAILY = "temperature_2m_max,temperature_2m_min,precipitation_sum,weathercode"

    def __init__(self, base_url: str, timeout: Optional[float] = None):
        self.base_url = base_url
        self.timeout = timeout

    def forecast(self, latitude: float, longitude: float, forecast_days: int) -> ProviderResponse:
        """
        Fetch current weather plus hourly and daily forecasts.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            forecast_days: Forecast horizon in days

        Returns:
            ProviderResponse with the decoded forecast document or error
        """
        params = {
            "latitude": str(latitude),
            "longitude": str(longitude),
            "current_weather": "true",
            "hourly": self.HOURLY,
            "daily": self.DAILY,
            "forecast_days": str(forecast_days),
            "timezone": "auto",
        }
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            if not response.ok:
                return _failed_status(response)

            data = response.json()
            if not isinstance(data, dict):
                return ProviderResponse(
                    success=False,
                    error="Unexpected weather response format",
                    http_code=response.status_code,
                )
            return ProviderResponse(success=True, data=data, http_code=response.status_code)

        except requests.ConnectionError:
            return ProviderResponse(success=False, error=f"Cannot reach {self.base_url}. Check network connectivity.")
        except requests.Timeout:
            return ProviderResponse(success=False, error="Weather request timed out.")
        except ValueError:
            return ProviderResponse(success=False, error="Weather service returned invalid JSON")
        except requests.RequestException as e:
            return ProviderResponse(success=False, error=f"Weather request failed: {e}")


class HuggingFaceClient:
    """Client for text-to-image models on the Hugging Face inference router."""

    NUM_INFERENCE_STEPS = 5

    def __init__(self, token: str, model: str, base_url: str, timeout: Optional[float] = None):
        self.token = token
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.model}"

    def text_to_image(self, prompt: str) -> ProviderResponse:
        """
        Request an image for a text prompt.

        Returns:
            ProviderResponse whose data is the streamed ``requests.Response``;
            the caller reads it to completion and closes it
        """
        payload = {
            "inputs": prompt,
            "parameters": {"num_inference_steps": self.NUM_INFERENCE_STEPS},
        }
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "image/png",
        }
        try:
            response = requests.post(
                self.url, json=payload, headers=headers, timeout=self.timeout, stream=True
            )
        except requests.ConnectionError:
            return ProviderResponse(success=False, error=f"Cannot reach {self.base_url}. Check network connectivity.")
        except requests.Timeout:
            return ProviderResponse(success=False, error="Image generation request timed out.")
        except requests.RequestException as e:
            return ProviderResponse(success=False, error=f"Image generation request failed: {e}")

        if not response.ok:
            try:
                detail = response.text[:200]
            finally:
                response.close()
            logger.warning("Image provider answered %s: %s", response.status_code, detail)
            return ProviderResponse(
                success=False,
                error=f"API request failed: {response.status_code}",
                http_code=response.status_code,
            )

        return ProviderResponse(success=True, data=response, http_code=response.status_code)
