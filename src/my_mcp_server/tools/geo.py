"""Location tools backed by remote providers: geocode, getWeather."""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Sequence

from ..content import ContentEnvelope
from ..errors import UpstreamFailure
from ..providers import NominatimClient, OpenMeteoClient
from ..schema import Field, NumberSchema, ObjectSchema, StringSchema
from . import ToolHandler

# WMO weather interpretation codes as returned by Open-Meteo
WEATHER_CODES: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

HOURLY_LIMIT = 24


def describe_weather(code: Any) -> str:
    """Map a WMO code to text, falling back to the literal code."""
    try:
        return WEATHER_CODES.get(code, f"Weather code: {code}")
    except TypeError:
        # unhashable codes
        return f"Weather code: {code}"


def _at(values: Sequence[Any], index: int, default: Any = None) -> Any:
    if not isinstance(values, list) or index >= len(values) or values[index] is None:
        return default
    return values[index]


def _hour_label(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%b %d %H:00")
    except (TypeError, ValueError):
        return str(timestamp)


class GeocodeTool(ToolHandler):
    """Tool resolving a place name or address to coordinates."""

    description = (
        "Return latitude and longitude for a city name or address. "
        "Uses the Nominatim OpenStreetMap API."
    )
    input_schema = ObjectSchema((
        Field(
            "query",
            StringSchema(),
            description='City name or address to look up (e.g. "Seoul", "New York")',
        ),
    ))

    def __init__(self, settings=None):
        super().__init__("geocode", settings)

    def _client(self) -> NominatimClient:
        return NominatimClient(
            self.settings.nominatim_url,
            self.settings.user_agent,
            timeout=self.settings.http_timeout,
        )

    async def run_tool(self, arguments) -> ContentEnvelope:
        query = arguments["query"]
        response = await asyncio.to_thread(self._client().search, query)

        if not response.success:
            raise UpstreamFailure(response.error, response.http_code)

        if not response.data:
            return ContentEnvelope.text(f'No results found for: "{query}"')

        result = response.data[0]
        try:
            lat = float(result["lat"])
            lon = float(result["lon"])
        except (KeyError, TypeError, ValueError):
            raise UpstreamFailure("Geocoding result is missing coordinates")
        display_name = result.get("display_name") or query

        return ContentEnvelope.text(
            f"Location: {display_name}\n"
            f"Latitude: {lat}\n"
            f"Longitude: {lon}\n"
            f"Coordinates: ({lat}, {lon})"
        )


class WeatherTool(ToolHandler):
    """Tool reporting current weather and the forecast for a coordinate."""

    description = (
        "Return current weather plus hourly and daily forecasts for a latitude/longitude "
        "and forecast horizon. Uses the Open-Meteo Weather API."
    )
    input_schema = ObjectSchema((
        Field("latitude", NumberSchema(), description="Latitude in degrees"),
        Field("longitude", NumberSchema(), description="Longitude in degrees"),
        Field(
            "forecastDays",
            NumberSchema(minimum=1, maximum=16, integer=True),
            required=False,
            default=7,
            description="Forecast horizon in days (1-16, default: 7)",
        ),
    ))

    def __init__(self, settings=None):
        super().__init__("getWeather", settings)

    def _client(self) -> OpenMeteoClient:
        return OpenMeteoClient(self.settings.open_meteo_url, timeout=self.settings.http_timeout)

    async def run_tool(self, arguments) -> ContentEnvelope:
        latitude = arguments["latitude"]
        longitude = arguments["longitude"]
        forecast_days = arguments["forecastDays"]

        response = await asyncio.to_thread(
            self._client().forecast, latitude, longitude, forecast_days
        )
        if not response.success:
            raise UpstreamFailure(response.error, response.http_code)

        data = response.data
        current = data.get("current_weather")
        if not current:
            raise UpstreamFailure("Weather data is unavailable.")
        hourly = data.get("hourly")
        daily = data.get("daily")
        for section in (current, hourly, daily):
            if section is not None and not isinstance(section, dict):
                raise UpstreamFailure("Weather data is malformed.")

        text = (
            "=== Current Weather ===\n"
            f"Location: latitude {latitude}, longitude {longitude}\n"
            f"Temperature: {current.get('temperature')}°C\n"
            f"Conditions: {describe_weather(current.get('weathercode'))}\n"
            f"Wind speed: {current.get('windspeed')} km/h\n"
            f"Wind direction: {current.get('winddirection')}°\n"
            f"{self._render_hourly(hourly)}"
            f"{self._render_daily(daily, forecast_days)}"
        )
        return ContentEnvelope.text(text)

    @staticmethod
    def _render_hourly(hourly: Dict[str, List[Any]]) -> str:
        if not hourly or not hourly.get("time") or not hourly.get("temperature_2m"):
            return ""

        times = hourly["time"]
        if not isinstance(times, list):
            raise UpstreamFailure("Weather data is malformed.")
        lines = ["\n\n=== Hourly Forecast (24h) ==="]
        for i in range(min(HOURLY_LIMIT, len(times))):
            temperature = _at(hourly["temperature_2m"], i, "N/A")
            precipitation = _at(hourly.get("precipitation"), i, 0)
            code = _at(hourly.get("weathercode"), i, 0)
            lines.append(
                f"{_hour_label(times[i])} | Temp: {temperature}°C | "
                f"Precip: {precipitation}mm | {describe_weather(code)}"
            )
        return "\n".join(lines) + "\n"

    @staticmethod
    def _render_daily(daily: Dict[str, List[Any]], forecast_days: int) -> str:
        if not daily or not daily.get("time"):
            return ""

        times = daily["time"]
        if not isinstance(times, list):
            raise UpstreamFailure("Weather data is malformed.")
        text = "\n\n=== Daily Forecast ===\n"
        for i in range(min(forecast_days, len(times))):
            text += (
                f"\n{times[i]}\n"
                f"  Conditions: {describe_weather(_at(daily.get('weathercode'), i, 'N/A'))}\n"
                f"  High: {_at(daily.get('temperature_2m_max'), i, 'N/A')}°C\n"
                f"  Low: {_at(daily.get('temperature_2m_min'), i, 'N/A')}°C\n"
                f"  Precipitation: {_at(daily.get('precipitation_sum'), i, 'N/A')}mm\n"
            )
        return text
