"""
Geocoding and weather tool tests (network stubbed with unittest.mock)
"""

from unittest.mock import patch

import pytest
import requests

from my_mcp_server.tools.geo import WEATHER_CODES, describe_weather

SEOUL = [
    {
        "lat": "37.5666791",
        "lon": "126.9782914",
        "display_name": "Seoul, South Korea",
    }
]

FORECAST = {
    "current_weather": {
        "temperature": 18.4,
        "weathercode": 2,
        "windspeed": 7.2,
        "winddirection": 250,
    },
    "hourly": {
        "time": [f"2025-10-19T{h:02d}:00" for h in range(24)] + ["2025-10-20T00:00"],
        "temperature_2m": [10.0 + h * 0.5 for h in range(25)],
        "precipitation": [0.0] * 25,
        "weathercode": [0] * 24 + [1234],
    },
    "daily": {
        "time": ["2025-10-19", "2025-10-20", "2025-10-21"],
        "temperature_2m_max": [21.0, 19.5, 17.2],
        "temperature_2m_min": [9.1, 8.0, 7.4],
        "precipitation_sum": [0.0, 2.3, 5.1],
        "weathercode": [0, 61, 1234],
    },
}


class TestGeocode:
    @pytest.mark.asyncio
    async def test_found(self, dispatcher, make_response):
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, SEOUL)) as get:
            envelope = await dispatcher.invoke("geocode", {"query": "Seoul"})

        text = envelope.first_text
        assert "Location: Seoul, South Korea" in text
        assert "Latitude: 37.5666791" in text
        assert "Coordinates: (37.5666791, 126.9782914)" in text

        _, kwargs = get.call_args
        assert kwargs["params"] == {
            "q": "Seoul",
            "format": "jsonv2",
            "limit": "1",
            "addressdetails": "1",
        }
        assert kwargs["headers"]["User-Agent"] == "MCP-Server/1.0.0"

    @pytest.mark.asyncio
    async def test_empty_result_is_not_found_message(self, dispatcher, make_response):
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, [])):
            envelope = await dispatcher.invoke("geocode", {"query": "Atlantis"})

        assert envelope.first_text == 'No results found for: "Atlantis"'

    @pytest.mark.asyncio
    async def test_display_name_falls_back_to_query(self, dispatcher, make_response):
        result = [{"lat": "1.5", "lon": "2.5"}]
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, result)):
            envelope = await dispatcher.invoke("geocode", {"query": "Somewhere"})

        assert "Location: Somewhere" in envelope.first_text

    @pytest.mark.asyncio
    async def test_non_2xx_reports_status(self, dispatcher, make_response):
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(503)):
            envelope = await dispatcher.invoke("geocode", {"query": "Seoul"})

        assert "503" in envelope.first_text
        assert envelope.first_text.startswith("❌ Error:")

    @pytest.mark.asyncio
    async def test_connection_error(self, dispatcher):
        with patch(
            "my_mcp_server.providers.requests.get",
            side_effect=requests.ConnectionError("refused"),
        ):
            envelope = await dispatcher.invoke("geocode", {"query": "Seoul"})

        assert "Cannot reach" in envelope.first_text


class TestWeather:
    @pytest.mark.asyncio
    async def test_renders_all_blocks(self, dispatcher, make_response):
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, FORECAST)) as get:
            envelope = await dispatcher.invoke(
                "getWeather", {"latitude": 37.57, "longitude": 126.98, "forecastDays": 2}
            )

        text = envelope.first_text
        assert "=== Current Weather ===" in text
        assert "Temperature: 18.4°C" in text
        assert "Conditions: Partly cloudy" in text
        assert "Wind speed: 7.2 km/h" in text
        assert "=== Hourly Forecast (24h) ===" in text
        assert "=== Daily Forecast ===" in text

        # first 24 hourly entries only
        assert "Oct 19 23:00" in text
        assert "Oct 20 00:00" not in text

        # forecastDays bounds the daily block
        assert "2025-10-20" in text
        assert "2025-10-21" not in text

        _, kwargs = get.call_args
        assert kwargs["params"]["forecast_days"] == "2"
        assert kwargs["params"]["current_weather"] == "true"
        assert kwargs["params"]["timezone"] == "auto"

    @pytest.mark.asyncio
    async def test_default_forecast_days(self, dispatcher, make_response):
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, FORECAST)) as get:
            await dispatcher.invoke("getWeather", {"latitude": 0, "longitude": 0})

        _, kwargs = get.call_args
        assert kwargs["params"]["forecast_days"] == "7"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, 17, 3.5, "7"])
    async def test_out_of_range_days_never_reach_network(self, dispatcher, days):
        with patch("my_mcp_server.providers.requests.get") as get:
            envelope = await dispatcher.invoke(
                "getWeather", {"latitude": 0, "longitude": 0, "forecastDays": days}
            )

        get.assert_not_called()
        assert "forecastDays" in envelope.first_text

    @pytest.mark.asyncio
    async def test_missing_current_weather(self, dispatcher, make_response):
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, {"hourly": {}})):
            envelope = await dispatcher.invoke("getWeather", {"latitude": 0, "longitude": 0})

        assert "Weather data is unavailable" in envelope.first_text

    @pytest.mark.asyncio
    async def test_upstream_status(self, dispatcher, make_response):
        with patch("my_mcp_server.providers.requests.get", return_value=make_response(500)):
            envelope = await dispatcher.invoke("getWeather", {"latitude": 0, "longitude": 0})

        assert "API request failed: 500" in envelope.first_text


def test_unmapped_weather_code_falls_back():
    assert describe_weather(1234) == "Weather code: 1234"
    assert describe_weather(0) == WEATHER_CODES[0]


@pytest.mark.asyncio
async def test_geocode_result_without_coordinates(dispatcher, make_response):
    with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, [{"display_name": "x"}])):
        envelope = await dispatcher.invoke("geocode", {"query": "x"})

    assert envelope.first_text == "❌ Error: Geocoding result is missing coordinates"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"current_weather": "sunny"},
        {"current_weather": FORECAST["current_weather"], "hourly": ["x"]},
        {"current_weather": FORECAST["current_weather"], "daily": "2025-10-19"},
        {"current_weather": FORECAST["current_weather"], "hourly": {"time": "x", "temperature_2m": [1.0]}},
    ],
)
async def test_malformed_weather_sections(dispatcher, make_response, payload):
    with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, payload)):
        envelope = await dispatcher.invoke("getWeather", {"latitude": 0, "longitude": 0})

    assert envelope.first_text == "❌ Error: Weather data is malformed."


@pytest.mark.asyncio
async def test_list_weather_code_is_rendered_literally(dispatcher, make_response):
    payload = {"current_weather": {"temperature": 1.0, "weathercode": [1]}}
    with patch("my_mcp_server.providers.requests.get", return_value=make_response(200, payload)):
        envelope = await dispatcher.invoke("getWeather", {"latitude": 0, "longitude": 0})

    assert "Conditions: Weather code: [1]" in envelope.first_text


def test_unhashable_weather_code():
    assert describe_weather([1]) == "Weather code: [1]"
    assert describe_weather({"code": 1}) == "Weather code: {'code': 1}"
