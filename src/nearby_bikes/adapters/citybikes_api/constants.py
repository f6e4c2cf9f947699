"""Constants for the CityBikes v2 API.

API Documentation: https://api.citybik.es/v2/
"""

CITYBIKES_API_URL = "https://api.citybik.es/v2"
NETWORKS_PATH = "/networks"
DEFAULT_HEADERS = {"Accept": "application/json"}
