"""Configuration management for FieldRoute, read from the environment."""
import os

from dotenv import load_dotenv

load_dotenv()


def get_geocoder_config():
    """Get Nominatim geocoder configuration."""
    return {
        # Nominatim's usage policy requires an identifying user agent
        "user_agent": os.getenv("FIELDROUTE_USER_AGENT", "fieldroute_app"),
        "timeout": float(os.getenv("FIELDROUTE_GEOCODE_TIMEOUT", "10")),
    }


def get_overpass_config():
    """Get Overpass API configuration."""
    return {
        "url": os.getenv("FIELDROUTE_OVERPASS_URL", "https://overpass-api.de/api/interpreter"),
        "timeout": int(os.getenv("FIELDROUTE_OVERPASS_TIMEOUT", "25")),
    }


def get_search_radius_km():
    """Get the default lodging search radius."""
    return float(os.getenv("FIELDROUTE_SEARCH_RADIUS_KM", "10"))
