import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()

class Settings:
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # Comma separated, empty means allow all
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "")

    MAX_BODY_SIZE: int = int(os.getenv("MAX_BODY_SIZE", str(50 * 1024 * 1024)))

    # Nominatim reverse geocoding
    NOMINATIM_REVERSE_URL: str = os.getenv(
        "NOMINATIM_REVERSE_URL",
        "https://nominatim.openstreetmap.org/reverse"
    )
    NOMINATIM_USER_AGENT: str = os.getenv("NOMINATIM_USER_AGENT", "timeline-locator/1.0")
    GEOCODE_TIMEOUT_SECONDS: float = float(os.getenv("GEOCODE_TIMEOUT_SECONDS", "5.0"))

    # Google Maps search links
    GOOGLE_MAPS_SEARCH_URL: str = os.getenv(
        "GOOGLE_MAPS_SEARCH_URL",
        "https://www.google.com/maps/search/"
    )

    # Minimum sign-stripped digit count for an E7 value to be decodable
    E7_MIN_DIGITS: int = int(os.getenv("E7_MIN_DIGITS", "5"))

settings = Settings()
