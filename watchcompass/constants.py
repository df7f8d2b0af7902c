"""Application constants - centralized configuration values."""

from datetime import timedelta

# =============================================================================
# External API URLs
# =============================================================================
TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
TMDB_POSTER_SIZE = "w500"
TMDB_BACKDROP_SIZE = "w780"

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
API_TIMEOUT_DEFAULT = 10.0

# =============================================================================
# HTTP connection pool
# =============================================================================
HTTP_MAX_CONNECTIONS = 20
HTTP_MAX_KEEPALIVE_CONNECTIONS = 10
HTTP_KEEPALIVE_EXPIRY = 30.0

# =============================================================================
# Catalog
# =============================================================================
DEFAULT_COUNTRY_FALLBACK = "US"
GENRE_LOOKUP_TTL = timedelta(hours=6)
GENRES_CACHE_KEY = "genres"
CACHE_STORE_MAX_SIZE = 1000

# =============================================================================
# Recommendations
# =============================================================================
TIME_BUDGET_MIN_MINUTES = 1
TIME_BUDGET_MAX_MINUTES = 600
RECOMMENDATION_CANDIDATE_WINDOW = 5
MAX_RECOMMENDATIONS = 3
MAX_AVOID_GENRES = 10
MAX_REASON_GENRES = 2
FALLBACK_QUERY = "movie"

# =============================================================================
# Status codes used when a transport failure has no HTTP response
# =============================================================================
HTTP_STATUS_REQUEST_TIMEOUT = 408
HTTP_STATUS_SERVICE_UNAVAILABLE = 503
