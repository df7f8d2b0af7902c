"""WatchCompass: mood and time-budget movie recommendations on top of TMDB."""

__version__ = "0.1.0"
