"""Recommendation services package."""

from watchcompass.services.recommendations.engine import RecommendationEngine
from watchcompass.services.recommendations.enrichment import attach_providers

__all__ = ["RecommendationEngine", "attach_providers"]
