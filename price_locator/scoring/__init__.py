from .confidence_scorer import ConfidenceScorer

__all__ = ["ConfidenceScorer"]
