from .directional_search import DirectionalSearch

__all__ = ["DirectionalSearch"]
