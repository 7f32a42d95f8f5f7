from .subtree_extractor import SubtreeExtractor

__all__ = ["SubtreeExtractor"]
