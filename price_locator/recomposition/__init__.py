"""
Node Text Recomposer: склейка цен из соседних узлов.
"""

from .node_recomposer import WINDOW_OFFSETS, CombinedPrice, find_price_nodes, get_combined_price_string

__all__ = ["WINDOW_OFFSETS", "CombinedPrice", "find_price_nodes", "get_combined_price_string"]
