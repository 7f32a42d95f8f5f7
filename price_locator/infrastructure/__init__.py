"""
Инфраструктура Price Locator: адаптер HTML и трассировка.
"""

from .html_adapter import HtmlDocument, HtmlDocumentAdapter
from .tracing import LoguruTracer, NullTracer, RecordingTracer

__all__ = ["HtmlDocument", "HtmlDocumentAdapter", "LoguruTracer", "NullTracer", "RecordingTracer"]
