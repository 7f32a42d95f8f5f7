"""
Реализации ITracer.

LoguruTracer пишет события в loguru на уровне DEBUG,
NullTracer их отбрасывает (ядро не зависит от логирования).
"""

from loguru import logger

from ..domain.interfaces import ITracer


class LoguruTracer(ITracer):
    """Трассировка через loguru."""

    def trace(self, component: str, message: str, **data) -> None:
        if data:
            details = ", ".join(f"{key}={value}" for key, value in data.items())
            logger.debug(f"[{component}] {message} ({details})")
        else:
            logger.debug(f"[{component}] {message}")


class NullTracer(ITracer):
    """Трассировка отключена."""

    def trace(self, component: str, message: str, **data) -> None:
        return None


class RecordingTracer(ITracer):
    """Сохраняет события в памяти (для отладки и тестов)."""

    def __init__(self):
        self.events = []

    def trace(self, component: str, message: str, **data) -> None:
        self.events.append((component, message, data))

    def messages(self, component: str = None) -> list:
        return [msg for comp, msg, _ in self.events if component is None or comp == component]
