"""
Исключения для домена Price Locator.
"""


class PriceLocatorError(Exception):
    """Базовое исключение для ошибок Price Locator."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Price Locator Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class PriceParseError(PriceLocatorError):
    """В тексте нет числового значения цены."""
    pass


class DocumentAdapterError(PriceLocatorError):
    """Ошибка построения дерева ContentNode из документа."""
    pass


class AnchorNotFoundError(DocumentAdapterError):
    """Селектор якоря не нашёл ни одного узла."""
    pass


class FingerprintConfigurationError(PriceLocatorError):
    """Ошибка конфигурации отпечатков маркетплейсов."""
    pass
