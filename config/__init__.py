"""Настройки проекта Price Locator."""
