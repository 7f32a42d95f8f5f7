"""
Unit-тесты форматирования цены в BTC / sats.
"""

import pytest

from price_locator.formatting.btc_formatter import usd_to_btc_and_sats


class TestUsdToBtcAndSats:

    @pytest.mark.parametrize("usd,rate,expected", [
        (500, 50000, "0.01 BTC"),
        (1000, 40000, "0.025 BTC"),
        (25000, 50000, "0.5 BTC"),
        (100000, 50000, "2 BTC"),
    ])
    def test_btc_display(self, usd, rate, expected):
        """От 0.01 BTC - до 4 знаков без хвостовых нулей."""
        assert usd_to_btc_and_sats(usd, rate) == expected

    @pytest.mark.parametrize("usd,rate,expected", [
        (1, 10000, "10k sats"),
        (5, 40000, "12.5k sats"),
        (100, 30000, "333.3k sats"),
    ])
    def test_kilo_sats_display(self, usd, rate, expected):
        """От 10 000 sats - тысячи с одним знаком."""
        assert usd_to_btc_and_sats(usd, rate) == expected

    @pytest.mark.parametrize("usd,rate,expected", [
        (1, 100000, "1,000 sats"),
        (0.5, 100000, "500 sats"),
        (0.01, 100000, "10 sats"),
    ])
    def test_sats_display(self, usd, rate, expected):
        """Меньше 10 000 sats - целое число с разделителями тысяч."""
        assert usd_to_btc_and_sats(usd, rate) == expected

    @pytest.mark.parametrize("rate", [0, -1, None])
    def test_unavailable_rate(self, rate):
        """Курс <= 0 - заглушка вместо исключения."""
        assert usd_to_btc_and_sats(10, rate) == "BTC price unavailable"
