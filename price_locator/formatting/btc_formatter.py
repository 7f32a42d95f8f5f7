"""
Currency Formatter - перевод цены в долларах в BTC / sats.

Правила отображения:
- btc >= 0.01      -> "0.0247 BTC" (4 знака, хвостовые нули отбрасываются)
- sats >= 10 000   -> "12.3k sats" (один знак, ".0" отбрасывается)
- иначе            -> "1,000 sats" (целое, с разделителями тысяч)

Курс приходит снаружи; при курсе <= 0 возвращается заглушка.
"""

import math

from config.settings import (
    BTC_DECIMALS,
    BTC_DISPLAY_THRESHOLD,
    BTC_UNAVAILABLE_MESSAGE,
    KSATS_DISPLAY_THRESHOLD,
    SATS_PER_BTC,
)


def usd_to_btc_and_sats(usd: float, btc_usd_rate: float) -> str:
    """
    Args:
        usd: Цена в долларах
        btc_usd_rate: Курс BTC/USD

    Returns:
        Строка для отображения
    """
    if not btc_usd_rate or btc_usd_rate <= 0:
        return BTC_UNAVAILABLE_MESSAGE

    btc = usd / btc_usd_rate
    sats = btc * SATS_PER_BTC

    if btc >= BTC_DISPLAY_THRESHOLD:
        btc_str = f"{btc:.{BTC_DECIMALS}f}".rstrip("0").rstrip(".")
        return f"{btc_str} BTC"

    if sats >= KSATS_DISPLAY_THRESHOLD:
        k_sats = sats / 1000
        if k_sats.is_integer():
            k_str = f"{int(k_sats)}"
        else:
            k_str = f"{k_sats:.1f}"
            if k_str.endswith(".0"):
                k_str = k_str[:-2]
        return f"{k_str}k sats"

    # Половина округляется вверх
    whole_sats = int(math.floor(sats + 0.5))
    return f"{whole_sats:,} sats"
