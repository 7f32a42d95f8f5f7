from .btc_formatter import usd_to_btc_and_sats

__all__ = ["usd_to_btc_and_sats"]
