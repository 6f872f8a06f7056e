"""
Read-only BscScan API client for BNB / BEP20-USDT balances and incoming transfers.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import httpx

from referralhub.config import settings

logger = logging.getLogger(__name__)

WEI_PER_UNIT = Decimal(10) ** 18  # BNB and BSC USDT both use 18 decimals


class BscScanError(Exception):
    pass


def from_wei(raw: Any, places: int) -> str:
    value = Decimal(str(raw)) / WEI_PER_UNIT
    return f"{value:.{places}f}"


class BscScanClient:
    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        usdt_contract: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_url = api_url or settings.bscscan_api_url
        self.api_key = api_key if api_key is not None else settings.bscscan_api_key
        self.usdt_contract = usdt_contract or settings.usdt_contract_address
        self.timeout = timeout or settings.bscscan_timeout_seconds
        self._http = http_client
        if not self.api_key:
            logger.warning("BscScan API key not set; public endpoint rate limits apply")

    def _get(self, params: Dict[str, Any], timeout: Optional[float] = None) -> Dict[str, Any]:
        query = {**params, "apikey": self.api_key}
        if self._http is not None:
            response = self._http.get(self.api_url, params=query, timeout=timeout or self.timeout)
        else:
            with httpx.Client(timeout=timeout or self.timeout) as client:
                response = client.get(self.api_url, params=query)
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            # rate-limit and gateway pages come back as HTML with a 200
            raise BscScanError(f"Unexpected BscScan response: {response.text[:80]!r}") from e
        if not isinstance(data, dict):
            raise BscScanError("Unexpected BscScan response shape")
        return data

    def get_bnb_balance(self, address: str) -> str:
        """BNB balance with 6 decimals"""
        try:
            data = self._get({
                "module": "account",
                "action": "balance",
                "address": address,
                "tag": "latest",
            })
        except (httpx.HTTPError, BscScanError) as e:
            raise BscScanError(f"Failed to get BNB balance: {e}") from e
        if data.get("status") != "1":
            raise BscScanError(f"Failed to get BNB balance: {data.get('message') or 'unknown error'}")
        return from_wei(data["result"], 6)

    def get_usdt_balance(self, address: str) -> str:
        """USDT token balance with 2 decimals"""
        try:
            data = self._get({
                "module": "account",
                "action": "tokenbalance",
                "contractaddress": self.usdt_contract,
                "address": address,
                "tag": "latest",
            })
        except (httpx.HTTPError, BscScanError) as e:
            raise BscScanError(f"Failed to get USDT balance: {e}") from e
        if data.get("status") != "1":
            raise BscScanError(f"Failed to get USDT balance: {data.get('message') or 'unknown error'}")
        return from_wei(data["result"], 2)

    def get_usdt_transfers(
        self,
        address: str,
        start_block: int = 0,
        end_block: int = 999999999,
        page: int = 1,
        offset: int = 100,
    ) -> List[Dict[str, Any]]:
        """Incoming USDT transfers to address, newest first. Lookup failures yield an empty list."""
        try:
            data = self._get({
                "module": "account",
                "action": "tokentx",
                "contractaddress": self.usdt_contract,
                "address": address,
                "startblock": start_block,
                "endblock": end_block,
                "page": page,
                "offset": offset,
                "sort": "desc",
            }, timeout=self.timeout * 1.5)
        except (httpx.HTTPError, BscScanError) as e:
            logger.error(f"Error getting USDT transfers for {address}: {e}")
            return []
        if data.get("status") != "1":
            logger.warning(f"No USDT transfers for {address}: {data.get('message')}")
            return []
        return [
            tx for tx in data.get("result") or []
            if str(tx.get("to", "")).lower() == address.lower()
        ]


def get_bscscan_client() -> BscScanClient:
    return BscScanClient()
