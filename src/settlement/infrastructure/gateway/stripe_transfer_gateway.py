"""TransferGateway backed by the Stripe Transfers REST API.

Talks to ``POST /v1/transfers`` directly over HTTP.  Every failure
(network error, timeout, non-2xx response, malformed body) is raised as a
TransferError so the executor can record it uniformly.
"""

from __future__ import annotations

import logging

import requests

from settlement.domain.exceptions import TransferError
from settlement.domain.gateway.transfer_gateway import (
    TransferGateway,
    TransferReceipt,
    TransferRequest,
)

logger = logging.getLogger(__name__)


class StripeTransferGateway(TransferGateway):

    def __init__(
        self,
        secret_key: str,
        api_base: str = "https://api.stripe.com",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def create_transfer(self, request: TransferRequest) -> TransferReceipt:
        if not self._secret_key:
            raise TransferError("Stripe secret key is not configured")

        logger.info(
            "Creating transfer of %d %s to %s (%s)",
            request.amount_minor_units, request.currency,
            request.destination_account_id, request.description,
        )
        try:
            response = self._session.post(
                f"{self._api_base}/v1/transfers",
                auth=(self._secret_key, ""),
                data={
                    "amount": request.amount_minor_units,
                    "currency": request.currency,
                    "destination": request.destination_account_id,
                    "description": request.description,
                },
                headers={"Idempotency-Key": request.idempotency_key},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise TransferError(f"Transfer request timed out after {self._timeout}s") from exc
        except requests.exceptions.RequestException as exc:
            raise TransferError(f"Transfer request failed: {exc}") from exc

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error("Stripe rejected transfer (%d): %s", response.status_code, message)
            raise TransferError(message)

        try:
            transfer_id = response.json()["id"]
        except (ValueError, KeyError, TypeError) as exc:
            raise TransferError("Stripe returned an unexpected transfer response") from exc
        return TransferReceipt(transfer_id=transfer_id)

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        fallback = f"Stripe API error: HTTP {response.status_code}"
        try:
            error = response.json().get("error", {})
        except ValueError:
            return fallback
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return fallback
