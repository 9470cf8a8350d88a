"""Abstract payment-processor port used by the payout executor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TransferRequest:
    amount_minor_units: int
    currency: str
    destination_account_id: str
    description: str
    idempotency_key: str


@dataclass(frozen=True)
class TransferReceipt:
    transfer_id: str


class TransferGateway(ABC):

    @abstractmethod
    def create_transfer(self, request: TransferRequest) -> TransferReceipt:
        """Move funds to a connected account.

        Raises TransferError on any provider rejection, network failure or
        timeout.
        """
