"""
Operations used by payment service providers to manage chargeback disputes.
"""

from __future__ import annotations

import abc
from types import MappingProxyType
from typing import Any, Mapping, Optional

import requests

from .constants import DISPUTES_URL, FILES_URL, PATCH, POST

__all__ = [
    "DISPUTE_FILING_REASON",
    "DISPUTE_REASON_CODE",
    "DISPUTE_RESOLUTION",
    "DISPUTE_STATE",
    "EVIDENCE_TYPE",
    "DisputeOperations",
]

DISPUTE_FILING_REASON = MappingProxyType(
    {
        "PRODUCT_NOT_RECEIVED": "ProductNotReceived",
        "PRODUCT_UNACCEPTABLE": "ProductUnacceptable",
        "PRODUCT_NO_LONGER_NEEDED": "ProductNoLongerNeeded",
        "CREDIT_NOT_PROCESSED": "CreditNotProcessed",
        "OVERCHARGED": "Overcharged",
        "DUPLICATE_CHARGE": "DuplicateCharge",
        "SUBSCRIPTION_CANCELLED": "SubscriptionCancelled",
        "UNRECOGNIZED": "Unrecognized",
        "FRAUDULENT": "Fraudulent",
        "OTHER": "Other",
    }
)

DISPUTE_REASON_CODE = MappingProxyType(
    {
        "MERCHANT_RESPONSE_REQUIRED": "MerchantResponseRequired",
        "MERCHANT_ADDITIONAL_EVIDENCES_REQUIRED": "MerchantAdditionalEvidencesRequired",
        "BUYER_ADDITIONAL_EVIDENCES_REQUIRED": "BuyerAdditionalEvidencesRequired",
        "MERCHANT_ACCEPTED_DISPUTE": "MerchantAcceptedDispute",
        "MERCHANT_RESPONSE_DEADLINE_EXPIRED": "MerchantResponseDeadlineExpired",
        "BUYER_CANCELLED": "BuyerCancelled",
        "INVESTIGATOR_RESOLVED": "InvestigatorResolved",
        "AUTO_RESOLVED": "AutoResolved",
        "CHARGEBACK_FILED": "ChargebackFiled",
    }
)

DISPUTE_RESOLUTION = MappingProxyType(
    {
        "BUYER_WON": "BuyerWon",
        "MERCHANT_WON": "MerchantWon",
        "NO_FAULT": "NoFault",
    }
)

DISPUTE_STATE = MappingProxyType(
    {
        "UNDER_REVIEW": "UnderReview",
        "ACTION_REQUIRED": "ActionRequired",
        "RESOLVED": "Resolved",
        "CLOSED": "Closed",
    }
)

EVIDENCE_TYPE = MappingProxyType(
    {
        "PRODUCT_DESCRIPTION": "ProductDescription",
        "RECEIPT": "Receipt",
        "CANCELLATION_POLICY": "CancellationPolicy",
        "CUSTOMER_SIGNATURE": "CustomerSignature",
        "TRACKING_NUMBER": "TrackingNumber",
        "OTHER": "Other",
    }
)


class DisputeOperations(abc.ABC):
    """
    Mixin for :class:`~amazon_pay_api.core.client.AmazonPayClient`.

    ``create_dispute`` and ``upload_file`` require an
    ``x-amz-pay-idempotency-key`` header.
    """

    @abc.abstractmethod
    def api_call(
        self,
        url_fragment: str,
        method: str,
        *,
        payload: Any = "",
        headers: Optional[Mapping[str, str]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> requests.Response:
        """Send one signed call; supplied by the concrete client."""

    def create_dispute(
        self, payload: Any, *, headers: Optional[Mapping[str, str]] = None
    ) -> requests.Response:
        return self.api_call(DISPUTES_URL, POST, payload=payload, headers=headers)

    def update_dispute(
        self, dispute_id: str, payload: Any, *, headers: Optional[Mapping[str, str]] = None
    ) -> requests.Response:
        return self.api_call(f"{DISPUTES_URL}/{dispute_id}", PATCH, payload=payload, headers=headers)

    def contest_dispute(
        self, dispute_id: str, payload: Any, *, headers: Optional[Mapping[str, str]] = None
    ) -> requests.Response:
        """Submit evidence to contest a dispute within its dispute window."""
        return self.api_call(
            f"{DISPUTES_URL}/{dispute_id}/contest", POST, payload=payload, headers=headers
        )

    def upload_file(
        self, payload: Any, *, headers: Optional[Mapping[str, str]] = None
    ) -> requests.Response:
        return self.api_call(FILES_URL, POST, payload=payload, headers=headers)
