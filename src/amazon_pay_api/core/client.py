"""
Client exposing one method per payment API operation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

import requests

from .canonical import serialize_payload
from .config import ClientConfig, SessionContext, resolve_session
from .constants import (
    BUYERS_URL,
    CHARGE_PERMISSIONS_URL,
    CHARGES_URL,
    CHECKOUT_SESSIONS_URL,
    DELETE,
    DISBURSEMENTS_URL,
    GET,
    MERCHANT_ACCOUNTS_URL,
    PATCH,
    POST,
    REFUNDS_URL,
    REPORT_DOCUMENTS_URL,
    REPORT_SCHEDULES_URL,
    REPORTS_URL,
)
from .disputes import DisputeOperations
from .executor import RequestExecutor
from .signing import RequestSigner

__all__ = ["AmazonPayClient"]

Headers = Optional[Mapping[str, str]]
Query = Optional[Mapping[str, Any]]


class AmazonPayClient(DisputeOperations):
    """
    Thin mapping of business operations onto signed API calls.

    Every method returns the :class:`requests.Response` of the final attempt;
    non-2xx responses are returned rather than raised.
    """

    def __init__(
        self,
        config: Union[ClientConfig, Mapping[str, Any]],
        *,
        session: Optional[requests.Session] = None,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.context: SessionContext = resolve_session(config)
        self.signer = RequestSigner.from_context(self.context)
        executor_options: dict = {}
        if sleep is not None:
            executor_options["sleep"] = sleep
        if clock is not None:
            executor_options["clock"] = clock
        self.executor = RequestExecutor(
            self.context,
            session=session,
            signer=self.signer,
            **executor_options,
        )

    @property
    def base_url(self) -> str:
        return self.context.base_url

    @property
    def session(self) -> requests.Session:
        return self.executor.session

    def api_call(
        self,
        url_fragment: str,
        method: str,
        *,
        payload: Any = "",
        headers: Headers = None,
        query_params: Query = None,
    ) -> requests.Response:
        return self.executor.execute(
            method,
            url_fragment,
            payload=payload,
            headers=headers,
            query_params=query_params,
        )

    def generate_button_signature(self, payload: Any) -> str:
        """
        Sign a checkout button payload given as a JSON string or a mapping.
        """
        return self.signer.sign(serialize_payload(payload))

    # Merchant accounts

    def create_merchant_account(self, payload: Any, *, headers: Headers = None) -> requests.Response:
        return self.api_call(MERCHANT_ACCOUNTS_URL, POST, payload=payload, headers=headers)

    def update_merchant_account(
        self, merchant_account_id: str, payload: Any, *, headers: Headers = None
    ) -> requests.Response:
        """Requires an ``x-amz-pay-authToken`` header."""
        return self.api_call(
            f"{MERCHANT_ACCOUNTS_URL}/{merchant_account_id}", PATCH, payload=payload, headers=headers
        )

    def merchant_account_claim(
        self, merchant_account_id: str, payload: Any, *, headers: Headers = None
    ) -> requests.Response:
        return self.api_call(
            f"{MERCHANT_ACCOUNTS_URL}/{merchant_account_id}/claim", POST, payload=payload, headers=headers
        )

    def get_buyer(self, buyer_token: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{BUYERS_URL}/{buyer_token}", GET, headers=headers)

    # Checkout sessions

    def create_checkout_session(self, payload: Any, *, headers: Headers = None) -> requests.Response:
        return self.api_call(CHECKOUT_SESSIONS_URL, POST, payload=payload, headers=headers)

    def get_checkout_session(self, checkout_session_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{CHECKOUT_SESSIONS_URL}/{checkout_session_id}", GET, headers=headers)

    def update_checkout_session(
        self, checkout_session_id: str, payload: Any, *, headers: Headers = None
    ) -> requests.Response:
        return self.api_call(
            f"{CHECKOUT_SESSIONS_URL}/{checkout_session_id}", PATCH, payload=payload, headers=headers
        )

    def complete_checkout_session(
        self, checkout_session_id: str, payload: Any, *, headers: Headers = None
    ) -> requests.Response:
        return self.api_call(
            f"{CHECKOUT_SESSIONS_URL}/{checkout_session_id}/complete", POST, payload=payload, headers=headers
        )

    def finalize_checkout_session(
        self, checkout_session_id: str, payload: Any, *, headers: Headers = None
    ) -> requests.Response:
        return self.api_call(
            f"{CHECKOUT_SESSIONS_URL}/{checkout_session_id}/finalize", POST, payload=payload, headers=headers
        )

    # Charge permissions

    def get_charge_permission(self, charge_permission_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{CHARGE_PERMISSIONS_URL}/{charge_permission_id}", GET, headers=headers)

    def update_charge_permission(
        self, charge_permission_id: str, payload: Any, *, headers: Headers = None
    ) -> requests.Response:
        return self.api_call(
            f"{CHARGE_PERMISSIONS_URL}/{charge_permission_id}", PATCH, payload=payload, headers=headers
        )

    def close_charge_permission(
        self, charge_permission_id: str, payload: Any, *, headers: Headers = None
    ) -> requests.Response:
        return self.api_call(
            f"{CHARGE_PERMISSIONS_URL}/{charge_permission_id}/close", DELETE, payload=payload, headers=headers
        )

    # Charges

    def create_charge(self, payload: Any, *, headers: Headers = None) -> requests.Response:
        return self.api_call(CHARGES_URL, POST, payload=payload, headers=headers)

    def get_charge(self, charge_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{CHARGES_URL}/{charge_id}", GET, headers=headers)

    def capture_charge(self, charge_id: str, payload: Any, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{CHARGES_URL}/{charge_id}/capture", POST, payload=payload, headers=headers)

    def cancel_charge(self, charge_id: str, payload: Any, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{CHARGES_URL}/{charge_id}/cancel", DELETE, payload=payload, headers=headers)

    # Refunds

    def create_refund(self, payload: Any, *, headers: Headers = None) -> requests.Response:
        return self.api_call(REFUNDS_URL, POST, payload=payload, headers=headers)

    def get_refund(self, refund_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{REFUNDS_URL}/{refund_id}", GET, headers=headers)

    # Reports

    def get_reports(self, *, headers: Headers = None, query_params: Query = None) -> requests.Response:
        return self.api_call(REPORTS_URL, GET, headers=headers, query_params=query_params)

    def get_report_by_id(self, report_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{REPORTS_URL}/{report_id}", GET, headers=headers)

    def create_report(self, payload: Any, *, headers: Headers = None) -> requests.Response:
        return self.api_call(REPORTS_URL, POST, payload=payload, headers=headers)

    def get_report_document(self, report_document_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{REPORT_DOCUMENTS_URL}/{report_document_id}", GET, headers=headers)

    def get_report_schedules(self, *, headers: Headers = None, query_params: Query = None) -> requests.Response:
        return self.api_call(REPORT_SCHEDULES_URL, GET, headers=headers, query_params=query_params)

    def get_report_schedule_by_id(self, report_schedule_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{REPORT_SCHEDULES_URL}/{report_schedule_id}", GET, headers=headers)

    def create_report_schedule(
        self, payload: Any, *, headers: Headers = None, query_params: Query = None
    ) -> requests.Response:
        return self.api_call(
            REPORT_SCHEDULES_URL, POST, payload=payload, headers=headers, query_params=query_params
        )

    def cancel_report_schedule(self, report_schedule_id: str, *, headers: Headers = None) -> requests.Response:
        return self.api_call(f"{REPORT_SCHEDULES_URL}/{report_schedule_id}", DELETE, headers=headers)

    def get_disbursements(self, *, headers: Headers = None, query_params: Query = None) -> requests.Response:
        return self.api_call(DISBURSEMENTS_URL, GET, headers=headers, query_params=query_params)
