"""
Tests for the operation-to-endpoint mapping on AmazonPayClient.
"""

import base64
import hashlib
import json
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from amazon_pay_api import AmazonPayClient, ConfigurationError, create_client, generate_button_signature
from amazon_pay_api.core.disputes import DISPUTE_FILING_REASON, DISPUTE_STATE, DisputeOperations

PAYLOAD = {"key": "value"}
HEADERS = {"Custom-Header": "HeaderValue"}
QUERY = {"b": "value_b", "a": "value_a"}


@pytest.fixture
def client(config):
    return AmazonPayClient(config)


OPERATIONS = [
    ("create_merchant_account", (PAYLOAD,), "merchantAccounts", "POST"),
    ("update_merchant_account", ("12345", PAYLOAD), "merchantAccounts/12345", "PATCH"),
    ("merchant_account_claim", ("12345", PAYLOAD), "merchantAccounts/12345/claim", "POST"),
    ("create_checkout_session", (PAYLOAD,), "checkoutSessions", "POST"),
    ("update_checkout_session", ("CS1", PAYLOAD), "checkoutSessions/CS1", "PATCH"),
    ("complete_checkout_session", ("CS1", PAYLOAD), "checkoutSessions/CS1/complete", "POST"),
    ("finalize_checkout_session", ("CS1", PAYLOAD), "checkoutSessions/CS1/finalize", "POST"),
    ("update_charge_permission", ("CP1", PAYLOAD), "chargePermissions/CP1", "PATCH"),
    ("close_charge_permission", ("CP1", PAYLOAD), "chargePermissions/CP1/close", "DELETE"),
    ("create_charge", (PAYLOAD,), "charges", "POST"),
    ("capture_charge", ("C1", PAYLOAD), "charges/C1/capture", "POST"),
    ("cancel_charge", ("C1", PAYLOAD), "charges/C1/cancel", "DELETE"),
    ("create_refund", (PAYLOAD,), "refunds", "POST"),
    ("create_report", (PAYLOAD,), "reports", "POST"),
    ("create_dispute", (PAYLOAD,), "disputes", "POST"),
    ("update_dispute", ("D1", PAYLOAD), "disputes/D1", "PATCH"),
    ("contest_dispute", ("D1", PAYLOAD), "disputes/D1/contest", "POST"),
    ("upload_file", (PAYLOAD,), "files", "POST"),
]

LOOKUPS = [
    ("get_buyer", ("token",), "buyers/token"),
    ("get_checkout_session", ("CS1",), "checkoutSessions/CS1"),
    ("get_charge_permission", ("CP1",), "chargePermissions/CP1"),
    ("get_charge", ("C1",), "charges/C1"),
    ("get_refund", ("R1",), "refunds/R1"),
    ("get_report_by_id", ("RP1",), "reports/RP1"),
    ("get_report_document", ("DOC1",), "report-documents/DOC1"),
    ("get_report_schedule_by_id", ("RS1",), "report-schedules/RS1"),
]

LISTINGS = [
    ("get_reports", "reports"),
    ("get_report_schedules", "report-schedules"),
    ("get_disbursements", "disbursements"),
]


@pytest.mark.parametrize("name, args, fragment, method", OPERATIONS)
def test_operations_with_payload(client, name, args, fragment, method):
    with patch.object(client, "api_call", return_value="response") as api_call:
        result = getattr(client, name)(*args, headers=HEADERS)

    assert result == "response"
    api_call.assert_called_once_with(fragment, method, payload=PAYLOAD, headers=HEADERS)


@pytest.mark.parametrize("name, args, fragment", LOOKUPS)
def test_lookup_operations(client, name, args, fragment):
    with patch.object(client, "api_call", return_value="response") as api_call:
        assert getattr(client, name)(*args, headers=HEADERS) == "response"

    api_call.assert_called_once_with(fragment, "GET", headers=HEADERS)


@pytest.mark.parametrize("name, fragment", LISTINGS)
def test_listing_operations_forward_query(client, name, fragment):
    with patch.object(client, "api_call", return_value="response") as api_call:
        getattr(client, name)(headers=HEADERS, query_params=QUERY)

    api_call.assert_called_once_with(fragment, "GET", headers=HEADERS, query_params=QUERY)


def test_report_schedule_create_and_cancel(client):
    with patch.object(client, "api_call") as api_call:
        client.create_report_schedule(PAYLOAD, headers=HEADERS, query_params=QUERY)
        client.cancel_report_schedule("RS1", headers=HEADERS)

    assert api_call.call_args_list[0].args == ("report-schedules", "POST")
    assert api_call.call_args_list[0].kwargs == {
        "payload": PAYLOAD,
        "headers": HEADERS,
        "query_params": QUERY,
    }
    assert api_call.call_args_list[1].args == ("report-schedules/RS1", "DELETE")


def test_client_exposes_resolved_session(client):
    assert client.base_url == "https://pay-api.amazon.jp/sandbox/v2/"
    assert client.context.public_key_id == "dummy_public_key"


def test_invalid_config_fails_at_construction():
    with pytest.raises(ConfigurationError, match="public_key_id, private_key"):
        AmazonPayClient({"region": "jp"})


def _verify_button(rsa_key, signature, message):
    digest = hashlib.sha256(message.encode("utf-8")).hexdigest()
    rsa_key.public_key().verify(
        base64.b64decode(signature),
        f"AMZN-PAY-RSASSA-PSS-V2\n{digest}".encode("utf-8"),
        padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=32),
        hashes.SHA256(),
    )


def test_button_signature_for_string_payload(client, rsa_key):
    payload = '{"storeId":"amzn1.application-oa2-client.xxx"}'
    _verify_button(rsa_key, client.generate_button_signature(payload), payload)


def test_button_signature_for_mapping_payload(client, rsa_key):
    payload = {"storeId": "amzn1.application-oa2-client.xxx", "webCheckoutDetails": {"a": 1}}
    signature = client.generate_button_signature(payload)
    _verify_button(rsa_key, signature, json.dumps(payload, separators=(",", ":")))


def test_generate_button_signature_helper(config, rsa_key):
    signature = generate_button_signature("payload", config=config)
    _verify_button(rsa_key, signature, "payload")


def test_create_client_from_keyword_arguments(private_key_pem):
    client = create_client(
        env_file=None,
        base={},
        region="na",
        public_key_id="LIVE-AKEY",
        private_key=private_key_pem,
        sandbox=True,
    )
    assert client.base_url == "https://pay-api.amazon.com/live/v2/"


def test_create_client_rejects_config_plus_parameters(config):
    with pytest.raises(ValueError, match="not both"):
        create_client(config=config, region="eu")


def test_dispute_vocabularies_are_read_only():
    assert DISPUTE_FILING_REASON["PRODUCT_NOT_RECEIVED"] == "ProductNotReceived"
    assert DISPUTE_STATE["UNDER_REVIEW"] == "UnderReview"
    with pytest.raises(TypeError):
        DISPUTE_STATE["NEW"] = "New"


def test_dispute_mixin_requires_a_transport():
    with pytest.raises(TypeError, match="api_call"):
        DisputeOperations()


def test_dispute_mixin_routes_through_subclass_api_call():
    class Recorder(DisputeOperations):
        def __init__(self):
            self.calls = []

        def api_call(self, url_fragment, method, **kwargs):
            self.calls.append((url_fragment, method, kwargs))
            return "response"

    recorder = Recorder()
    assert recorder.contest_dispute("D1", PAYLOAD) == "response"
    assert recorder.calls == [("disputes/D1/contest", "POST", {"payload": PAYLOAD, "headers": None})]
