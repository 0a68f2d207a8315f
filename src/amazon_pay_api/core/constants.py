"""
Fixed literals shared by the signing and dispatch helpers.
"""

from __future__ import annotations

from types import MappingProxyType

SDK_TYPE = "amazon-pay-api-sdk-python"
SDK_VERSION = "2.0.0"
API_VERSION = "v2"

API_ENDPOINTS = MappingProxyType(
    {
        "na": "pay-api.amazon.com",
        "eu": "pay-api.amazon.eu",
        "jp": "pay-api.amazon.jp",
    }
)

LIVE = "live"
SANDBOX = "sandbox"
LIVE_KEY_PREFIX = "LIVE-"
SANDBOX_KEY_PREFIX = "SANDBOX-"

GET = "GET"
POST = "POST"
PUT = "PUT"
PATCH = "PATCH"
DELETE = "DELETE"
METHOD_TYPES = (GET, POST, PUT, PATCH, DELETE)

AMAZON_SIGNATURE_ALGORITHM = "AMZN-PAY-RSASSA-PSS-V2"
SALT_LENGTH = 32

AUTHORIZATION = "authorization"
ACCEPT = "accept"
CONTENT_TYPE = "content-type"
CONTENT_LENGTH = "content-length"
APPLICATION_JSON = "application/json"
X_AMZ_PAY_REGION = "x-amz-pay-region"
X_AMZ_PAY_DATE = "x-amz-pay-date"
X_AMZ_PAY_HOST = "x-amz-pay-host"
X_AMZ_PAY_SDK_TYPE = "x-amz-pay-sdk-type"
X_AMZ_PAY_SDK_VERSION = "x-amz-pay-sdk-version"

MAX_RETRIES = 3
BACKOFF_TIMES = (1, 2, 4)
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
DEFAULT_TIMEOUT_SECONDS = 30

MERCHANT_ACCOUNTS_URL = "merchantAccounts"
BUYERS_URL = "buyers"
CHECKOUT_SESSIONS_URL = "checkoutSessions"
CHARGE_PERMISSIONS_URL = "chargePermissions"
CHARGES_URL = "charges"
REFUNDS_URL = "refunds"
REPORTS_URL = "reports"
REPORT_SCHEDULES_URL = "report-schedules"
REPORT_DOCUMENTS_URL = "report-documents"
DISBURSEMENTS_URL = "disbursements"
DISPUTES_URL = "disputes"
FILES_URL = "files"
