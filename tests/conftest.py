"""Shared fixtures: throwaway RSA keys, configs and a scripted transport."""

from datetime import datetime, timedelta, timezone

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


def make_response(status_code, body=b""):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    return response


class FakeSession:
    """Plays back a fixed list of responses or exceptions, recording each call."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def request(self, method, url, data=None, headers=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "data": data, "headers": headers, "timeout": timeout}
        )
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class SteppingClock:
    """Returns a new instant, one second later, on every call."""

    def __init__(self, start=datetime(2024, 7, 19, 12, 34, 56, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        moment = self.current
        self.current += timedelta(seconds=1)
        return moment


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key):
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def config(private_key_pem):
    return {
        "region": "jp",
        "public_key_id": "dummy_public_key",
        "private_key": private_key_pem,
        "sandbox": True,
    }


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_client(config, sleeps):
    from amazon_pay_api import AmazonPayClient

    def _make(outcomes, **overrides):
        session = FakeSession(outcomes)
        client = AmazonPayClient(
            {**config, **overrides},
            session=session,
            sleep=sleeps.append,
            clock=SteppingClock(),
        )
        return client, session

    return _make
