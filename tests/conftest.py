import pytest

from wifi_qr.records import CredentialRecord, InMemoryRecords


@pytest.fixture
def home() -> CredentialRecord:
    return CredentialRecord(id="a1", ssid="Home", password="pass1234", encryption="WPA")


@pytest.fixture
def guest() -> CredentialRecord:
    return CredentialRecord(id="c3", ssid="Guest", encryption="nopass")


@pytest.fixture
def store(home, guest) -> InMemoryRecords:
    return InMemoryRecords([home, guest])
