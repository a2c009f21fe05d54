import pytest

NETWORK_SETTINGS = [
    "NETWORK_STACKNAME",
    "NETWORK_CIDR",
    "NETWORK_MAX_AZS",
    "NETWORK_NAT_GATEWAYS",
    "NETWORK_CIDR_MASK",
    "NETWORK_ALLOW_ALL_OUTBOUND",
    "NETWORK_EXPORT_OUTPUTS",
    "CDK_DEFAULT_ACCOUNT",
    "CDK_DEFAULT_REGION",
]


@pytest.fixture(autouse=True)
def env_setup(monkeypatch):
    for key in NETWORK_SETTINGS:
        monkeypatch.delenv(key, raising=False)
