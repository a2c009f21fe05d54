import importlib

import pytest
from stack import settings
from stack.app import build_app
from stack.stack import NetworkStack


@pytest.fixture
def reload_settings():
    yield lambda: importlib.reload(settings)
    importlib.reload(settings)


def test_build_app_defaults(reload_settings):
    reload_settings()
    app = build_app()
    stack = app.node.find_child("CustomNetwork")

    assert isinstance(stack, NetworkStack)
    assert stack.stack_name == "CustomNetwork"
    assert stack.environment == "aws://unknown-account/unknown-region"
    assert stack.network.max_azs == 2
    assert stack.network.nat_gateways == 2
    assert stack.network.cidr_mask == 24
    assert stack.security_group.allow_all_outbound is False
    assert stack.vpc_output.export_name is None


def test_build_app_from_env(monkeypatch, reload_settings):
    monkeypatch.setenv("NETWORK_STACKNAME", "StagingNetwork")
    monkeypatch.setenv("NETWORK_NAT_GATEWAYS", "1")
    monkeypatch.setenv("NETWORK_CIDR_MASK", "25")
    monkeypatch.setenv("NETWORK_ALLOW_ALL_OUTBOUND", "true")
    monkeypatch.setenv("NETWORK_EXPORT_OUTPUTS", "true")
    monkeypatch.setenv("CDK_DEFAULT_ACCOUNT", "123456789012")
    monkeypatch.setenv("CDK_DEFAULT_REGION", "us-west-2")
    reload_settings()

    app = build_app()
    stack = app.node.find_child("StagingNetwork")

    assert stack.stack_name == "StagingNetwork"
    assert stack.account == "123456789012"
    assert stack.region == "us-west-2"
    assert stack.network.nat_gateways == 1
    assert stack.network.cidr_mask == 25
    assert stack.security_group.allow_all_outbound is True
    assert stack.vpc_output.export_name == "StagingNetwork-VpcId"
    assert stack.security_group_output.export_name == "StagingNetwork-SecurityGroupId"


def test_build_app_needs_account_and_region(monkeypatch, reload_settings):
    monkeypatch.setenv("CDK_DEFAULT_ACCOUNT", "123456789012")
    reload_settings()

    stack = build_app().node.find_child("CustomNetwork")
    assert stack.environment == "aws://unknown-account/unknown-region"
