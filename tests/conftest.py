"""Pytest 配置"""

import pytest

from fakes import FakeTransport
from itermgraph.app import App
from itermgraph.telemetry import metrics


@pytest.fixture
def transport():
    """空的 FakeTransport，按需注册 handler"""
    return FakeTransport()


@pytest.fixture
def app(transport):
    """绑定 FakeTransport 的 App"""
    return App(transport)


@pytest.fixture(autouse=True)
def reset_metrics():
    """每个测试前清空全局指标"""
    metrics.reset()
    yield
    metrics.reset()
