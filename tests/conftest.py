"""
Pytest configuration and shared fixtures
"""
import pytest

from tests.fixtures.sample_data import cgroup_v1_stats_doc, cgroup_v2_stats_doc, make_sample


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "live: mark test as requiring a running Docker daemon"
    )


@pytest.fixture
def sample_factory():
    """Factory for RawSample objects"""
    return make_sample


@pytest.fixture
def cgroup_v1_stats():
    """Docker API stats document from a cgroup v1 host"""
    return cgroup_v1_stats_doc()


@pytest.fixture
def cgroup_v2_stats():
    """Docker API stats document from a cgroup v2 host"""
    return cgroup_v2_stats_doc()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep DOCKER_STATS_* settings and .env files of the developer out of tests"""
    for name in (
        'DOCKER_STATS_DOCKER_HOST',
        'DOCKER_STATS_TIMEOUT',
        'DOCKER_STATS_METRICS_PORT',
        'DOCKER_STATS_LOG_LEVEL',
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
