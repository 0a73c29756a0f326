"""Pytest configuration and shared fixtures."""

import pytest


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--use-real-db",
        action="store_true",
        default=False,
        help="Run tests against real database instead of mocks",
    )
    parser.addoption(
        "--online",
        action="store_true",
        default=False,
        help="Run tests that require external connectivity (e.g. Google Places)",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "online: mark test as requiring external connectivity"
    )
    config.addinivalue_line("markers", "unit: fast test with no external services")


def pytest_collection_modifyitems(config, items):
    """Skip online tests if --online flag is not provided."""
    if config.getoption("--online"):
        return

    skip_online = pytest.mark.skip(reason="need --online option to run")
    for item in items:
        if "online" in item.keywords:
            item.add_marker(skip_online)


@pytest.fixture
def use_real_db(request):
    """Fixture to check if tests should use real database."""
    return request.config.getoption("--use-real-db", default=False)


@pytest.fixture
async def db_pool(use_real_db):
    """Real asyncpg pool when --use-real-db is given, otherwise None."""
    if use_real_db:
        from caterlead.db.db import close_pool, init_pool

        pool = await init_pool()
        yield pool
        await close_pool()
    else:
        yield None
