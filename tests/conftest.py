import os
import sys

import pytest

repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, repo_root)

from services.linkding_relay.config import RelaySettings
from tests.helpers.slack import SLACK_URL, FakeSlackEndpoint, build_client


@pytest.fixture
def slack():
    return FakeSlackEndpoint()


@pytest.fixture
def settings():
    return RelaySettings(slack_webhook_url=SLACK_URL)


@pytest.fixture
async def client(settings, slack):
    async with build_client(settings, slack) as client:
        yield client
