"""
Shared fixtures: a real Client whose REST transport is replaced by mocks.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from harmony import Client, DefaultCacheAdapter


def guild_payload(guild_id="123", **extra):
    data = {
        "id": guild_id,
        "name": "Test Guild",
        "icon": None,
        "owner_id": "42",
        "region": "europe",
        "afk_timeout": 300,
        "verification_level": 1,
        "roles": [
            {
                "id": guild_id,
                "name": "@everyone",
                "color": 0,
                "hoist": False,
                "position": 0,
                "permissions": "104324673",
                "managed": False,
                "mentionable": False,
            }
        ],
        "emojis": [],
        "features": ["COMMUNITY"],
    }
    data.update(extra)
    return data


def member_payload(user_id, username="someone", **extra):
    data = {
        "user": {"id": user_id, "username": username},
        "nick": None,
        "roles": [],
        "joined_at": "2021-01-01T00:00:00+00:00",
        "deaf": False,
        "mute": False,
    }
    data.update(extra)
    return data


@pytest.fixture
def rest():
    """Mocked transport with the get/post/patch/delete surface"""
    mock = MagicMock()
    mock.get = AsyncMock()
    mock.post = AsyncMock()
    mock.patch = AsyncMock()
    mock.delete = AsyncMock(return_value=None)
    mock.session = MagicMock()
    return mock


@pytest.fixture
def client(rest):
    client = Client(token="fake-token", session=MagicMock(), cache=DefaultCacheAdapter())
    client.rest = rest
    return client
