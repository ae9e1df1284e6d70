"""Fixtures for command tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def fake_client() -> MagicMock:
    """APIClient stand-in usable as ``async with get_client() as client``."""
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.close = AsyncMock()
    return client


@pytest.fixture
def patch_methods(mocker):
    """Replace async methods on a service class.

    A value that is an exception becomes the side effect, anything else the
    return value. Returns the mocks by method name.
    """

    def _patch(cls, **methods) -> dict[str, AsyncMock]:
        mocks = {}
        for name, value in methods.items():
            if isinstance(value, BaseException):
                mock = AsyncMock(side_effect=value)
            else:
                mock = AsyncMock(return_value=value)
            mocker.patch.object(cls, name, new=mock)
            mocks[name] = mock
        return mocks

    return _patch
