"""Unit tests for libs.db.session.session_scope."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from libs.db.session import session_scope


def _session_factory():
    session = MagicMock()
    session.rollback = AsyncMock()

    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory, session


@pytest.mark.asyncio
async def test_rolls_back_and_reraises_on_error():
    factory, session = _session_factory()

    with patch("libs.db.session.AsyncSessionLocal", factory):
        with pytest.raises(RuntimeError, match="boom"):
            async with session_scope() as db:
                assert db is session
                raise RuntimeError("boom")

    session.rollback.assert_awaited_once()
    factory.return_value.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_clean_exit_does_not_roll_back():
    factory, session = _session_factory()

    with patch("libs.db.session.AsyncSessionLocal", factory):
        async with session_scope() as db:
            assert db is session

    session.rollback.assert_not_awaited()
