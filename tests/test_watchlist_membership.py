"""WatchlistMembershipService 테스트: 멱등 추가/삭제, 미인증 처리, 저장소 오류 변환."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from signalist.models.user import User
from signalist.models.watchlist import WatchlistItem
from signalist.schemas.watchlist import StockWithWatchlistStatus
from signalist.services.membership_service import WatchlistMembershipService
from signalist.services.watchlist_service import WatchlistService


def _db_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


async def _count(session) -> int:
    return (await session.execute(select(func.count(WatchlistItem.id)))).scalar_one()


@pytest.mark.asyncio
async def test_add_normalizes_symbol(session, user):
    """소문자 심볼은 대문자로 저장."""
    svc = WatchlistMembershipService(session, user.id)
    result = await svc.add("aapl", "Apple Inc")

    assert result.success is True
    assert result.message == "Added to watchlist"
    item = (await session.execute(select(WatchlistItem))).scalar_one()
    assert item.symbol == "AAPL"
    assert item.company == "Apple Inc"
    assert item.user_id == user.id
    assert item.added_at is not None


@pytest.mark.asyncio
async def test_double_add_keeps_single_row(session, user):
    """같은 종목 두 번 추가 → 행 1개, 두 번 모두 성공."""
    svc = WatchlistMembershipService(session, user.id)
    first = await svc.add("MSFT", "Microsoft")
    second = await svc.add("msft", "Microsoft Corp")

    assert first.success and second.success
    assert second.message == "Already in watchlist"
    assert await _count(session) == 1


@pytest.mark.asyncio
async def test_same_symbol_for_different_users(session, user):
    """다른 사용자는 같은 종목을 각각 가질 수 있음."""
    session.add(User(id="user-bob", email="bob@example.com"))
    await session.commit()

    await WatchlistMembershipService(session, user.id).add("NVDA", "NVIDIA")
    await WatchlistMembershipService(session, "user-bob").add("NVDA", "NVIDIA")

    assert await _count(session) == 2
    assert await WatchlistMembershipService(session, "user-bob").is_member("nvda") is True


@pytest.mark.asyncio
async def test_remove_absent_symbol_succeeds(session, user):
    """없는 종목 삭제도 성공, 저장소는 변화 없음."""
    svc = WatchlistMembershipService(session, user.id)
    await svc.add("TSLA", "Tesla")

    result = await svc.remove("AMZN")

    assert result.success is True
    assert result.message == "Removed from watchlist"
    assert await _count(session) == 1


@pytest.mark.asyncio
async def test_remove_existing_symbol(session, user):
    svc = WatchlistMembershipService(session, user.id)
    await svc.add("TSLA", "Tesla")

    result = await svc.remove("tsla")

    assert result.success is True
    assert await _count(session) == 0
    assert await svc.is_member("TSLA") is False


@pytest.mark.asyncio
async def test_unauthenticated_operations(session, user):
    """미인증 요청은 예외 없이 실패 응답/False/입력 그대로."""
    await WatchlistMembershipService(session, user.id).add("AAPL", "Apple")
    anon = WatchlistMembershipService(session, None)

    added = await anon.add("MSFT", "Microsoft")
    assert added.success is False
    assert added.error == "Not authenticated"

    removed = await anon.remove("AAPL")
    assert removed.success is False
    assert removed.error == "Not authenticated"

    assert await anon.is_member("AAPL") is False
    assert await _count(session) == 1

    stocks = [StockWithWatchlistStatus(symbol="AAPL", name="Apple")]
    assert await anon.bulk_status(stocks) is stocks


@pytest.mark.asyncio
async def test_add_storage_failure_returns_error(session, user):
    svc = WatchlistMembershipService(session, user.id)
    with patch.object(WatchlistService, "add", side_effect=_db_error()):
        result = await svc.add("AAPL", "Apple")

    assert result.success is False
    assert result.error == "Failed to add to watchlist"
    assert result.message is None


@pytest.mark.asyncio
async def test_remove_storage_failure_returns_error(session, user):
    svc = WatchlistMembershipService(session, user.id)
    with patch.object(WatchlistService, "remove", side_effect=_db_error()):
        result = await svc.remove("AAPL")

    assert result.success is False
    assert result.error == "Failed to remove from watchlist"


@pytest.mark.asyncio
async def test_is_member_fails_closed(session, user):
    svc = WatchlistMembershipService(session, user.id)
    await svc.add("AAPL", "Apple")
    with patch.object(WatchlistService, "get", side_effect=_db_error()):
        assert await svc.is_member("AAPL") is False


@pytest.mark.asyncio
async def test_bulk_status_marks_owned_symbols(session, user):
    svc = WatchlistMembershipService(session, user.id)
    await svc.add("AAPL", "Apple")
    await svc.add("META", "Meta")

    stocks = [
        StockWithWatchlistStatus(symbol="aapl", name="Apple"),
        StockWithWatchlistStatus(symbol="GOOGL", name="Alphabet"),
        StockWithWatchlistStatus(symbol="META", name="Meta", is_in_watchlist=False),
    ]
    result = await svc.bulk_status(stocks)

    assert [s.is_in_watchlist for s in result] == [True, False, True]
    assert [s.symbol for s in result] == ["aapl", "GOOGL", "META"]


@pytest.mark.asyncio
async def test_bulk_status_empty_input_skips_storage(session, user):
    svc = WatchlistMembershipService(session, user.id)
    with patch.object(WatchlistService, "symbols_for_user") as symbols:
        assert await svc.bulk_status([]) == []
    symbols.assert_not_called()


@pytest.mark.asyncio
async def test_bulk_status_storage_failure_passes_through(session, user):
    svc = WatchlistMembershipService(session, user.id)
    stocks = [StockWithWatchlistStatus(symbol="AAPL", name="Apple")]
    with patch.object(WatchlistService, "symbols_for_user", side_effect=_db_error()):
        assert await svc.bulk_status(stocks) == stocks


@pytest.mark.asyncio
async def test_list_symbols_by_email(session, user):
    svc = WatchlistMembershipService(session, user.id)
    await svc.add("AAPL", "Apple")
    await svc.add("NFLX", "Netflix")

    lookup = WatchlistMembershipService(session, None)
    assert sorted(await lookup.list_symbols_by_email("alice@example.com")) == ["AAPL", "NFLX"]
    assert await lookup.list_symbols_by_email("nobody@example.com") == []
    assert await lookup.list_symbols_by_email("") == []


@pytest.mark.asyncio
async def test_list_symbols_by_email_storage_failure(session, user):
    lookup = WatchlistMembershipService(session, None)
    with patch.object(WatchlistService, "find_user_id_by_email", side_effect=_db_error()):
        assert await lookup.list_symbols_by_email("alice@example.com") == []


@pytest.mark.asyncio
async def test_bulk_status_normalizes_input_symbols(session, user):
    """공백/소문자가 섞인 심볼도 저장된 심볼과 같은 규칙으로 비교."""
    svc = WatchlistMembershipService(session, user.id)
    await svc.add("AAPL", "Apple")

    stocks = [StockWithWatchlistStatus(symbol=" aapl ", name="Apple")]
    result = await svc.bulk_status(stocks)

    assert result[0].is_in_watchlist is True
    assert result[0].symbol == " aapl "
