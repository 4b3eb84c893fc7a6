"""
Follow graph properties.
"""

from uuid import uuid4

import pytest

from audio_vault.shared.core.exceptions import InvalidOperationError, UserNotFoundError
from audio_vault.shared.models.follow import Follow
from audio_vault.shared.repositories.follow_repository import FollowRepository
from audio_vault.shared.services.follow_service import FollowService

from tests.factories import make_user


async def test_follow_adds_edge_seen_from_both_sides(db_session):
    alice = await make_user(db_session, "alice")
    bob = await make_user(db_session, "bob")
    service = FollowService(db_session)

    result = await service.follow(alice.id, bob.id)

    assert result.is_following is True
    assert result.changed is True
    assert result.followers_count == 1
    assert await service.following_ids(alice.id) == [bob.id]
    assert await service.follower_ids(bob.id) == [alice.id]
    # Edges are directed
    assert await service.following_ids(bob.id) == []
    assert await service.follower_ids(alice.id) == []


async def test_unfollow_removes_edge_from_both_sides(db_session):
    alice = await make_user(db_session, "alice")
    bob = await make_user(db_session, "bob")
    service = FollowService(db_session)
    await service.follow(alice.id, bob.id)

    result = await service.unfollow(alice.id, bob.id)

    assert result.is_following is False
    assert result.changed is True
    assert result.followers_count == 0
    assert bob.id not in await service.following_ids(alice.id)
    assert alice.id not in await service.follower_ids(bob.id)


async def test_follow_twice_is_same_as_once(db_session):
    alice = await make_user(db_session, "alice")
    bob = await make_user(db_session, "bob")
    service = FollowService(db_session)

    await service.follow(alice.id, bob.id)
    second = await service.follow(alice.id, bob.id)

    assert second.changed is False
    assert second.followers_count == 1
    assert await service.following_ids(alice.id) == [bob.id]
    assert await service.follower_ids(bob.id) == [alice.id]


async def test_unfollow_without_edge_changes_nothing(db_session):
    alice = await make_user(db_session, "alice")
    bob = await make_user(db_session, "bob")
    service = FollowService(db_session)

    result = await service.unfollow(alice.id, bob.id)

    assert result.changed is False
    assert result.is_following is False
    assert await service.following_ids(alice.id) == []


async def test_self_follow_is_rejected_without_mutation(db_session):
    alice = await make_user(db_session, "alice")
    service = FollowService(db_session)

    with pytest.raises(InvalidOperationError):
        await service.follow(alice.id, alice.id)

    assert await service.following_ids(alice.id) == []
    assert await service.follower_ids(alice.id) == []


async def test_unfollow_yourself_or_unknown_user_is_a_no_op(db_session):
    alice = await make_user(db_session, "alice")
    bob = await make_user(db_session, "bob")
    service = FollowService(db_session)
    await service.follow(alice.id, bob.id)

    for target in (alice.id, uuid4()):
        result = await service.unfollow(alice.id, target)

        assert result.changed is False
        assert result.is_following is False
        assert result.followers_count == 0

    assert await service.following_ids(alice.id) == [bob.id]


async def test_add_edge_reports_existing_row_without_raising(db_session):
    alice = await make_user(db_session, "alice")
    bob = await make_user(db_session, "bob")
    repo = FollowRepository(db_session)
    # Row written behind the repository's back, as a concurrent request would
    db_session.add(Follow(follower_id=alice.id, followee_id=bob.id))
    await db_session.flush()

    assert await repo.add_edge(alice.id, bob.id) is False
    assert await repo.count_followers(bob.id) == 1
    assert await repo.remove_edge(alice.id, bob.id) is True
    assert await repo.remove_edge(alice.id, bob.id) is False


async def test_follow_unknown_user_is_not_found(db_session):
    alice = await make_user(db_session, "alice")
    service = FollowService(db_session)

    with pytest.raises(UserNotFoundError):
        await service.follow(alice.id, uuid4())

    assert await service.following_ids(alice.id) == []


async def test_is_following(db_session):
    alice = await make_user(db_session, "alice")
    bob = await make_user(db_session, "bob")
    service = FollowService(db_session)

    assert await service.is_following(alice.id, bob.id) is False
    await service.follow(alice.id, bob.id)
    assert await service.is_following(alice.id, bob.id) is True
    assert await service.is_following(bob.id, alice.id) is False
