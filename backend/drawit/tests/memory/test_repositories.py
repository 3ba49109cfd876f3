"""Tests specific to the in-memory repositories."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from drawit.dal.models import Room, User
from drawit.memory import InMemoryRoomRepository, InMemoryStore, InMemoryUserRepository


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


class TestInMemoryUserIds:
    def test_first_id_is_one(self, store):
        users = InMemoryUserRepository(store)
        assert users.get_next_id() == 1
        assert users.get_next_id() == 2

    def test_sequence_shared_through_store(self, store):
        first = InMemoryUserRepository(store)
        second = InMemoryUserRepository(store)
        assert [first.get_next_id(), second.get_next_id(), first.get_next_id()] == [1, 2, 3]

    def test_separate_stores_have_separate_sequences(self):
        assert InMemoryUserRepository(InMemoryStore()).get_next_id() == 1
        assert InMemoryUserRepository(InMemoryStore()).get_next_id() == 1

    def test_many_threads_receive_distinct_ids(self, store):
        users = InMemoryUserRepository(store)
        with ThreadPoolExecutor(max_workers=16) as pool:
            ids = list(pool.map(lambda _: users.get_next_id(), range(1000)))
        assert sorted(ids) == list(range(1, 1001))


class TestInMemoryIsolation:
    def test_get_all_returns_fresh_list(self, store):
        rooms = InMemoryRoomRepository(store)
        rooms.save(Room(id="ABCD", host_id=1))
        listed = rooms.get_all()
        listed.clear()
        assert len(rooms.get_all()) == 1

    def test_concurrent_saves_and_room_delete(self, store):
        rooms = InMemoryRoomRepository(store)
        users = InMemoryUserRepository(store)
        rooms.save(Room(id="ABCD", host_id=1))
        members = [User(id=users.get_next_id(), name=f"p{i}", room_id="ABCD") for i in range(50)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(users.save, members))
        assert len(users.find_by_room_id("ABCD")) == 50

        rooms.delete_by_id("ABCD")
        assert all(u.room_id is None for u in users.get_all())
        assert len(users.get_all()) == 50
