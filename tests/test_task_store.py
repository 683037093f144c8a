# tests/test_task_store.py

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from event_planner.tasks.kv_store import MemoryKeyValueStore
from event_planner.tasks.task_codec import decode_tasks
from event_planner.tasks.task_models import ChangeKind, TaskChange
from event_planner.tasks.task_persistence import TaskPersistence
from event_planner.tasks.task_store import TaskStore

from .conftest import STORAGE_KEY
from .fakes import FailingKeyValueStore


def _stored(kv: MemoryKeyValueStore):
    payload = kv.get(STORAGE_KEY)
    assert payload is not None
    return decode_tasks(payload)


def test_add_to_empty_store(store: TaskStore) -> None:
    store.add("Buy milk")

    tasks = store.list()
    assert len(tasks) == 1
    t = tasks[0]
    assert t.title == "Buy milk"
    assert t.is_completed is False
    assert t.notes is None
    assert t.due_date is None
    assert t.location_details is None
    assert t.id


def test_add_assigns_unique_ids_and_keeps_insertion_order(store: TaskStore) -> None:
    titles = ["a", "b", "c", "d"]
    for title in titles:
        store.add(title, notes=f"n-{title}")

    tasks = store.list()
    assert [t.title for t in tasks] == titles
    assert len({t.id for t in tasks}) == len(titles)


def test_add_blank_title_is_silent_noop(store: TaskStore, kv: MemoryKeyValueStore) -> None:
    assert store.add("   \n\t") is None
    assert store.add("") is None
    assert store.list() == []
    assert kv.get(STORAGE_KEY) is None


def test_update_replaces_in_place(store: TaskStore) -> None:
    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    assert a and b and c

    changed = replace(b, title="b2", notes="x", location_details="Park")
    assert store.update(changed) is True

    tasks = store.list()
    assert [t.id for t in tasks] == [a.id, b.id, c.id]
    assert tasks[1] == changed


def test_update_unknown_id_is_noop(store: TaskStore) -> None:
    a = store.add("a")
    assert a is not None
    before = store.list()

    ghost = replace(a, id="does-not-exist", title="ghost")
    assert store.update(ghost) is False
    assert store.list() == before


def test_update_rejects_blank_title(store: TaskStore) -> None:
    a = store.add("keep me")
    assert a is not None
    assert store.update(replace(a, title="  ")) is False
    assert store.get(a.id) == a


def test_toggle_completion_is_an_involution(store: TaskStore) -> None:
    due = datetime(2024, 5, 1)
    trip = store.add("Trip", due_date=due)
    other = store.add("Other")
    assert trip and other

    toggled = store.toggle_completion(trip.id)
    assert toggled is not None
    assert toggled.is_completed is True
    assert toggled.due_date == due
    assert store.get(other.id) == other

    back = store.toggle_completion(trip.id)
    assert back == trip

    assert store.toggle_completion("missing") is None


def test_delete_and_delete_many(store: TaskStore) -> None:
    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    assert a and b and c

    assert store.delete(b.id) is True
    assert [t.id for t in store.list()] == [a.id, c.id]

    assert store.delete(b.id) is False
    assert store.delete_many({"nope", "also-nope"}) == 0
    assert store.delete_many({a.id, c.id, "nope"}) == 2
    assert store.list() == []


def test_delete_at_uses_view_offsets(store: TaskStore) -> None:
    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    assert a and b and c
    store.toggle_completion(b.id)

    pending_view = [t for t in store.list() if not t.is_completed]
    assert [t.id for t in pending_view] == [a.id, c.id]

    assert store.delete_at([1, 7], view=pending_view) == 1
    assert [t.id for t in store.list()] == [a.id, b.id]

    assert store.delete_at([0]) == 1
    assert [t.id for t in store.list()] == [b.id]


def test_every_mutation_is_written_through(store: TaskStore, kv: MemoryKeyValueStore) -> None:
    a = store.add("a", notes="n")
    assert a is not None
    assert _stored(kv) == store.list()

    store.toggle_completion(a.id)
    assert _stored(kv) == store.list()

    store.update(replace(a, title="a2"))
    assert _stored(kv) == store.list()

    store.delete(a.id)
    assert _stored(kv) == []


def test_store_reloads_from_durable_slot(kv: MemoryKeyValueStore) -> None:
    first = TaskStore(TaskPersistence(kv, key=STORAGE_KEY))
    first.add("Buy milk", notes="2 litres", due_date=datetime(2024, 6, 1, 9, 30))
    first.add("Call Ugo", location_details="Office")

    second = TaskStore(TaskPersistence(kv, key=STORAGE_KEY))
    assert second.list() == first.list()


def test_corrupted_payload_loads_as_empty() -> None:
    kv = MemoryKeyValueStore({STORAGE_KEY: "{not json"})
    store = TaskStore(TaskPersistence(kv, key=STORAGE_KEY))
    assert store.list() == []


def test_wrong_shape_payload_loads_as_empty() -> None:
    kv = MemoryKeyValueStore({STORAGE_KEY: '{"tasks": []}'})
    store = TaskStore(TaskPersistence(kv, key=STORAGE_KEY))
    assert store.list() == []


def test_blank_stored_title_loads_as_empty() -> None:
    kv = MemoryKeyValueStore({STORAGE_KEY: '[{"id": "a", "title": "   "}]'})
    store = TaskStore(TaskPersistence(kv, key=STORAGE_KEY))
    assert store.list() == []


def test_write_failure_keeps_memory_and_previous_durable_state() -> None:
    kv = FailingKeyValueStore()
    store = TaskStore(TaskPersistence(kv, key=STORAGE_KEY))
    store.add("saved")
    durable_before = kv.get(STORAGE_KEY)

    kv.fail_writes = True
    added = store.add("not saved")

    assert added is not None
    assert [t.title for t in store.list()] == ["saved", "not saved"]
    assert kv.get(STORAGE_KEY) == durable_before

    kv.fail_writes = False
    store.toggle_completion(added.id)
    assert [t.title for t in decode_tasks(kv.get(STORAGE_KEY) or "[]")] == ["saved", "not saved"]


def test_subscribers_receive_changes_after_persistence(
    store: TaskStore, kv: MemoryKeyValueStore
) -> None:
    seen: list[TaskChange] = []
    persisted_at_notify: list[str | None] = []

    def listener(change: TaskChange) -> None:
        seen.append(change)
        persisted_at_notify.append(kv.get(STORAGE_KEY))

    unsubscribe = store.subscribe(listener)
    a = store.add("a")
    assert a is not None
    store.add("   ")  # no-op, no event
    store.toggle_completion(a.id)

    assert [c.kind for c in seen] == [ChangeKind.ADDED, ChangeKind.TOGGLED]
    assert seen[0].task_ids == (a.id,)
    assert seen[1].tasks[0].is_completed is True
    assert all(p is not None for p in persisted_at_notify)

    unsubscribe()
    store.delete(a.id)
    assert len(seen) == 2


def test_failing_listener_does_not_break_mutation(store: TaskStore) -> None:
    def boom(change: TaskChange) -> None:
        raise RuntimeError("listener bug")

    store.subscribe(boom)
    assert store.add("still added") is not None
    assert len(store) == 1
