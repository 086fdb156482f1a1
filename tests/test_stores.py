import random

from watchparty.constants import Outcome
from watchparty.members import MembershipTracker
from watchparty.models import Video, VideoState
from watchparty.playlist import RoomQueue
from watchparty.registry import RoomRegistry
from watchparty.state import RoomStateStore


def _video(video_id):
    return Video.from_payload({"id": {"videoId": video_id}, "snippet": {"title": video_id.upper()}})


def test_ensure_room_is_idempotent():
    registry = RoomRegistry()
    first = registry.ensure_room("r1")
    second = registry.ensure_room("r1")
    assert first is second
    assert first.video_state is None
    assert len(registry) == 1


def test_get_room_does_not_create():
    registry = RoomRegistry()
    assert registry.get_room("missing") is None
    assert registry.get_room(None) is None
    assert "missing" not in registry


def test_initialize_state_only_sets_once():
    registry = RoomRegistry()
    registry.ensure_room("r1")
    store = RoomStateStore(registry)
    first = VideoState("a", 1, "PLAYING")
    second = VideoState("b", 2, "PAUSED")

    assert store.initialize_state("r1", first) is Outcome.APPLIED
    assert store.initialize_state("r1", second) is Outcome.UNCHANGED
    assert store.get_state("r1") is first


def test_state_store_reports_missing_room():
    store = RoomStateStore(RoomRegistry())
    assert store.initialize_state("nope", VideoState("a", 1, "PLAYING")) is Outcome.NOT_FOUND
    assert store.update_state("nope", VideoState("a", 1, "PLAYING")) is Outcome.NOT_FOUND
    assert store.get_state("nope") is None


def test_update_state_is_last_writer_wins():
    registry = RoomRegistry()
    registry.ensure_room("r1")
    store = RoomStateStore(registry)
    store.initialize_state("r1", VideoState("a", 500, "PLAYING"))

    stale = VideoState("b", 10, "PAUSED")
    assert store.update_state("r1", stale) is Outcome.APPLIED
    assert store.get_state("r1") is stale


def test_video_state_keeps_client_fields():
    payload = {"videoID": "x", "videoTS": 42, "videoPS": "PAUSED", "seekTo": 12.5}
    assert VideoState.from_payload(payload).to_dict() == payload


def test_queue_matches_list_model():
    registry = RoomRegistry()
    registry.ensure_room("r1")
    queue = RoomQueue(registry)
    model = []
    rng = random.Random(7)

    for step in range(200):
        if rng.random() < 0.55:
            video = _video(f"v{step}")
            model.append(video)
            result = queue.append("r1", video)
            assert result.outcome is Outcome.APPLIED
        else:
            index = rng.randint(-2, len(model) + 2)
            result = queue.remove_at("r1", index)
            if 0 <= index < len(model):
                del model[index]
                assert result.outcome is Outcome.APPLIED
            else:
                assert result.outcome is Outcome.UNCHANGED
        assert result.queue == model


def test_remove_at_ignores_non_integer_index():
    registry = RoomRegistry()
    registry.ensure_room("r1")
    queue = RoomQueue(registry)
    queue.append("r1", _video("a"))

    for index in ("0", None, 0.0, True):
        result = queue.remove_at("r1", index)
        assert result.outcome is Outcome.UNCHANGED
        assert [video.external_id for video in result.queue] == ["a"]


def test_pop_next_takes_the_head():
    registry = RoomRegistry()
    registry.ensure_room("r1")
    queue = RoomQueue(registry)
    queue.append("r1", _video("a"))
    queue.append("r1", _video("b"))

    popped = queue.pop_next("r1")
    assert popped.outcome is Outcome.APPLIED
    assert popped.video.external_id == "a"
    assert [video.external_id for video in popped.queue] == ["b"]


def test_pop_next_on_empty_queue():
    registry = RoomRegistry()
    registry.ensure_room("r1")
    popped = RoomQueue(registry).pop_next("r1")
    assert popped.outcome is Outcome.UNCHANGED
    assert popped.video is None
    assert popped.queue == []


def test_queue_operations_on_missing_room():
    queue = RoomQueue(RoomRegistry())
    assert queue.append("nope", _video("a")).outcome is Outcome.NOT_FOUND
    assert queue.remove_at("nope", 0).outcome is Outcome.NOT_FOUND
    assert queue.pop_next("nope").outcome is Outcome.NOT_FOUND
    assert queue.get_queue("nope") == []


def test_video_external_id_shapes():
    assert Video.from_payload({"id": {"videoId": "abc"}}).external_id == "abc"
    assert Video.from_payload({"id": "abc"}).external_id == "abc"
    assert Video.from_payload({"videoId": "abc"}).external_id == "abc"
    assert Video.from_payload("abc").external_id == "abc"
    assert Video.from_payload({"title": "no id"}).external_id is None


def test_membership_reverse_lookup():
    registry = RoomRegistry()
    tracker = MembershipTracker(registry)
    tracker.add_member("c1", "Alice", "r1")
    tracker.add_member("c2", "Bob", "r1")

    assert tracker.connections_in("r1") == ["c1", "c2"]

    removal = tracker.remove_member("c1")
    assert removal.outcome is Outcome.APPLIED
    assert (removal.room_name, removal.user_name) == ("r1", "Alice")
    assert tracker.connections_in("r1") == ["c2"]
    assert tracker.get_member("c1") is None


def test_remove_unknown_member():
    removal = MembershipTracker(RoomRegistry()).remove_member("ghost")
    assert removal.outcome is Outcome.NOT_FOUND
    assert removal.room_name is None
    assert removal.user_name is None


def test_add_member_overwrites_previous_entry():
    registry = RoomRegistry()
    tracker = MembershipTracker(registry)
    tracker.add_member("c1", "Alice", "r1")
    tracker.add_member("c1", "Alicia", "r2")

    assert tracker.connections_in("r1") == []
    assert tracker.connections_in("r2") == ["c1"]
    assert tracker.get_member("c1").user_name == "Alicia"
