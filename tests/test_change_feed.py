from app.helpers.change_feed import ChangeFeed, INSERT, merge_incoming


def test_publish_reaches_matching_subscribers_only():
    feed = ChangeFeed()
    received, other = [], []
    feed.subscribe("submissions", INSERT, received.append)
    feed.subscribe("marks", INSERT, other.append)

    delivered = feed.publish("submissions", INSERT, {"id": "1"})

    assert delivered == 1
    assert received == [{"id": "1"}]
    assert other == []


def test_cancel_stops_delivery_and_is_idempotent():
    feed = ChangeFeed()
    received = []
    subscription = feed.subscribe("submissions", INSERT, received.append)

    subscription.cancel()
    subscription.cancel()
    feed.publish("submissions", INSERT, {"id": "1"})

    assert received == []
    assert len(feed) == 0


def test_failing_handler_does_not_block_others():
    feed = ChangeFeed()
    received = []

    def broken(record):
        raise RuntimeError("socket gone")

    feed.subscribe("submissions", INSERT, broken)
    feed.subscribe("submissions", INSERT, received.append)

    assert feed.publish("submissions", INSERT, {"id": "1"}) == 1
    assert received == [{"id": "1"}]


def test_merge_prepends_new_records():
    existing = [{"id": "b", "student_name": "Ravi"}, {"id": "a", "student_name": "Asha"}]
    merged = merge_incoming(existing, [{"id": "c", "student_name": "Meena"}])

    assert [r["id"] for r in merged] == ["c", "b", "a"]


def test_merge_skips_records_already_loaded():
    existing = [{"id": "b"}, {"id": "a"}]
    merged = merge_incoming(existing, [{"id": "a"}, {"id": "c"}, {"id": "d"}, {"id": "c"}])

    # latest event first, nothing from the initial load dropped
    assert [r["id"] for r in merged] == ["d", "c", "b", "a"]


def test_merge_into_empty_list():
    assert merge_incoming([], []) == []
    assert merge_incoming([], [{"id": 1}]) == [{"id": 1}]
