# tests/test_comments.py
import pytest

from core.comments import CommentRejected, add_comment, list_comments, subscribe_comments


def test_blank_name_becomes_anonymous(store):
    entry = add_comment(store, "   ", " hello ")
    assert entry.name == "Anonymous"
    assert entry.message == "hello"
    assert entry.created_at is not None


@pytest.mark.parametrize("message", ["", "   ", None])
def test_blank_message_rejected(store, message):
    with pytest.raises(CommentRejected):
        add_comment(store, "Ann", message)
    assert list_comments(store) == []


def test_newest_first(store):
    for text in ("first", "second", "third"):
        add_comment(store, "Ann", text)
    assert [c.message for c in list_comments(store)] == ["third", "second", "first"]
    assert [c.message for c in list_comments(store, limit=1)] == ["third"]


def test_subscription_gets_full_list(store):
    seen = []
    subscribe_comments(store, seen.append)
    add_comment(store, "Ann", "hi")
    add_comment(store, None, "there")
    assert seen[0] == []
    assert [c.message for c in seen[-1]] == ["there", "hi"]
    assert seen[-1][0].name == "Anonymous"
