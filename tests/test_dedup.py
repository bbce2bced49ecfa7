from roster_core.dedup import dedup_key, find_duplicate, merge_participants
from roster_core.models import Participant


def test_key_prefers_email():
    assert dedup_key(Participant(name="A", email=" X@Example.com ")) == "email:x@example.com"
    assert dedup_key({"name": "A", "email": "x@example.com", "phone": "1"}) == "email:x@example.com"


def test_key_falls_back_to_name_and_phone_digits():
    assert dedup_key(Participant(name=" Kim ", phone="010-1111-2222")) == "name:kim|phone:01011112222"
    assert dedup_key({"name": "Kim"}) == "name:kim|phone:"


def test_dedup_by_email_existing_wins():
    existing = [Participant(name="A", email="x@example.com")]
    incoming = [Participant(name="B", email="X@Example.com")]
    result = merge_participants(existing, incoming)
    assert len(result.merged) == 1
    assert result.merged[0].name == "A"
    assert result.added == []


def test_dedup_fallback_name_phone():
    existing = [Participant(name="C", phone="010-1111-2222")]
    incoming = [Participant(name="c", phone="01011112222")]
    result = merge_participants(existing, incoming)
    assert [p.name for p in result.merged] == ["C"]
    assert result.added == []


def test_existing_values_untouched():
    existing = [Participant(name="A", email="x@example.com", company="Old")]
    incoming = [Participant(name="A2", email="x@example.com", company="New", role="R")]
    kept = merge_participants(existing, incoming).merged[0]
    assert kept.to_record() == {"name": "A", "email": "x@example.com", "company": "Old"}


def test_merge_idempotent():
    people = [
        Participant(name="A", email="a@example.com"),
        Participant(name="B", phone="010-2222-3333"),
        Participant(name="C"),
    ]
    once = merge_participants([], people).merged
    again = merge_participants(once, once)
    assert len(again.merged) == len(once)
    assert again.added == []
    subset = merge_participants(once, once[1:])
    assert len(subset.merged) == len(once)
    keys = [dedup_key(p) for p in again.merged]
    assert len(keys) == len(set(keys))


def test_added_in_encounter_order_without_incoming_duplicates():
    existing = [Participant(name="A", email="a@example.com")]
    incoming = [
        Participant(name="B", email="b@example.com"),
        Participant(name="B again", email="B@example.com"),
        Participant(name="A dup", email="a@example.com"),
        Participant(name="D"),
    ]
    result = merge_participants(existing, incoming)
    assert [p.name for p in result.merged] == ["A", "B", "D"]
    assert [p.name for p in result.added] == ["B", "D"]


def test_same_phone_different_email_is_not_duplicate():
    existing = [Participant(name="A", email="a@example.com", phone="010-1")]
    incoming = [Participant(name="B", email="b@example.com", phone="010-1")]
    assert len(merge_participants(existing, incoming).merged) == 2


def test_find_duplicate():
    items = [Participant(name="A", email="a@example.com")]
    assert find_duplicate(items, Participant(name="Z", email="A@example.com")) is items[0]
    assert find_duplicate(items, Participant(name="A")) is None
