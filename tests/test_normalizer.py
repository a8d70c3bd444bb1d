"""Tests for change-event filtering and candidate deduplication."""

from __future__ import annotations

from inboxbridge.application.ingestion.normalizer import dedupe, normalize
from inboxbridge.domain.entities.history import CandidateMessage

from conftest import added, labeled


def _assert_unique_keys(candidates: list[CandidateMessage]) -> None:
    ids = [c.id for c in candidates if c.id is not None]
    threads = [c.thread_id for c in candidates if c.thread_id is not None]
    assert len(ids) == len(set(ids))
    assert len(threads) == len(set(threads))


def test_label_event_with_only_spam_is_dropped():
    assert normalize([labeled("m1", "SPAM")]) == []


def test_label_event_with_inbox_yields_one_candidate():
    assert normalize([labeled("m1", "INBOX")]) == [CandidateMessage(id="m1", thread_id="t-m1")]


def test_unread_label_counts_as_interesting():
    assert len(normalize([labeled("m1", "CATEGORY_UPDATES", "UNREAD")])) == 1


def test_added_events_always_kept():
    candidates = normalize([added("m1"), added("m2")])
    assert [c.id for c in candidates] == ["m1", "m2"]


def test_first_occurrence_wins_on_shared_id():
    candidates = normalize([labeled("m1", "INBOX", thread_id="tA"), added("m1", thread_id="tB")])
    assert candidates == [CandidateMessage(id="m1", thread_id="tA")]


def test_shared_thread_merges_distinct_messages():
    candidates = normalize([added("m1", thread_id="t1"), added("m2", thread_id="t1")])
    assert [c.id for c in candidates] == ["m1"]


def test_thread_dedup_can_be_disabled():
    candidates = normalize(
        [added("m1", thread_id="t1"), added("m2", thread_id="t1"), added("m1", thread_id="t9")],
        by_thread=False,
    )
    assert [c.id for c in candidates] == ["m1", "m2"]


def test_custom_interesting_labels():
    events = [labeled("m1", "INBOX"), labeled("m2", "Label_42")]
    assert [c.id for c in normalize(events, interesting_labels={"Label_42"})] == ["m2"]


def test_missing_ids_survive_normalization():
    candidates = normalize([added(None, thread_id="t1"), added("m2", thread_id="t2")])
    assert candidates[0] == CandidateMessage(id=None, thread_id="t1")
    assert len(candidates) == 2


def test_absent_keys_are_not_treated_as_shared():
    candidates = normalize(
        [
            added(None, thread_id="t1"),
            added(None, thread_id="t2"),
        ]
    )
    assert len(candidates) == 2


def test_dedupe_is_idempotent_and_keys_unique():
    events = [
        labeled("m1", "INBOX", thread_id="t1"),
        labeled("m2", "SPAM", thread_id="t2"),
        added("m3", thread_id="t1"),
        added("m4", thread_id="t4"),
        labeled("m4", "UNREAD", thread_id="t4"),
        added("m5", thread_id="t5"),
    ]
    candidates = normalize(events)

    _assert_unique_keys(candidates)
    assert dedupe(candidates + candidates) == candidates
    assert [c.id for c in candidates] == ["m1", "m4", "m5"]
