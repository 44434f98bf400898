"""Unit tests for the client-side analysis history and local storage."""

import pytest

from vitae.contexts.analysis.history import (
    DEFAULT_JOB_TITLE,
    MAX_HISTORY,
    AnalysisHistory,
    derive_job_title,
    score_band,
)
from vitae.contexts.session.local_storage import ANALYSIS_HISTORY_KEY, LocalStorage

from conftest import ANALYSIS_PAYLOAD


@pytest.mark.unit
def test_record_adds_client_fields(storage):
    history = AnalysisHistory(storage)
    entry = history.record(ANALYSIS_PAYLOAD, "Data Engineer")

    assert entry["jobTitle"] == "Data Engineer"
    assert entry["id"]
    assert entry["createdAt"].endswith("Z")
    assert entry["score"] == 72
    # The analyzer payload itself is not mutated
    assert "id" not in ANALYSIS_PAYLOAD


@pytest.mark.unit
def test_history_is_newest_first_and_capped(storage):
    history = AnalysisHistory(storage)
    for score in range(MAX_HISTORY + 3):
        history.record({**ANALYSIS_PAYLOAD, "score": score})

    scores = [entry["score"] for entry in history.entries()]
    assert len(scores) == MAX_HISTORY
    assert scores[0] == MAX_HISTORY + 2
    assert scores[-1] == 3


@pytest.mark.unit
def test_get_and_clear(storage):
    history = AnalysisHistory(storage)
    entry = history.record(ANALYSIS_PAYLOAD)

    assert history.get(entry["id"]) == entry
    assert history.get("missing") is None

    history.clear()
    assert history.entries() == []


@pytest.mark.unit
def test_results_skip_malformed_entries(storage):
    storage.set_item(ANALYSIS_HISTORY_KEY, [{"score": 10}, ANALYSIS_PAYLOAD])
    results = AnalysisHistory(storage).results()

    assert len(results) == 1
    assert results[0].overall_feedback == ANALYSIS_PAYLOAD["overallFeedback"]


@pytest.mark.unit
def test_remember_inputs(storage):
    history = AnalysisHistory(storage)
    assert history.last_inputs() == ("", "")

    history.remember_inputs("resume", "job")
    assert AnalysisHistory(storage).last_inputs() == ("resume", "job")


@pytest.mark.unit
def test_derive_job_title():
    assert derive_job_title("\n  Senior Data Engineer \nAcme Corp") == "Senior Data Engineer"
    assert derive_job_title("   ") == DEFAULT_JOB_TITLE


@pytest.mark.unit
@pytest.mark.parametrize(
    "score, band",
    [(95, "excellent"), (80, "excellent"), (60, "good"), (45, "fair"), (10, "poor"), ("n/a", "unknown")],
)
def test_score_band(score, band):
    assert score_band(score) == band


@pytest.mark.unit
def test_local_storage_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "store.json"
    LocalStorage(path).set_item("key", {"a": [1, 2]})

    other = LocalStorage(path)
    assert other.get_item("key") == {"a": [1, 2]}
    assert other.keys() == ["key"]

    other.remove_item("key")
    assert LocalStorage(path).get_item("key", "gone") == "gone"


@pytest.mark.unit
def test_local_storage_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    storage = LocalStorage(path)
    assert storage.get_item("anything") is None

    storage.set_item("fresh", True)
    assert storage.get_item("fresh") is True
