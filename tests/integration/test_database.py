"""Integration tests for the SQLite tailoring database."""

import dataclasses

import pytest

from proofoffit.contexts.intake.evidence_data_structure import Bullet
from proofoffit.contexts.storage.database import TailoringDatabase
from proofoffit.contexts.tailoring.citations import build_citations
from proofoffit.contexts.tailoring.document_data_structure import (
    DocumentMetadata,
    TailoredDocument,
    new_document_id,
)
from proofoffit.contexts.tailoring.exceptions import PersistenceError
from proofoffit.contexts.templating.document_types import DocumentType
from proofoffit.utils.event_logging import read_events


@pytest.fixture
def database(tmp_path, sample_job, sample_profile):
    db = TailoringDatabase.create(tmp_path / "proofoffit.db")
    db.add_job(sample_job)
    db.add_candidate_profile(sample_profile)
    yield db
    db.close()


def _document(sample_profile, job_id="job-1", candidate_id="profile-1", document_type=DocumentType.RESUME):
    return TailoredDocument(
        id=new_document_id(),
        type=document_type,
        content="# test@example.com",
        citations=tuple(build_citations(sample_profile.bullets)),
        metadata=DocumentMetadata(job_id=job_id, candidate_id=candidate_id),
    )


@pytest.mark.integration
def test_open_missing_database(tmp_path):
    with pytest.raises(FileNotFoundError):
        TailoringDatabase(tmp_path / "missing.db")


@pytest.mark.integration
def test_reopen_existing_database(tmp_path, sample_job):
    path = tmp_path / "store.db"
    with TailoringDatabase.create(path) as db:
        db.add_job(sample_job)

    with TailoringDatabase(path) as db:
        assert db.get_job_by_id("job-1") == sample_job


@pytest.mark.integration
def test_job_round_trip(database, sample_job):
    assert database.get_job_by_id("job-1") == sample_job
    assert database.get_job_by_id("job-404") is None


@pytest.mark.integration
def test_profile_round_trip_keeps_bullet_order(database, sample_profile):
    loaded = database.get_candidate_profile_with_bullets("profile-1")

    assert loaded == sample_profile
    assert database.get_candidate_profile_with_bullets("profile-404") is None


@pytest.mark.integration
def test_profile_upsert_replaces_bullets(database, sample_profile):
    replacement = dataclasses.replace(
        sample_profile,
        bullets=[Bullet(id="bullet-9", text="Mentored interns"), sample_profile.bullets[0]],
    )
    database.add_candidate_profile(replacement)

    loaded = database.get_candidate_profile_with_bullets("profile-1")
    assert [b.id for b in loaded.bullets] == ["bullet-9", "bullet-1"]


@pytest.mark.integration
def test_save_and_read_document(database, sample_profile):
    document = _document(sample_profile)
    database.save_tailored_document(document)

    assert database.get_tailored_document(document.id) == document
    assert database.get_tailored_document("tailored-missing") is None


@pytest.mark.integration
def test_save_logs_event(database, sample_profile):
    document = _document(sample_profile)
    database.save_tailored_document(document)

    events = read_events()
    assert len(events) == 1
    assert events[0]["event_type"] == "document_saved"
    assert events[0]["document_id"] == document.id
    assert events[0]["citation_count"] == 3
    assert events[0]["document_type"] == "resume"


@pytest.mark.integration
def test_duplicate_document_id_rejected(database, sample_profile):
    document = _document(sample_profile)
    database.save_tailored_document(document)

    with pytest.raises(PersistenceError) as exc_info:
        database.save_tailored_document(document)

    assert exc_info.value.document_id == document.id
    assert exc_info.value.original_error is not None
    assert len(read_events()) == 1


@pytest.mark.integration
def test_list_documents_filters(database, sample_profile):
    first = _document(sample_profile)
    second = _document(sample_profile, document_type=DocumentType.EMAIL)
    other = _document(sample_profile, job_id="job-2", candidate_id="profile-2")
    for document in (first, second, other):
        database.save_tailored_document(document)

    assert [d.id for d in database.list_tailored_documents()] == [first.id, second.id, other.id]
    assert [d.id for d in database.list_tailored_documents(candidate_id="profile-1")] == [first.id, second.id]
    assert [d.id for d in database.list_tailored_documents(job_id="job-2")] == [other.id]
    assert database.list_tailored_documents(candidate_id="profile-1", job_id="job-2") == []


@pytest.mark.integration
def test_write_listeners_notified_after_commit(database, sample_job, sample_profile):
    seen = []

    def record(kind, record_id):
        seen.append((kind, record_id, database.get_job_by_id(sample_job.id) is not None))

    database.add_write_listener(record)
    database.add_job(sample_job)
    database.add_candidate_profile(sample_profile)
    database.save_tailored_document(_document(sample_profile))

    assert seen == [("job", "job-1", True), ("profile", "profile-1", True)]
