"""
Integration tests for tailoring orchestration.

Uses in-memory store functions for the request flow and a real SQLite
database for the cached from_database wiring.
"""

import dataclasses
import re
import threading

import pytest
from omegaconf import OmegaConf

from proofoffit.contexts.intake.evidence_data_structure import Bullet, BulletTags, CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord, JobRequirements
from proofoffit.contexts.storage.database import TailoringDatabase
from proofoffit.contexts.tailoring.document_data_structure import TailorRequest
from proofoffit.contexts.tailoring.engine import TailorEngine, tailor_document
from proofoffit.contexts.tailoring.exceptions import (
    JobNotFoundError,
    PersistenceError,
    ProfileNotFoundError,
    TailoringError,
)
from proofoffit.contexts.templating.document_types import DocumentType, TailorPreferences
from proofoffit.contexts.templating.exceptions import UnsupportedDocumentTypeError
from proofoffit.utils.config import DEFAULT_TAILORING_CONFIG
from proofoffit.utils.event_logging import read_events


@pytest.fixture
def config():
    return OmegaConf.create(DEFAULT_TAILORING_CONFIG)


@pytest.fixture
def engine(store, config):
    return TailorEngine(
        get_job_by_id=store.get_job_by_id,
        get_candidate_profile_with_bullets=store.get_candidate_profile_with_bullets,
        save_tailored_document=store.save_tailored_document,
        config=config,
    )


def _request(document_type="resume", job_id="job-1", candidate_id="profile-1", preferences=None):
    return TailorRequest(
        job_id=job_id, candidate_id=candidate_id, document_type=document_type, preferences=preferences
    )


@pytest.mark.integration
def test_generates_resume(engine, store):
    document = engine.tailor_document(_request())

    assert document.type is DocumentType.RESUME
    assert re.fullmatch(r"tailored-[0-9a-f]{32}", document.id)
    assert document.metadata.job_id == "job-1"
    assert document.metadata.candidate_id == "profile-1"
    assert document.metadata.version == "1.0"
    for marker in ("Professional Summary", "Key Achievements", "Technical Skills", "Experience Highlights"):
        assert marker in document.content
    assert len(document.citations) == 3
    assert store.saved == [document]


@pytest.mark.integration
def test_generates_cover_letter(engine, sample_job):
    preferences = TailorPreferences.from_dict({"tone": "professional", "length": "medium"})
    document = engine.tailor_document(_request("cover_letter", preferences=preferences))

    assert "Dear Hiring Manager," in document.content
    assert "Why I'm a Great Fit" in document.content
    assert sample_job.organization in document.content


@pytest.mark.integration
def test_generates_email(engine):
    document = engine.tailor_document(_request(DocumentType.EMAIL))

    assert document.content.startswith("Subject: Application for Senior Frontend Developer Position")
    assert "Quick Highlights" in document.content


@pytest.mark.integration
def test_citations_follow_ranked_selection(engine):
    document = engine.tailor_document(_request())
    assert [c.bullet_id for c in document.citations] == ["bullet-1", "bullet-2", "bullet-3"]


@pytest.mark.integration
def test_two_bullet_scenario(make_store, config):
    job = JobRecord(
        id="job-2",
        title="Frontend Lead",
        organization="Initech",
        requirements=JobRequirements(
            must_have=["React", "TypeScript", "5+ years experience"],
            preferred=["Healthcare domain", "Team leadership"],
        ),
    )
    profile = CandidateProfile(
        id="profile-2",
        bullets=[
            Bullet(
                id="b1",
                text="Led a team of 8 engineers to deliver a React-based healthcare application",
                tags=BulletTags(
                    criterion="Team Leadership",
                    tool="React",
                    evidence_type="result",
                    metric="8 engineers",
                    domain="Healthcare",
                ),
            ),
            Bullet(
                id="b2",
                text="Built advanced TypeScript components with 95% test coverage",
                tags=BulletTags(criterion="TypeScript", tool="TypeScript", evidence_type="result", metric="95% coverage"),
            ),
        ],
    )
    store = make_store(jobs=[job], profiles=[profile])

    document = tailor_document(
        _request("cover_letter", job_id="job-2", candidate_id="profile-2"),
        get_job_by_id=store.get_job_by_id,
        get_candidate_profile_with_bullets=store.get_candidate_profile_with_bullets,
        save_tailored_document=store.save_tailored_document,
        config=config,
    )

    assert sorted(c.bullet_id for c in document.citations) == ["b1", "b2"]
    assert len(store.saved) == 1


@pytest.mark.integration
def test_citation_count_matches_rendered_bullets(make_store, config, sample_job):
    """Bullets that match nothing are neither rendered nor cited."""
    profile = CandidateProfile(
        id="profile-3",
        bullets=[
            Bullet(id="hit", text="Shipped React features"),
            Bullet(id="miss", text="Organized the office party"),
        ],
    )
    store = make_store(jobs=[sample_job], profiles=[profile])
    engine = TailorEngine(
        store.get_job_by_id, store.get_candidate_profile_with_bullets, store.save_tailored_document, config=config
    )

    document = engine.tailor_document(_request(candidate_id="profile-3"))

    assert [c.bullet_id for c in document.citations] == ["hit"]
    assert "Organized the office party" not in document.content


@pytest.mark.integration
def test_no_matching_bullets_still_generates(make_store, config, sample_job):
    profile = CandidateProfile(id="profile-4", bullets=[Bullet(id="b", text="Baked bread")])
    store = make_store(jobs=[sample_job], profiles=[profile])
    engine = TailorEngine(
        store.get_job_by_id, store.get_candidate_profile_with_bullets, store.save_tailored_document, config=config
    )

    document = engine.tailor_document(_request(candidate_id="profile-4"))

    assert document.citations == ()
    assert "Delivered measurable results across multiple projects" in document.content
    assert len(store.saved) == 1
    assert store.profile_reads == ["profile-4"]


@pytest.mark.integration
def test_job_not_found_never_saves(engine, store):
    with pytest.raises(JobNotFoundError) as exc_info:
        engine.tailor_document(_request(job_id="job-404"))

    assert exc_info.value.job_id == "job-404"
    assert store.saved == []
    assert store.profile_reads == []


@pytest.mark.integration
def test_profile_not_found(engine, store):
    with pytest.raises(ProfileNotFoundError) as exc_info:
        engine.tailor_document(_request(candidate_id="nobody"))

    assert exc_info.value.candidate_id == "nobody"
    assert isinstance(exc_info.value, TailoringError)
    assert store.saved == []


@pytest.mark.integration
def test_unsupported_type_fails_before_any_store_access(engine, store):
    with pytest.raises(UnsupportedDocumentTypeError):
        engine.tailor_document(_request("press_release"))

    assert store.job_reads == []
    assert store.profile_reads == []
    assert store.saved == []


@pytest.mark.integration
def test_save_failure_wrapped(engine, store):
    store.save_error = ConnectionError("disk full")

    with pytest.raises(PersistenceError) as exc_info:
        engine.tailor_document(_request())

    assert isinstance(exc_info.value.__cause__, ConnectionError)
    assert exc_info.value.original_error is store.save_error
    assert exc_info.value.document_id.startswith("tailored-")


@pytest.mark.integration
def test_persistence_error_passes_through(engine, store):
    original = PersistenceError("quota exceeded")
    store.save_error = original

    with pytest.raises(PersistenceError) as exc_info:
        engine.tailor_document(_request())

    assert exc_info.value is original


@pytest.mark.integration
def test_each_request_creates_new_document(engine, store):
    first = engine.tailor_document(_request())
    second = engine.tailor_document(_request())

    assert first.id != second.id
    assert first.content == second.content
    assert len(store.saved) == 2


@pytest.mark.integration
def test_parallel_fetch(store, config):
    threads = set()

    def get_job(job_id):
        threads.add(threading.get_ident())
        return store.get_job_by_id(job_id)

    engine = TailorEngine(
        get_job,
        store.get_candidate_profile_with_bullets,
        store.save_tailored_document,
        config=config,
        parallel_fetch=True,
    )
    document = engine.tailor_document(_request())

    assert len(document.citations) == 3
    assert threading.get_ident() not in threads


@pytest.mark.integration
def test_parallel_fetch_reports_job_first(make_store, config):
    store = make_store()
    engine = TailorEngine(
        store.get_job_by_id,
        store.get_candidate_profile_with_bullets,
        store.save_tailored_document,
        config=config,
        parallel_fetch=True,
    )

    with pytest.raises(JobNotFoundError):
        engine.tailor_document(_request())


@pytest.mark.integration
def test_config_controls_selection_and_version(store, config):
    config.selection.max_bullets = 1
    config.document.version = "2.0"
    engine = TailorEngine(
        store.get_job_by_id, store.get_candidate_profile_with_bullets, store.save_tailored_document, config=config
    )

    document = engine.tailor_document(_request())

    assert [c.bullet_id for c in document.citations] == ["bullet-1"]
    assert document.metadata.version == "2.0"


@pytest.mark.integration
def test_from_database_end_to_end(tmp_path, sample_job, sample_profile, config):
    with TailoringDatabase.create(tmp_path / "proofoffit.db") as database:
        database.add_job(sample_job)
        database.add_candidate_profile(sample_profile)

        engine = TailorEngine.from_database(database, config=config, parallel_fetch=True)
        first = engine.tailor_document(_request())
        second = engine.tailor_document(_request("email"))

        assert [d.id for d in database.list_tailored_documents(candidate_id="profile-1")] == [first.id, second.id]
        assert database.get_tailored_document(second.id) == second

    job_cache = engine._get_job_by_id.cache
    assert job_cache.stats().hits == 1
    assert [e["event_type"] for e in read_events()] == ["document_saved", "document_saved"]


@pytest.mark.integration
def test_from_database_sees_profile_and_job_updates(tmp_path, sample_job, sample_profile, config):
    with TailoringDatabase.create(tmp_path / "proofoffit.db") as database:
        database.add_job(sample_job)
        database.add_candidate_profile(sample_profile)
        engine = TailorEngine.from_database(database, config=config)

        first = engine.tailor_document(_request())
        assert [c.bullet_id for c in first.citations] == ["bullet-1", "bullet-2", "bullet-3"]

        replacement = dataclasses.replace(
            sample_profile,
            bullets=[Bullet(id="bullet-7", text="Shipped TypeScript tooling", tags=BulletTags(tool="TypeScript"))],
        )
        database.add_candidate_profile(replacement)
        second = engine.tailor_document(_request())

        assert [c.bullet_id for c in second.citations] == ["bullet-7"]

        database.add_job(sample_job)
        assert "job-1" not in engine._get_job_by_id.cache
