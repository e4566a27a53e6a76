"""Shared fixtures: a sample job and candidate, in-memory store functions, isolated event log."""

import pytest

from proofoffit.contexts.intake.evidence_data_structure import CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord
from proofoffit.utils import event_logging

SAMPLE_JOB = {
    "id": "job-1",
    "title": "Senior Frontend Developer",
    "org": "TechCorp",
    "location": "San Francisco, CA",
    "workType": "hybrid",
    "description": (
        "We are looking for a senior frontend developer with 5+ years of React "
        "experience and strong TypeScript skills."
    ),
    "requirements": {
        "must_have": ["React", "TypeScript", "5+ years experience"],
        "preferred": ["Healthcare domain", "Team leadership", "UI/UX design"],
    },
}

SAMPLE_PROFILE = {
    "id": "profile-1",
    "user": {"email": "test@example.com"},
    "bullets": [
        {
            "id": "bullet-1",
            "text": "Led a team of 8 engineers to deliver a React-based healthcare application",
            "tags": {
                "criterion": "Team Leadership",
                "tool": "React",
                "evidence_type": "result",
                "metric": "8 engineers",
                "domain": "Healthcare",
            },
        },
        {
            "id": "bullet-2",
            "text": "Built advanced TypeScript components with 95% test coverage",
            "tags": {
                "criterion": "TypeScript",
                "tool": "TypeScript",
                "evidence_type": "result",
                "metric": "95% coverage",
            },
        },
        {
            "id": "bullet-3",
            "text": "Improved application performance by 40% using React optimization techniques",
            "tags": {
                "criterion": "Performance",
                "tool": "React",
                "evidence_type": "result",
                "metric": "40% improvement",
            },
        },
    ],
}


class InMemoryStore:
    """Store double exposing the three functions the tailoring engine consumes."""

    def __init__(self, jobs=None, profiles=None):
        self.jobs = {job.id: job for job in jobs or []}
        self.profiles = {profile.id: profile for profile in profiles or []}
        self.saved = []
        self.job_reads = []
        self.profile_reads = []
        self.save_error = None

    def get_job_by_id(self, job_id):
        self.job_reads.append(job_id)
        return self.jobs.get(job_id)

    def get_candidate_profile_with_bullets(self, candidate_id):
        self.profile_reads.append(candidate_id)
        return self.profiles.get(candidate_id)

    def save_tailored_document(self, document):
        if self.save_error is not None:
            raise self.save_error
        self.saved.append(document)


@pytest.fixture
def sample_job() -> JobRecord:
    return JobRecord.from_dict(SAMPLE_JOB)


@pytest.fixture
def sample_profile() -> CandidateProfile:
    return CandidateProfile.from_dict(SAMPLE_PROFILE)


@pytest.fixture
def store(sample_job, sample_profile) -> InMemoryStore:
    return InMemoryStore(jobs=[sample_job], profiles=[sample_profile])


@pytest.fixture
def make_store():
    """Factory for stores holding arbitrary jobs and profiles."""
    return InMemoryStore


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Send tailoring events to a per-test file."""
    events_file = tmp_path / "logs" / "tailoring_events.log"
    monkeypatch.setattr(event_logging, "PIPELINE_EVENTS_FILE", events_file)
    return events_file
