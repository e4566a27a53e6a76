"""Unit tests for job and evidence data structures and their loaders."""

import json

import pytest

from proofoffit.contexts.intake.evidence_data_structure import Bullet, BulletTags, CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord, JobRequirements
from proofoffit.contexts.intake.loaders import load_job_file, load_profile_file

JOB_MARKDOWN = """\
# Staff Data Engineer

**Company:** Globex
**Location:** Remote
**Work Mode:** remote

## About Us
- We like data

## Required Qualifications
- Python
- Airflow

## Preferred Qualifications
* Kafka

## Benefits
- Snacks
"""


@pytest.mark.unit
def test_job_from_dict_accepts_camel_case(sample_job):
    assert sample_job.organization == "TechCorp"
    assert sample_job.work_type == "hybrid"
    assert sample_job.requirements.must_have == ["React", "TypeScript", "5+ years experience"]
    assert sample_job.requirements.all()[-1] == "UI/UX design"


@pytest.mark.unit
def test_requirements_drop_none_and_accept_aliases():
    requirements = JobRequirements.from_dict({"mustHave": ["Go", None]})

    assert requirements.must_have == ["Go"]
    assert requirements.preferred == []
    assert JobRequirements.from_dict(None).all() == []


@pytest.mark.unit
def test_job_round_trip(sample_job):
    assert JobRecord.from_dict(sample_job.to_dict()) == sample_job


@pytest.mark.unit
def test_job_from_markdown():
    job = JobRecord.from_markdown(JOB_MARKDOWN, job_id="globex-1")

    assert job.id == "globex-1"
    assert job.title == "Staff Data Engineer"
    assert job.organization == "Globex"
    assert job.location == "Remote"
    assert job.work_type == "remote"
    assert job.requirements.must_have == ["Python", "Airflow"]
    assert job.requirements.preferred == ["Kafka"]


@pytest.mark.unit
def test_markdown_role_metadata_overrides_heading():
    job = JobRecord.from_markdown("# Posting\nRole: Platform Engineer\n", job_id="j")
    assert job.title == "Platform Engineer"


@pytest.mark.unit
def test_bullet_tags_aliases_and_unknown_keys():
    tags = BulletTags.from_dict({"evidenceType": "result", "tool": "React", "color": "blue"})

    assert tags.evidence_type == "result"
    assert tags.to_dict() == {"tool": "React", "evidence_type": "result"}


@pytest.mark.unit
def test_tag_values_in_field_order():
    tags = BulletTags(domain="Healthcare", criterion="Leadership", metric="8 engineers")
    assert list(tags.values()) == ["Leadership", "8 engineers", "Healthcare"]


@pytest.mark.unit
def test_profile_email_from_nested_user(sample_profile):
    assert sample_profile.email == "test@example.com"
    assert [b.id for b in sample_profile.bullets] == ["bullet-1", "bullet-2", "bullet-3"]


@pytest.mark.unit
def test_profile_round_trip(sample_profile):
    assert CandidateProfile.from_dict(sample_profile.to_dict()) == sample_profile


@pytest.mark.unit
def test_bullet_without_tags():
    bullet = Bullet.from_dict({"id": 3, "text": "Shipped"})
    assert bullet.id == "3"
    assert list(bullet.tags.values()) == []


@pytest.mark.unit
def test_load_job_files(tmp_path, sample_job):
    markdown = tmp_path / "globex-1.md"
    markdown.write_text(JOB_MARKDOWN)
    record = tmp_path / "job.json"
    record.write_text(json.dumps(sample_job.to_dict()))

    assert load_job_file(markdown).id == "globex-1"
    assert load_job_file(record) == sample_job


@pytest.mark.unit
def test_load_profile_yaml(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text(
        "id: p-9\n"
        "displayName: Grace Hopper\n"
        "bullets:\n"
        "  - id: b1\n"
        "    text: Wrote a compiler\n"
        "    tags:\n"
        "      tool: COBOL\n"
    )

    profile = load_profile_file(path)
    assert profile.display_name == "Grace Hopper"
    assert profile.bullets[0].tags.tool == "COBOL"


@pytest.mark.unit
def test_unsupported_suffixes(tmp_path):
    with pytest.raises(ValueError):
        load_job_file(tmp_path / "job.txt")
    with pytest.raises(ValueError):
        load_profile_file(tmp_path / "profile.md")


@pytest.mark.unit
def test_non_mapping_file_rejected(tmp_path):
    path = tmp_path / "job.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        load_job_file(path)
