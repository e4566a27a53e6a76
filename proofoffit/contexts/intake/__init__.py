"""
Intake Context

Responsibilities:
- Represents job records and their must-have / preferred requirements
- Represents candidate profiles and their tagged evidence bullets
- Loads both from stored records, YAML/JSON files, and markdown job postings

Owns: Job and evidence data structures, input normalization
Never: Scores, selects, or renders content
"""

from proofoffit.contexts.intake.evidence_data_structure import Bullet, BulletTags, CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord, JobRequirements
from proofoffit.contexts.intake.loaders import load_job_file, load_profile_file

__all__ = [
    "Bullet",
    "BulletTags",
    "CandidateProfile",
    "JobRecord",
    "JobRequirements",
    "load_job_file",
    "load_profile_file",
]
