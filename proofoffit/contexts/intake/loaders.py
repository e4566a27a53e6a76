"""
File loaders for jobs and candidate profiles.

YAML and JSON files are read through OmegaConf (JSON is a YAML subset);
markdown job postings go through JobRecord.from_markdown.
"""

from pathlib import Path

from omegaconf import OmegaConf

from proofoffit.contexts.intake.evidence_data_structure import CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord

STRUCTURED_SUFFIXES = {".yaml", ".yml", ".json"}


def _load_structured(path: Path) -> dict:
    data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}")
    return data


def load_job_file(path: Path) -> JobRecord:
    """
    Load a job from a .yaml/.yml/.json record or a .md posting.

    Markdown postings take their identifier from the filename stem.

    Raises:
        ValueError: If the suffix is not supported or the file is not a mapping
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".md":
        return JobRecord.from_markdown(path.read_text(encoding="utf-8"), job_id=path.stem)
    if suffix in STRUCTURED_SUFFIXES:
        return JobRecord.from_dict(_load_structured(path))

    raise ValueError(f"Unsupported job file type '{suffix}': {path}")


def load_profile_file(path: Path) -> CandidateProfile:
    """
    Load a candidate profile (with bullets) from a .yaml/.yml/.json file.

    Raises:
        ValueError: If the suffix is not supported or the file is not a mapping
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in STRUCTURED_SUFFIXES:
        raise ValueError(f"Unsupported profile file type '{suffix}': {path}")

    return CandidateProfile.from_dict(_load_structured(path))
