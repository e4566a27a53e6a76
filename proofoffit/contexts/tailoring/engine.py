"""
Tailoring orchestration.

Fetches a job and a candidate profile through injected store functions,
selects the relevant bullets, renders the requested document, builds its
citations, persists it, and returns it. No store client is constructed here;
callers pass the three functions (or use TailorEngine.from_database).

Consumed interfaces:
    get_job_by_id(job_id) -> JobRecord | None
    get_candidate_profile_with_bullets(candidate_id) -> CandidateProfile | None
    save_tailored_document(document) -> None
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from omegaconf import DictConfig

from proofoffit.contexts.intake.evidence_data_structure import CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord
from proofoffit.contexts.storage.cache import CacheManager, memoize
from proofoffit.contexts.tailoring.citations import build_citations
from proofoffit.contexts.tailoring.document_data_structure import (
    DocumentMetadata,
    TailoredDocument,
    TailorRequest,
    new_document_id,
)
from proofoffit.contexts.tailoring.exceptions import (
    JobNotFoundError,
    PersistenceError,
    ProfileNotFoundError,
)
from proofoffit.contexts.tailoring.logger import (
    _log_debug,
    _log_error,
    log_selection_result,
    log_tailoring_result,
    log_tailoring_start,
)
from proofoffit.contexts.targeting.relevance import ScoringWeights, select_relevant_bullets
from proofoffit.contexts.templating.document_renderer import DocumentRenderer
from proofoffit.contexts.templating.document_types import DocumentType, TailorPreferences
from proofoffit.utils.config import load_tailoring_config

JobFetcher = Callable[[str], Optional[JobRecord]]
ProfileFetcher = Callable[[str], Optional[CandidateProfile]]
DocumentSaver = Callable[[TailoredDocument], None]


class TailorEngine:
    """
    Generates and persists tailored documents.

    Stateless between requests: every call allocates its own scored bullets,
    citations and document, so one engine can serve many requests.
    """

    def __init__(
        self,
        get_job_by_id: JobFetcher,
        get_candidate_profile_with_bullets: ProfileFetcher,
        save_tailored_document: DocumentSaver,
        config: DictConfig = None,
        renderer: DocumentRenderer = None,
        parallel_fetch: bool = False,
    ):
        """
        Args:
            get_job_by_id: Returns the job or None when it doesn't exist
            get_candidate_profile_with_bullets: Returns the profile (with bullets) or None
            save_tailored_document: Persists a document; raises on failure
            config: Tailoring config (defaults to load_tailoring_config())
            renderer: Document renderer (defaults to one built from config)
            parallel_fetch: Issue the job and profile reads concurrently
        """
        self.config = config if config is not None else load_tailoring_config()
        self._get_job_by_id = get_job_by_id
        self._get_candidate_profile = get_candidate_profile_with_bullets
        self._save_tailored_document = save_tailored_document
        self.renderer = renderer or DocumentRenderer.from_config(self.config.rendering)
        self.weights = ScoringWeights.from_config(self.config.selection)
        self.max_bullets = int(self.config.selection.max_bullets)
        self.parallel_fetch = parallel_fetch

    @classmethod
    def from_database(cls, database, config: DictConfig = None, parallel_fetch: bool = False) -> "TailorEngine":
        """
        Build an engine over a TailoringDatabase, caching job and profile reads.

        Cache sizes, TTLs and eviction policies come from the config's
        cache.jobs and cache.profiles presets. Entries are keyed by record id
        and dropped whenever the database stores a job or profile with that id.
        """
        config = config if config is not None else load_tailoring_config()
        job_cache = CacheManager.from_config(config.cache.jobs)
        profile_cache = CacheManager.from_config(config.cache.profiles)
        caches = {"job": job_cache, "profile": profile_cache}
        database.add_write_listener(lambda kind, record_id: caches[kind].delete(record_id))

        return cls(
            get_job_by_id=memoize(job_cache, key_func=lambda job_id: job_id)(database.get_job_by_id),
            get_candidate_profile_with_bullets=memoize(profile_cache, key_func=lambda candidate_id: candidate_id)(
                database.get_candidate_profile_with_bullets
            ),
            save_tailored_document=database.save_tailored_document,
            config=config,
            parallel_fetch=parallel_fetch,
        )

    def tailor_document(self, request: TailorRequest) -> TailoredDocument:
        """
        Generate, persist and return one tailored document.

        Raises:
            UnsupportedDocumentTypeError: Unknown document type (before any store access)
            JobNotFoundError: The job does not exist
            ProfileNotFoundError: The candidate profile does not exist
            PersistenceError: The document could not be saved
        """
        start_time = time.perf_counter()
        document_type = DocumentType.parse(request.document_type)
        preferences = request.preferences or TailorPreferences()

        log_tailoring_start(document_type.value, request.candidate_id, request.job_id)

        job, profile = self._fetch(request.job_id, request.candidate_id)

        selected = select_relevant_bullets(
            profile.bullets, job.requirements, limit=self.max_bullets, weights=self.weights
        )
        log_selection_result(len(profile.bullets), selected)

        content = self.renderer.render(document_type, job, profile, selected, preferences)
        citations = build_citations(selected)

        document = TailoredDocument(
            id=new_document_id(),
            type=document_type,
            content=content,
            citations=tuple(citations),
            metadata=DocumentMetadata(
                job_id=request.job_id,
                candidate_id=request.candidate_id,
                version=str(self.config.document.version),
            ),
        )

        self._save(document)
        log_tailoring_result(document, time.perf_counter() - start_time)
        return document

    def _fetch(self, job_id: str, candidate_id: str) -> tuple[JobRecord, CandidateProfile]:
        """Read the job and profile; a missing job is reported before a missing profile."""
        if self.parallel_fetch:
            with ThreadPoolExecutor(max_workers=2) as executor:
                job_future = executor.submit(self._get_job_by_id, job_id)
                profile_future = executor.submit(self._get_candidate_profile, candidate_id)
                job = job_future.result()
                profile = profile_future.result()
        else:
            job = self._get_job_by_id(job_id)
            profile = self._get_candidate_profile(candidate_id) if job is not None else None

        if job is None:
            _log_error(f"Job not found: {job_id}")
            raise JobNotFoundError(job_id)
        if profile is None:
            _log_error(f"Candidate profile not found: {candidate_id}")
            raise ProfileNotFoundError(candidate_id)

        _log_debug(f"Loaded job '{job.title}' and {len(profile.bullets)} bullets")
        return job, profile

    def _save(self, document: TailoredDocument) -> None:
        try:
            self._save_tailored_document(document)
        except PersistenceError:
            _log_error(f"Failed to save {document.id}")
            raise
        except Exception as e:
            _log_error(f"Failed to save {document.id}: {e}")
            raise PersistenceError(
                "Failed to save tailored document", document_id=document.id, original_error=e
            ) from e


def tailor_document(
    request: TailorRequest,
    *,
    get_job_by_id: JobFetcher,
    get_candidate_profile_with_bullets: ProfileFetcher,
    save_tailored_document: DocumentSaver,
    config: DictConfig = None,
) -> TailoredDocument:
    """One-shot tailoring with explicitly injected store functions. See TailorEngine."""
    engine = TailorEngine(
        get_job_by_id=get_job_by_id,
        get_candidate_profile_with_bullets=get_candidate_profile_with_bullets,
        save_tailored_document=save_tailored_document,
        config=config,
    )
    return engine.tailor_document(request)
