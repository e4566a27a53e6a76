"""
Persistent SQLite store for jobs, candidate evidence, and tailored documents.

Implements the three interfaces the tailoring engine consumes
(get_job_by_id, get_candidate_profile_with_bullets, save_tailored_document)
plus the writes and queries the CLI needs.
"""

import json
import sqlite3
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from proofoffit.contexts.intake.evidence_data_structure import Bullet, BulletTags, CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord, JobRequirements
from proofoffit.contexts.storage.logger import _log_debug, _log_error, _log_info
from proofoffit.contexts.tailoring.document_data_structure import TailoredDocument
from proofoffit.contexts.tailoring.exceptions import PersistenceError
from proofoffit.utils.event_logging import log_pipeline_event

SCHEMA = """
CREATE TABLE IF NOT EXISTS jobs (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    organization TEXT NOT NULL,
    requirements TEXT NOT NULL,
    location TEXT,
    description TEXT,
    work_type TEXT
);

CREATE TABLE IF NOT EXISTS candidate_profiles (
    id TEXT PRIMARY KEY,
    email TEXT,
    display_name TEXT
);

CREATE TABLE IF NOT EXISTS bullets (
    candidate_id TEXT NOT NULL REFERENCES candidate_profiles(id) ON DELETE CASCADE,
    id TEXT NOT NULL,
    position INTEGER NOT NULL,
    text TEXT NOT NULL,
    tags TEXT NOT NULL,
    PRIMARY KEY (candidate_id, id)
);

CREATE TABLE IF NOT EXISTS tailored_documents (
    id TEXT PRIMARY KEY,
    candidate_id TEXT NOT NULL,
    job_id TEXT NOT NULL,
    type TEXT NOT NULL,
    content TEXT NOT NULL,
    citations TEXT NOT NULL,
    metadata TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_bullets_candidate ON bullets(candidate_id, position);
CREATE INDEX IF NOT EXISTS idx_documents_candidate ON tailored_documents(candidate_id);
CREATE INDEX IF NOT EXISTS idx_documents_job ON tailored_documents(job_id);
"""


class TailoringDatabase:
    """
    SQLite database backing the tailoring engine.

    The database is persistent: create it once with TailoringDatabase.create(),
    then open it later by instantiating with the db_path. Tailored documents
    are append-only; saving an id twice is a PersistenceError.
    """

    def __init__(self, db_path: Path):
        """
        Open an existing database.

        Args:
            db_path: Path to existing SQLite database file

        Raises:
            FileNotFoundError: If database file doesn't exist
        """
        self.db_path = Path(db_path)

        if not self.db_path.exists():
            raise FileNotFoundError(
                f"Database not found: {self.db_path}\n"
                f"To create a new database, use TailoringDatabase.create()"
            )

        # The engine may read from a worker thread when parallel_fetch is on
        self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.Lock()
        self._write_listeners: List[Callable[[str, str], None]] = []

    @classmethod
    def create(cls, db_path: Path, overwrite: bool = False) -> "TailoringDatabase":
        """
        Create the schema (if missing) and open the database.

        Args:
            db_path: Where the database file lives
            overwrite: Delete an existing file first

        Returns:
            Open TailoringDatabase
        """
        db_path = Path(db_path)
        if overwrite and db_path.exists():
            db_path.unlink()

        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path))
        conn.executescript(SCHEMA)
        conn.commit()
        conn.close()

        _log_debug(f"Schema ready at {db_path}")
        return cls(db_path)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "TailoringDatabase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def query(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """
        Execute SQL query and return results as list of dicts.

        Args:
            sql: SQL query string
            params: Query parameters (for parameterized queries)
        """
        with self._lock:
            cursor = self.conn.execute(sql, params)
            return [dict(row) for row in cursor.fetchall()]

    # =========================================================================
    # WRITES
    # =========================================================================

    def add_write_listener(self, callback: Callable[[str, str], None]) -> None:
        """
        Register a callback run after each committed job or profile write.

        The callback receives the record kind ("job" or "profile") and its id.
        TailorEngine.from_database uses this to drop stale cache entries.
        """
        self._write_listeners.append(callback)

    def _notify_write(self, kind: str, record_id: str) -> None:
        for callback in self._write_listeners:
            callback(kind, record_id)

    def add_job(self, job: JobRecord) -> None:
        """Insert or replace a job record."""
        with self._lock:
            self.conn.execute(
                """
                INSERT OR REPLACE INTO jobs (
                    id, title, organization, requirements, location, description, work_type
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    job.id,
                    job.title,
                    job.organization,
                    json.dumps(job.requirements.to_dict()),
                    job.location,
                    job.description,
                    job.work_type,
                ),
            )
            self.conn.commit()
        _log_info(f"Stored job {job.id} ({len(job.requirements.all())} requirements)")
        self._notify_write("job", job.id)

    def add_candidate_profile(self, profile: CandidateProfile) -> None:
        """Insert or replace a profile; its bullets are replaced wholesale, keeping order."""
        with self._lock:
            self.conn.execute(
                "INSERT OR REPLACE INTO candidate_profiles (id, email, display_name) VALUES (?, ?, ?)",
                (profile.id, profile.email, profile.display_name),
            )
            self.conn.execute("DELETE FROM bullets WHERE candidate_id = ?", (profile.id,))
            self.conn.executemany(
                "INSERT INTO bullets (candidate_id, id, position, text, tags) VALUES (?, ?, ?, ?, ?)",
                [
                    (profile.id, bullet.id, position, bullet.text, json.dumps(bullet.tags.to_dict()))
                    for position, bullet in enumerate(profile.bullets)
                ],
            )
            self.conn.commit()
        _log_info(f"Stored profile {profile.id} with {len(profile.bullets)} bullets")
        self._notify_write("profile", profile.id)

    def save_tailored_document(self, document: TailoredDocument) -> None:
        """
        Append a tailored document and log a document_saved event.

        Raises:
            PersistenceError: If the id already exists or the write fails
        """
        metadata = document.metadata
        with self._lock:
            try:
                self.conn.execute(
                    """
                    INSERT INTO tailored_documents (
                        id, candidate_id, job_id, type, content, citations, metadata, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        document.id,
                        metadata.candidate_id,
                        metadata.job_id,
                        document.type.value,
                        document.content,
                        json.dumps([c.to_dict() for c in document.citations]),
                        json.dumps(metadata.to_dict()),
                        metadata.created_at.isoformat(),
                    ),
                )
                self.conn.commit()
            except sqlite3.IntegrityError as e:
                self.conn.rollback()
                _log_error(f"Document {document.id} already stored")
                raise PersistenceError(
                    "Tailored document already exists", document_id=document.id, original_error=e
                ) from e
            except sqlite3.Error as e:
                self.conn.rollback()
                _log_error(f"Could not store document {document.id}: {e}")
                raise PersistenceError(
                    "Failed to write tailored document", document_id=document.id, original_error=e
                ) from e

        log_pipeline_event(
            event_type="document_saved",
            document_id=document.id,
            source="storage",
            candidate_id=metadata.candidate_id,
            job_id=metadata.job_id,
            document_type=document.type.value,
            citation_count=len(document.citations),
        )

    # =========================================================================
    # READS
    # =========================================================================

    def get_job_by_id(self, job_id: str) -> Optional[JobRecord]:
        rows = self.query("SELECT * FROM jobs WHERE id = ?", (job_id,))
        if not rows:
            return None

        row = rows[0]
        requirements = json.loads(row["requirements"])
        return JobRecord(
            id=row["id"],
            title=row["title"],
            organization=row["organization"],
            requirements=JobRequirements.from_dict(requirements),
            location=row["location"],
            description=row["description"],
            work_type=row["work_type"],
        )

    def get_candidate_profile_with_bullets(self, candidate_id: str) -> Optional[CandidateProfile]:
        rows = self.query("SELECT * FROM candidate_profiles WHERE id = ?", (candidate_id,))
        if not rows:
            return None

        bullet_rows = self.query(
            "SELECT * FROM bullets WHERE candidate_id = ? ORDER BY position", (candidate_id,)
        )
        return CandidateProfile(
            id=rows[0]["id"],
            email=rows[0]["email"],
            display_name=rows[0]["display_name"],
            bullets=[
                Bullet(id=row["id"], text=row["text"], tags=BulletTags.from_dict(json.loads(row["tags"])))
                for row in bullet_rows
            ],
        )

    def get_tailored_document(self, document_id: str) -> Optional[TailoredDocument]:
        rows = self.query("SELECT * FROM tailored_documents WHERE id = ?", (document_id,))
        return self._row_to_document(rows[0]) if rows else None

    def list_tailored_documents(
        self, candidate_id: Optional[str] = None, job_id: Optional[str] = None
    ) -> List[TailoredDocument]:
        """List stored documents, oldest first, optionally filtered by candidate and/or job."""
        clauses = []
        params = []
        if candidate_id:
            clauses.append("candidate_id = ?")
            params.append(candidate_id)
        if job_id:
            clauses.append("job_id = ?")
            params.append(job_id)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self.query(
            f"SELECT * FROM tailored_documents{where} ORDER BY created_at, rowid", tuple(params)
        )
        return [self._row_to_document(row) for row in rows]

    @staticmethod
    def _row_to_document(row: Dict[str, Any]) -> TailoredDocument:
        return TailoredDocument.from_dict(
            {
                "id": row["id"],
                "type": row["type"],
                "content": row["content"],
                "citations": json.loads(row["citations"]),
                "metadata": json.loads(row["metadata"]),
            }
        )
