"""
ProofOfFit - evidence-backed document tailoring

Turns a candidate's atomic evidence statements ("bullets") into a resume,
cover letter or outreach email targeted at one job, and records which bullet
backs which claim.

Architecture:
- Intake Context: Job records, requirements, and candidate evidence
- Targeting Context: Relevance scoring and bullet selection
- Templating Context: Fixed document templates and rendering
- Tailoring Context: Citations, tailored documents, and orchestration
- Storage Context: SQLite store and bounded caches for the consumed interfaces
"""

__version__ = "0.1.0"
