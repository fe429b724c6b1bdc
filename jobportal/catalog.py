"""Job postings managed by admins, with cascading delete into the ledger."""
from __future__ import annotations

import uuid
from typing import Any, Iterable

from jobportal.ledger import ApplicationLedger
from jobportal.log import get_logger
from jobportal.models import Job, JobType, ValidationError, utcnow

log = get_logger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = (
    "title", "description", "requirements", "location", "salary",
)


def _job_id() -> str:
    return f"job-{uuid.uuid4().hex[:12]}"


def clean_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Strip and validate the editable job fields.

    Raises ValidationError naming the first blank field or an unknown job type.
    """
    cleaned: dict[str, Any] = {}
    for name in REQUIRED_FIELDS:
        value = str(fields.get(name) or "").strip()
        if not value:
            raise ValidationError(f"{name.capitalize()} is required")
        cleaned[name] = value
    cleaned["job_type"] = JobType.parse(fields.get("job_type") or "")
    return cleaned


class JobCatalog:
    def __init__(self, ledger: ApplicationLedger, seed: Iterable[dict[str, Any]] = ()) -> None:
        self._ledger = ledger
        self._jobs: list[Job] = []
        for raw in seed:
            self._jobs.append(
                Job(id=str(raw.get("id") or _job_id()), **clean_fields(raw))
            )
        if self._jobs:
            log.debug("Seeded catalog with %d job(s)", len(self._jobs))

    def __len__(self) -> int:
        return len(self._jobs)

    def get(self, job_id: str) -> Job | None:
        for job in self._jobs:
            if job.id == job_id:
                return job
        return None

    def add(self, fields: dict[str, Any]) -> Job:
        job = Job(id=_job_id(), created_at=utcnow(), **clean_fields(fields))
        self._jobs.append(job)
        log.info("Added job %s (%s)", job.id, job.title)
        return job

    def update(self, job: Job) -> Job | None:
        """Replace the stored job with the same id; None if it does not exist."""
        for i, current in enumerate(self._jobs):
            if current.id != job.id:
                continue
            cleaned = clean_fields(vars(job))
            updated = current.with_changes(updated_at=utcnow(), **cleaned)
            self._jobs[i] = updated
            log.info("Updated job %s (%s)", updated.id, updated.title)
            return updated
        log.warning("Update skipped, no job with id %s", job.id)
        return None

    def delete(self, job_id: str) -> None:
        before = len(self._jobs)
        self._jobs = [j for j in self._jobs if j.id != job_id]
        if len(self._jobs) == before:
            log.debug("Delete: no job with id %s", job_id)
        removed = self._ledger.purge_job(job_id)
        log.info("Deleted job %s (cascaded %d application(s))", job_id, removed)

    def list(self, location: str | None = None, job_type: str | None = None) -> list[Job]:
        jobs = list(self._jobs)
        if location:
            needle = location.lower()
            jobs = [j for j in jobs if needle in j.location.lower()]
        if job_type:
            wanted = job_type.lower()
            jobs = [j for j in jobs if j.job_type.value.lower() == wanted]
        return jobs
