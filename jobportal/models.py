"""Data models for sessions, jobs and applications."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"

    @classmethod
    def parse(cls, value: str | JobType) -> JobType:
        if isinstance(value, JobType):
            return value
        needle = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == needle:
                return member
        raise ValidationError(f"Unknown job type: {value!r}")


class ValidationError(ValueError):
    """Job fields rejected by the catalog."""


@dataclass
class Job:
    id: str
    title: str
    description: str
    requirements: str
    location: str
    salary: str
    job_type: JobType = JobType.FULL_TIME
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def with_changes(self, **changes) -> Job:
        return replace(self, **changes)


@dataclass(frozen=True)
class Application:
    id: str
    job_id: str
    job_title: str
    user_id: str
    user_email: str
    applied_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Session:
    email: str
    user_id: str
    is_admin: bool = False


# Identity variants; views dispatch on the concrete class.


@dataclass(frozen=True)
class Guest:
    pass


@dataclass(frozen=True)
class User:
    email: str
    user_id: str


@dataclass(frozen=True)
class Admin:
    email: str
    user_id: str


Identity = Guest | User | Admin


@dataclass(frozen=True)
class Result:
    success: bool
    message: str | None = None

    @property
    def kind(self) -> str:
        return "success" if self.success else "error"

    @classmethod
    def ok(cls, message: str | None = None) -> Result:
        return cls(True, message)

    @classmethod
    def fail(cls, message: str) -> Result:
        return cls(False, message)
