"""
In-memory repository adapter - Implements ApplicantRepository protocol.

Dict-backed store for local development and tests. Mirrors the PostgreSQL
adapter's uniqueness constraints: create() re-checks username, email and
national ID under a lock and raises ApplicantAlreadyExists on a clash.
"""

import itertools
import threading

from src.domain.applicant import ApplicantRecord, NewApplicant
from src.domain.exceptions import ApplicantAlreadyExists
from src.domain.ports import ErrorKind


class InMemoryApplicantRepository:
    """
    Implements ApplicantRepository protocol with process-local state.

    Safe to share between request threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._records: dict[int, ApplicantRecord] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def all(self) -> list[ApplicantRecord]:
        """Return every stored record ordered by id."""
        with self._lock:
            return [self._records[key] for key in sorted(self._records)]

    def find_by_username(self, username: str) -> ApplicantRecord | None:
        with self._lock:
            return self._find(lambda r: r.username == username)

    def find_by_email(self, email: str) -> ApplicantRecord | None:
        with self._lock:
            return self._find(lambda r: r.email == email)

    def find_by_national_id(self, national_id: str) -> ApplicantRecord | None:
        with self._lock:
            return self._find(lambda r: r.national_id == national_id)

    def create(self, applicant: NewApplicant) -> ApplicantRecord:
        with self._lock:
            if self._find(lambda r: r.username == applicant.username):
                raise ApplicantAlreadyExists(ErrorKind.USERNAME_TAKEN)
            if self._find(lambda r: r.email == applicant.email):
                raise ApplicantAlreadyExists(ErrorKind.EMAIL_TAKEN)
            if self._find(lambda r: r.national_id == applicant.national_id):
                raise ApplicantAlreadyExists(ErrorKind.PNR_TAKEN)

            record = ApplicantRecord.from_new(next(self._ids), applicant)
            self._records[record.id] = record
            return record

    def _find(self, predicate) -> ApplicantRecord | None:
        # Caller must hold self._lock
        for record in self._records.values():
            if predicate(record):
                return record
        return None
