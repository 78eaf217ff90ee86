"""
Unit tests for RegistrationService domain logic.

Tests domain logic with in-memory and mocked ports to verify:
- Check order and short-circuiting
- Password hashing
- Record persistence and role assignment
- Uniqueness races surfaced by the repository
"""

import re
from unittest.mock import Mock

import pytest

from src.adapters.repository import InMemoryApplicantRepository
from src.domain.applicant import APPLICANT_ROLE_ID
from src.domain.exceptions import ApplicantAlreadyExists
from src.domain.ports import EmailFormat, ErrorKind, RegistrationState
from src.domain.registration import RegistrationOutcome, RegistrationService, verify_password
from tests.factories import FAST_BCRYPT_COST, clara_input


class TestEndToEndScenarios:
    """Reference scenarios against the in-memory store."""

    def test_new_applicant_is_persisted(self, service, memory_repository, applicant) -> None:
        """Scenario A: valid input on empty store reaches PERSIST."""
        outcome = service.register(applicant)

        assert outcome.succeeded
        assert outcome.state == RegistrationState.PERSIST
        assert outcome.error is None
        assert len(memory_repository) == 1

        record = memory_repository.find_by_username("claraek")
        assert record == outcome.applicant
        assert record.name == "Clara"
        assert record.surname == "Eklund"
        assert record.national_id == "202203323434"
        assert record.email == "clara@kth.com"

    def test_second_identical_registration_username_taken(
        self, service, memory_repository, applicant
    ) -> None:
        """Scenario B: same input twice fails with USERNAME_TAKEN."""
        service.register(applicant)
        outcome = service.register(applicant)

        assert outcome.state == RegistrationState.FAILED
        assert outcome.error == ErrorKind.USERNAME_TAKEN
        assert len(memory_repository) == 1

    def test_email_without_separator(self, service, memory_repository) -> None:
        """Scenario C: email without '@' fails with INVALID_EMAIL."""
        outcome = service.register(clara_input(email="test.com"))

        assert outcome.error == ErrorKind.INVALID_EMAIL
        assert len(memory_repository) == 0

    def test_empty_surname(self, service, memory_repository) -> None:
        """Scenario D: empty surname fails with MISSING_PARAMETERS, store unchanged."""
        outcome = service.register(clara_input(surname=""))

        assert outcome.error == ErrorKind.MISSING_PARAMETERS
        assert len(memory_repository) == 0

    def test_taken_username_any_other_values(self, service) -> None:
        """Existing 'claraek' blocks any input using that username."""
        service.register(clara_input())

        outcome = service.register(
            clara_input(name="Other", email="other@kth.com", national_id="199001011234")
        )
        assert outcome.error == ErrorKind.USERNAME_TAKEN

    def test_email_taken(self, service) -> None:
        service.register(clara_input())
        outcome = service.register(clara_input(username="clara2", national_id="1"))
        assert outcome.error == ErrorKind.EMAIL_TAKEN

    def test_national_id_taken(self, service) -> None:
        service.register(clara_input())
        outcome = service.register(clara_input(username="clara2", email="c2@kth.com"))
        assert outcome.error == ErrorKind.PNR_TAKEN


class TestCheckOrder:
    """Checks run in a fixed order and stop at the first failure."""

    def test_missing_parameters_before_invalid_email(self, service) -> None:
        outcome = service.register(clara_input(name="", email="test.com"))
        assert outcome.error == ErrorKind.MISSING_PARAMETERS

    def test_duplicate_before_invalid_email(self, service) -> None:
        service.register(clara_input())
        outcome = service.register(clara_input(email="test.com"))
        assert outcome.error == ErrorKind.USERNAME_TAKEN

    def test_empty_check_failure_skips_later_checks(self, applicant) -> None:
        """Duplicate and email checks are not evaluated after MISSING_PARAMETERS."""
        repo = Mock()
        validator = Mock()
        validator.check_empty_fields.return_value = ErrorKind.MISSING_PARAMETERS

        service = RegistrationService(repository=repo, validator=validator)
        outcome = service.register(applicant)

        assert outcome.error == ErrorKind.MISSING_PARAMETERS
        validator.check_duplicate.assert_not_called()
        validator.check_email_format.assert_not_called()
        repo.create.assert_not_called()

    def test_duplicate_failure_skips_email_check(self, applicant) -> None:
        repo = Mock()
        validator = Mock()
        validator.check_empty_fields.return_value = None
        validator.check_duplicate.return_value = ErrorKind.PNR_TAKEN

        service = RegistrationService(repository=repo, validator=validator)
        outcome = service.register(applicant)

        assert outcome.error == ErrorKind.PNR_TAKEN
        validator.check_duplicate.assert_called_once_with(applicant, repo)
        validator.check_email_format.assert_not_called()
        repo.create.assert_not_called()

    def test_invalid_email_does_not_persist(self, applicant) -> None:
        repo = Mock()
        validator = Mock()
        validator.check_empty_fields.return_value = None
        validator.check_duplicate.return_value = None
        validator.check_email_format.return_value = EmailFormat.INVALID_EMAIL

        service = RegistrationService(repository=repo, validator=validator)
        outcome = service.register(applicant)

        assert outcome.error == ErrorKind.INVALID_EMAIL
        repo.create.assert_not_called()


class TestPersistence:
    """Tests for the record handed to the repository."""

    def test_role_is_applicant(self, service, applicant) -> None:
        outcome = service.register(applicant)
        assert outcome.applicant.role_id == APPLICANT_ROLE_ID == 2

    def test_custom_role_id(self, memory_repository, applicant) -> None:
        service = RegistrationService(
            repository=memory_repository, role_id=7, bcrypt_cost=FAST_BCRYPT_COST
        )
        assert service.register(applicant).applicant.role_id == 7

    def test_create_called_once(self, applicant) -> None:
        repo = Mock()
        repo.find_by_username.return_value = None
        repo.find_by_email.return_value = None
        repo.find_by_national_id.return_value = None

        service = RegistrationService(repository=repo, bcrypt_cost=FAST_BCRYPT_COST)
        outcome = service.register(applicant)

        repo.create.assert_called_once()
        assert outcome.applicant is repo.create.return_value

    def test_ids_are_unique(self, service) -> None:
        first = service.register(clara_input())
        second = service.register(
            clara_input(username="erik", email="erik@kth.com", national_id="199001011234")
        )
        assert first.applicant.id != second.applicant.id


class TestPasswordHashing:
    """Tests for password hashing."""

    def test_password_is_hashed(self, service, applicant) -> None:
        """Password is hashed before storage (not plaintext)."""
        password_hash = service.register(applicant).applicant.password_hash

        assert password_hash != "123"
        assert re.match(r"^\$2[aby]\$", password_hash)

    def test_password_hash_verifiable(self, service, applicant) -> None:
        """Password hash can be verified with bcrypt."""
        password_hash = service.register(applicant).applicant.password_hash
        assert verify_password("123", password_hash)
        assert not verify_password("124", password_hash)

    def test_password_hash_is_salted(self, memory_repository) -> None:
        """Two applicants with the same password get different hashes."""
        service = RegistrationService(repository=memory_repository, bcrypt_cost=FAST_BCRYPT_COST)
        first = service.register(clara_input())
        second = service.register(
            clara_input(username="erik", email="erik@kth.com", national_id="199001011234")
        )
        assert first.applicant.password_hash != second.applicant.password_hash

    def test_default_cost_factor_at_least_10(self, applicant) -> None:
        """Default bcrypt cost factor is >= 10."""
        service = RegistrationService(repository=InMemoryApplicantRepository())
        password_hash = service.register(applicant).applicant.password_hash

        cost = int(password_hash.split("$")[2])
        assert cost >= 10

    @pytest.mark.parametrize(
        "password",
        ["p" * 100, "lösenord-åäö-" * 10],
        ids=["ascii-100-chars", "multibyte-over-72-bytes"],
    )
    def test_long_password_is_persisted(self, service, password: str) -> None:
        """Passwords longer than bcrypt's 72-byte input limit still register."""
        assert len(password.encode()) > 72

        outcome = service.register(clara_input(password=password))

        assert outcome.state == RegistrationState.PERSIST
        assert verify_password(password, outcome.applicant.password_hash)

    def test_bytes_after_72_are_significant(self, service) -> None:
        """Passwords sharing their first 72 bytes do not verify against each other."""
        password = "a" * 72 + "first"

        password_hash = service.register(clara_input(password=password)).applicant.password_hash

        assert not verify_password("a" * 72 + "second", password_hash)


class TestUniquenessRace:
    """A duplicate rejected by the store becomes a FAILED outcome."""

    @pytest.mark.parametrize(
        "kind", [ErrorKind.USERNAME_TAKEN, ErrorKind.EMAIL_TAKEN, ErrorKind.PNR_TAKEN]
    )
    def test_store_rejection_is_failed_outcome(self, applicant, kind: ErrorKind) -> None:
        repo = Mock()
        repo.find_by_username.return_value = None
        repo.find_by_email.return_value = None
        repo.find_by_national_id.return_value = None
        repo.create.side_effect = ApplicantAlreadyExists(kind)

        service = RegistrationService(repository=repo, bcrypt_cost=FAST_BCRYPT_COST)
        outcome = service.register(applicant)

        assert outcome == RegistrationOutcome.failed(kind)

    def test_other_store_errors_propagate(self, applicant) -> None:
        """Infrastructure faults are left to the API boundary."""
        repo = Mock()
        repo.find_by_username.side_effect = ConnectionError("database down")

        service = RegistrationService(repository=repo)
        with pytest.raises(ConnectionError):
            service.register(applicant)


class TestRegistrationOutcome:
    def test_failed_has_no_applicant(self) -> None:
        outcome = RegistrationOutcome.failed(ErrorKind.INVALID_EMAIL)
        assert not outcome.succeeded
        assert outcome.applicant is None

    def test_outcome_is_immutable(self) -> None:
        outcome = RegistrationOutcome.failed(ErrorKind.INVALID_EMAIL)
        with pytest.raises(AttributeError):
            outcome.error = ErrorKind.UNKNOWN
