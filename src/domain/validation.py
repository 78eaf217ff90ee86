"""
Applicant validation - Pure checks run before an applicant is persisted.

Each check returns a tagged result instead of raising, so the workflow
can stop at the first failure:

1. check_empty_fields  - every required field is present
2. check_duplicate     - username, email and national ID are unused
3. check_email_format  - the email has a local part, one '@' and a domain

None of the checks mutate the repository, so calling them repeatedly on
the same input yields the same result.
"""

import logging

from .applicant import ApplicantInput
from .ports import ApplicantRepository, EmailFormat, ErrorKind

logger = logging.getLogger(__name__)


def is_well_formed_email(email: str) -> bool:
    """
    Check the basic shape of an email address.

    Well-formed means exactly one '@' with a non-empty local part before it
    and a non-empty domain part after it. This is not an RFC 5322 check.
    """
    local, separator, domain = email.partition("@")
    if not separator or "@" in domain:
        return False
    return bool(local) and bool(domain)


def check_empty_fields(applicant: ApplicantInput) -> ErrorKind | None:
    """
    Return MISSING_PARAMETERS if any required field is empty.

    Fields are checked in the order name, surname, national_id, password,
    username, email. The error does not say which field was missing.
    """
    fields = (
        applicant.name,
        applicant.surname,
        applicant.national_id,
        applicant.password,
        applicant.username,
        applicant.email,
    )
    for value in fields:
        if value == "":
            return ErrorKind.MISSING_PARAMETERS
    return None


def check_duplicate(
    applicant: ApplicantInput, repository: ApplicantRepository
) -> ErrorKind | None:
    """
    Return the first uniqueness violation, or None if the applicant is new.

    Lookups run in the order username, email, national ID and stop at the
    first match.
    """
    taken = repository.find_by_username(applicant.username) is not None
    logger.debug("Username %s taken: %s", applicant.username, taken)
    if taken:
        return ErrorKind.USERNAME_TAKEN

    taken = repository.find_by_email(applicant.email) is not None
    logger.debug("Email %s taken: %s", applicant.email, taken)
    if taken:
        return ErrorKind.EMAIL_TAKEN

    taken = repository.find_by_national_id(applicant.national_id) is not None
    logger.debug("National ID %s taken: %s", applicant.national_id, taken)
    if taken:
        return ErrorKind.PNR_TAKEN

    return None


def check_email_format(applicant: ApplicantInput) -> EmailFormat:
    """Return CORRECT_EMAIL if the applicant's email is well-formed."""
    if is_well_formed_email(applicant.email):
        return EmailFormat.CORRECT_EMAIL
    return EmailFormat.INVALID_EMAIL


class ApplicantValidator:
    """
    Stateless bundle of the validation checks.

    Injected into RegistrationService so the workflow can be exercised
    with a substitute validator.
    """

    def check_empty_fields(self, applicant: ApplicantInput) -> ErrorKind | None:
        return check_empty_fields(applicant)

    def check_duplicate(
        self, applicant: ApplicantInput, repository: ApplicantRepository
    ) -> ErrorKind | None:
        return check_duplicate(applicant, repository)

    def check_email_format(self, applicant: ApplicantInput) -> EmailFormat:
        return check_email_format(applicant)
