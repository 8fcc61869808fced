"""
Tests for the Enrollment Engine service rules, using in-memory repositories.
"""
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from clinic_programs.enrollments.models import Enrollment, EnrollmentStatus
from clinic_programs.enrollments.schemas import EnrollmentCreate
from clinic_programs.enrollments.service import ALREADY_ENROLLED, EnrollmentService, parse_status
from clinic_programs.exceptions import ConflictException, NotFoundException, ValidationException


class FakeReferences:
    """Answers existence checks for a fixed set of ids."""

    def __init__(self, *ids):
        self.ids = set(ids)

    def exists(self, record_id):
        return record_id in self.ids


class FakeEnrollments:
    def __init__(self):
        self.rows = {}

    def add(self, enrollment):
        enrollment.id = enrollment.id or str(uuid.uuid4())
        self.rows[enrollment.id] = enrollment
        return enrollment

    def get(self, enrollment_id):
        return self.rows.get(enrollment_id)

    def find_by_client_and_program(self, client_id, program_id):
        for row in self.rows.values():
            if row.client_id == client_id and row.program_id == program_id:
                return row
        return None

    def list_by_client(self, client_id):
        return [row for row in self.rows.values() if row.client_id == client_id]

    def list_by_program(self, program_id):
        return [row for row in self.rows.values() if row.program_id == program_id]

    def list_all(self):
        return list(self.rows.values())

    def save(self, enrollment):
        return enrollment

    def delete(self, enrollment):
        del self.rows[enrollment.id]


class RacingEnrollments(FakeEnrollments):
    """Another writer inserts the same pair between the read check and the insert."""

    def add(self, enrollment):
        raise IntegrityError("INSERT INTO enrollments", {}, Exception("UNIQUE constraint failed"))


@pytest.fixture
def enrollments():
    return FakeEnrollments()


@pytest.fixture
def service(enrollments):
    return EnrollmentService(enrollments, FakeReferences("ada"), FakeReferences("malaria", "tb"))


def test_enroll_defaults_to_active(service):
    enrollment = service.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")

    assert enrollment.id
    assert enrollment.status == EnrollmentStatus.ACTIVE
    assert enrollment.enrolled_by_id == "doc"


def test_enroll_keeps_requested_status_and_notes(service):
    enrollment = service.enroll(
        EnrollmentCreate(client_id="ada", program_id="tb", status=EnrollmentStatus.COMPLETED, notes="transfer"),
        "doc",
    )
    assert enrollment.status == EnrollmentStatus.COMPLETED
    assert enrollment.notes == "transfer"


@pytest.mark.parametrize(
    "client_id,program_id",
    [(None, "malaria"), ("ada", None), ("  ", "malaria"), ("", "")],
)
def test_enroll_requires_both_ids(service, client_id, program_id):
    with pytest.raises(ValidationException):
        service.enroll(EnrollmentCreate(client_id=client_id, program_id=program_id), "doc")


def test_enroll_checks_client_before_program(service):
    with pytest.raises(NotFoundException) as exc:
        service.enroll(EnrollmentCreate(client_id="ghost", program_id="nowhere"), "doc")
    assert exc.value.message == "Client does not exist"

    with pytest.raises(NotFoundException) as exc:
        service.enroll(EnrollmentCreate(client_id="ada", program_id="nowhere"), "doc")
    assert exc.value.message == "Program does not exist"


def test_enroll_twice_is_conflict(service, enrollments):
    service.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")

    with pytest.raises(ConflictException) as exc:
        service.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")

    assert exc.value.message == ALREADY_ENROLLED
    assert len(enrollments.rows) == 1


def test_enroll_maps_unique_violation_to_conflict():
    racing = EnrollmentService(RacingEnrollments(), FakeReferences("ada"), FakeReferences("malaria"))

    with pytest.raises(ConflictException) as exc:
        racing.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")

    assert exc.value.message == ALREADY_ENROLLED


def test_update_status_is_idempotent(service):
    enrollment = service.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")

    first = service.update_status(enrollment.id, "completed")
    second = service.update_status(enrollment.id, EnrollmentStatus.COMPLETED)

    assert first.status == second.status == EnrollmentStatus.COMPLETED
    assert service.update_status(enrollment.id, "ACTIVE").status == EnrollmentStatus.ACTIVE


def test_update_status_errors(service):
    enrollment = service.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")

    with pytest.raises(ValidationException):
        service.update_status(enrollment.id, "PAUSED")
    with pytest.raises(ValidationException):
        service.update_status(enrollment.id, None)
    with pytest.raises(ValidationException):
        service.update_status("", "ACTIVE")
    with pytest.raises(NotFoundException):
        service.update_status("missing", "ACTIVE")


def test_parse_status():
    assert parse_status(" dropped ") == EnrollmentStatus.DROPPED
    with pytest.raises(ValidationException) as exc:
        parse_status("unknown")
    assert "ACTIVE, COMPLETED, DROPPED" in exc.value.message


def test_delete_then_list_excludes_enrollment(service):
    enrollment = service.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")
    service.enroll(EnrollmentCreate(client_id="ada", program_id="tb"), "doc")

    service.delete(enrollment.id)

    assert [e.program_id for e in service.list_by_client("ada")] == ["tb"]
    with pytest.raises(NotFoundException):
        service.delete(enrollment.id)


def test_list_by_client_empty_is_valid(service):
    assert service.list_by_client("ada") == []
    with pytest.raises(ValidationException):
        service.list_by_client(" ")


def test_empty_listings_return_empty_lists_by_default(service):
    assert service.list_by_program("malaria") == []
    assert service.list_all() == []


def test_empty_listings_raise_when_strict(enrollments):
    strict = EnrollmentService(enrollments, FakeReferences("ada"), FakeReferences("malaria"), raise_on_empty=True)

    with pytest.raises(NotFoundException):
        strict.list_by_program("malaria")
    with pytest.raises(NotFoundException):
        strict.list_all()

    strict.enroll(EnrollmentCreate(client_id="ada", program_id="malaria"), "doc")
    assert len(strict.list_by_program("malaria")) == 1
    assert strict.list_by_client("nobody") == []


def test_enrollment_model_declares_client_program_uniqueness():
    constraint_columns = [
        {column.name for column in constraint.columns}
        for constraint in Enrollment.__table__.constraints
        if constraint.name == "uq_enrollment_client_program"
    ]
    assert constraint_columns == [{"client_id", "program_id"}]
