import pytest

from careerhub.services.application_service import can_transition
from careerhub.utils.constants import (
    APPLICATION_STATUS_LABELS,
    APPLICATION_STATUS_TRANSITIONS,
    EMPLOYMENT_TYPE_LABELS,
    EXPERIENCE_LEVEL_LABELS,
    JOB_TYPE_LABELS,
    ApplicationStatus,
    EmploymentType,
    ExperienceLevel,
    JobType,
)

S = ApplicationStatus


@pytest.mark.parametrize(
    "current, new",
    [
        (S.APPLIED, S.REVIEWING),
        (S.APPLIED, S.REJECTED),
        (S.APPLIED, S.WITHDRAWN),
        (S.REVIEWING, S.INTERVIEWING),
        (S.INTERVIEWING, S.OFFERED),
        (S.INTERVIEWING, S.WITHDRAWN),
    ],
)
def test_allowed_transitions(current, new) -> None:
    assert can_transition(current, new)


@pytest.mark.parametrize(
    "current, new",
    [
        (S.APPLIED, S.OFFERED),
        (S.APPLIED, S.INTERVIEWING),
        (S.REVIEWING, S.APPLIED),
        (S.OFFERED, S.WITHDRAWN),
        (S.REJECTED, S.REVIEWING),
        (S.WITHDRAWN, S.APPLIED),
    ],
)
def test_rejected_transitions(current, new) -> None:
    assert not can_transition(current, new)


def test_terminal_statuses_have_no_exits() -> None:
    for status in (S.OFFERED, S.REJECTED, S.WITHDRAWN):
        assert APPLICATION_STATUS_TRANSITIONS[status] == frozenset()


@pytest.mark.parametrize(
    "enum, labels",
    [
        (JobType, JOB_TYPE_LABELS),
        (ExperienceLevel, EXPERIENCE_LEVEL_LABELS),
        (EmploymentType, EMPLOYMENT_TYPE_LABELS),
        (ApplicationStatus, APPLICATION_STATUS_LABELS),
        (ApplicationStatus, APPLICATION_STATUS_TRANSITIONS),
    ],
)
def test_every_member_has_an_entry(enum, labels) -> None:
    assert set(labels) == set(enum)
