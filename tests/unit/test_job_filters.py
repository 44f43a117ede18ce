from datetime import datetime
from uuid import uuid4

import pytest

from careerhub.core.errors import ValidationFailed
from careerhub.schemas.job_filters import (
    parse_dashboard_filters,
    parse_job_search_params,
    split_csv,
)
from careerhub.utils.constants import EmploymentType, ExperienceLevel, JobSortKey, JobType


def test_defaults_when_no_parameters() -> None:
    params = parse_job_search_params({})

    assert params.page == 1
    assert params.limit == 20
    assert params.sort_by == JobSortKey.DATE_DESC
    assert params.job_type == []
    assert params.search is None


def test_blank_values_count_as_absent() -> None:
    params = parse_job_search_params({"search": "   ", "page": "", "jobType": ""})

    assert params.search is None
    assert params.page == 1
    assert params.job_type == []


def test_enum_lists_are_split_and_case_insensitive() -> None:
    params = parse_job_search_params(
        {
            "jobType": "remote, full_time",
            "experienceLevel": "SENIOR,lead",
            "employmentType": "permanent",
            "department": "Engineering, Design,",
        }
    )

    assert params.job_type == [JobType.REMOTE, JobType.FULL_TIME]
    assert params.experience_level == [ExperienceLevel.SENIOR, ExperienceLevel.LEAD]
    assert params.employment_type == [EmploymentType.PERMANENT]
    assert params.department == ["Engineering", "Design"]


def test_sort_key_and_company_id() -> None:
    company_id = uuid4()
    params = parse_job_search_params({"sortBy": "TITLE-ASC", "companyBrandingId": str(company_id)})

    assert params.sort_by == JobSortKey.TITLE_ASC
    assert params.company_branding_id == company_id


@pytest.mark.parametrize(
    "raw, field",
    [
        ({"jobType": "FULL_TIME,FREELANCE"}, "jobType"),
        ({"limit": "0"}, "limit"),
        ({"limit": "101"}, "limit"),
        ({"page": "0"}, "page"),
        ({"page": "abc"}, "page"),
        ({"sortBy": "salary-desc"}, "sortBy"),
        ({"companyBrandingId": "not-a-uuid"}, "companyBrandingId"),
        ({"search": "x" * 201}, "search"),
    ],
)
def test_invalid_parameters_are_reported_per_field(raw, field) -> None:
    with pytest.raises(ValidationFailed) as exc_info:
        parse_job_search_params(raw)

    assert exc_info.value.message == "Invalid search parameters"
    assert field in exc_info.value.details


def test_split_csv_drops_empty_members() -> None:
    assert split_csv(" a, ,b ,") == ["a", "b"]


def test_dashboard_bare_dates_cover_whole_day() -> None:
    filters = parse_dashboard_filters({"dateFrom": "2024-05-01", "dateTo": "2024-05-31"})

    assert filters.date_from == datetime(2024, 5, 1, 0, 0, 0)
    assert filters.date_to == datetime(2024, 5, 31, 23, 59, 59, 999999)


def test_dashboard_timezone_aware_dates_become_naive_utc() -> None:
    filters = parse_dashboard_filters({"dateFrom": "2024-05-01T05:30:00+05:30"})

    assert filters.date_from == datetime(2024, 5, 1, 0, 0, 0)


def test_dashboard_is_active_tri_state() -> None:
    assert parse_dashboard_filters({}).is_active is None
    assert parse_dashboard_filters({"isActive": "TRUE"}).is_active is True
    assert parse_dashboard_filters({"isActive": "false"}).is_active is False

    with pytest.raises(ValidationFailed) as exc_info:
        parse_dashboard_filters({"isActive": "yes"})
    assert "isActive" in exc_info.value.details


def test_dashboard_single_enums() -> None:
    filters = parse_dashboard_filters({"jobType": "contract", "experienceLevel": "junior"})

    assert filters.job_type == JobType.CONTRACT
    assert filters.experience_level == ExperienceLevel.JUNIOR
