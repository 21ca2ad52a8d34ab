"""Tests for the job list screen."""

from datetime import date

import httpx
import pytest

from techportal.cache import JOB_LIST, build_snapshot_key
from techportal.domain.jobs.router import get_job_list_service
from techportal.domain.jobs.schemas import JobListRequest, JobRecord, effective_month
from techportal.domain.jobs.service import JOBS_PATH, SEARCH_PATH, JobListService, add_prefix_to_call_nbr, render_job
from techportal.main import app

JOBS = [
    {
        "callNbr": "0000000101",
        "custName": "Acme Hospital",
        "status": "Completed",
        "techName": "Bob Tech",
        "techID": "12",
        "accMgr": "Smith, John",
        "strtDate": "2024-03-01T00:00:00",
        "returnJob": "1900-01-01T00:00:00",
        "equipStatus": "A",
        "priority": "Critical",
    },
    {
        "callNbr": "0000000102",
        "custName": "bayside Data",
        "status": "Pending",
        "techName": "Ann Tech",
        "techID": "7",
        "accMgr": "Jones, Ann",
        "strtDate": "2024-02-15T00:00:00",
    },
    {
        "callNbr": "0000000103",
        "custName": None,
        "status": "Pending",
        "techName": "Bob Tech",
        "techID": "12",
        "strtDate": None,
    },
]


@pytest.fixture
def job_service(upstream, memory_cache):
    service = JobListService(upstream.source(), memory_cache, page_size=2)
    app.dependency_overrides[get_job_list_service] = lambda: service
    return service


@pytest.mark.parametrize(
    "job_id,expected",
    [
        ("123", "0000000123"),
        ("  45 ", "0000000045"),
        ("0000000123", "0000000123"),
        ("12345678901", "1234567890"),
        ("", ""),
        (None, ""),
    ],
)
def test_add_prefix_to_call_nbr(job_id, expected):
    assert add_prefix_to_call_nbr(job_id) == expected


def test_effective_month():
    today = date(2024, 5, 10)
    assert effective_month(None, "All", "All", today) == 5
    assert effective_month(None, "ALL", "%", today) == 5
    assert effective_month(None, "12", "All", today) == 0
    assert effective_month(None, "All", "Smith", today) == 0
    assert effective_month(3, "12", "All", today) == 3
    assert effective_month(0, "All", "All", today) == 0


def test_upstream_params_exclude_client_side_fields():
    request = JobListRequest(empId="E1", currentYear=2024, status="Open", keyword="acme")
    assert request.upstream_params(today=date(2024, 5, 10)) == {
        "empId": "E1",
        "techId": "All",
        "mgrId": "All",
        "rbButton": 0,
        "currentYear": 2024,
        "month": 5,
    }


def test_job_record_aliases_and_validation():
    job = JobRecord.model_validate({"CallNbr": " 0000000101 ", "TechID": "12", "StrDate": "2024-03-01"})
    assert job.callNbr == "0000000101"
    assert job.techId == "12"
    assert job.strDate == "2024-03-01"
    with pytest.raises(ValueError):
        JobRecord.model_validate({"callNbr": "   "})


def test_render_job_adds_presentation_fields():
    row = render_job(JobRecord.model_validate(JOBS[0]))
    assert row["statusClass"] == "status-cyber status-completed"
    assert row["equipStatusColor"] == "#dc3545"
    assert row["equipStatusTooltip"] == "Off-Line"
    assert row["priorityColor"] == "red"
    assert row["startDate"] == "03/01/2024"
    assert row["returnJobDisplay"] == ""


def test_list_jobs_endpoint(client, upstream, job_service):
    upstream.responses[JOBS_PATH] = JOBS

    response = client.get("/jobs", params={"empId": "E1", "techId": "12", "currentYear": 2024})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["pageCount"] == 2
    assert [r["callNbr"] for r in data["rows"]] == ["0000000101", "0000000102"]
    params = upstream.requests[0].url.params
    assert params["empId"] == "E1"
    assert params["techId"] == "12"
    assert params["month"] == "0"
    assert params["currentYear"] == "2024"
    assert "status" not in params


def test_list_jobs_filters_and_sorts_client_side(client, upstream, job_service):
    upstream.responses[JOBS_PATH] = JOBS

    response = client.get("/jobs", params={"status": "Pending", "sort": "custName", "direction": "asc"})

    data = response.json()
    assert [r["callNbr"] for r in data["rows"]] == ["0000000102", "0000000103"]
    assert data["total"] == 2
    assert (data["sortColumn"], data["sortDirection"]) == ("custName", "asc")


def test_list_jobs_second_page(client, upstream, job_service):
    upstream.responses[JOBS_PATH] = JOBS

    data = client.get("/jobs", params={"page": 2}).json()
    assert data["page"] == 2
    assert [r["callNbr"] for r in data["rows"]] == ["0000000103"]
    assert (data["startRecord"], data["endRecord"]) == (3, 3)


def test_list_jobs_page_out_of_range_stays_on_first(client, upstream, job_service):
    upstream.responses[JOBS_PATH] = JOBS

    data = client.get("/jobs", params={"page": 9}).json()
    assert data["page"] == 1


def test_list_jobs_upstream_failure_falls_back_to_snapshot(client, upstream, job_service, memory_cache):
    upstream.responses[JOBS_PATH] = JOBS
    client.get("/jobs", params={"empId": "E1"})
    key = build_snapshot_key(JOB_LIST, JobListRequest(empId="E1").upstream_params())
    assert memory_cache.get(key) is not None

    upstream.responses[JOBS_PATH] = httpx.Response(500, text="boom")
    data = client.get("/jobs", params={"empId": "E1"}).json()
    assert data["stale"] is True
    assert data["total"] == 3
    assert data["message"] == "Error loading jobs: Server responded with status 500"

    other = client.get("/jobs", params={"empId": "E2"}).json()
    assert other["rows"] == []
    assert other["stale"] is False
    assert other["message"].startswith("Error loading jobs")

    last_year = client.get("/jobs", params={"empId": "E1", "currentYear": 2001}).json()
    assert last_year["rows"] == []
    assert last_year["stale"] is False


def test_list_jobs_rejects_bad_sort(client, upstream, job_service):
    upstream.responses[JOBS_PATH] = JOBS
    assert client.get("/jobs", params={"sort": "colour"}).status_code == 400
    assert client.get("/jobs", params={"direction": "sideways"}).status_code == 400
    assert client.get("/jobs", params={"month": 13}).status_code == 422


def test_search_jobs_pads_call_number(client, upstream, job_service, memory_cache):
    upstream.responses[SEARCH_PATH] = [JOBS[0]]

    response = client.get("/jobs/search", params={"jobId": "101"})

    assert response.status_code == 200
    assert [r["callNbr"] for r in response.json()["rows"]] == ["0000000101"]
    assert upstream.requests[0].url.params["jobId"] == "0000000101"
    assert memory_cache.get("snapshot:joblist") is None


def test_search_jobs_failure_message(client, upstream, job_service):
    upstream.responses[SEARCH_PATH] = httpx.Response(503, text="down")

    data = client.get("/jobs/search", params={"jobId": "101"}).json()
    assert data["rows"] == []
    assert data["message"] == "Error searching jobs: Server responded with status 503"


def test_search_jobs_requires_id(client, upstream, job_service):
    response = client.get("/jobs/search", params={"jobId": "  "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a Job ID to search"
    assert upstream.requests == []
