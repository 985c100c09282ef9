"""
Tests for job posting, lookup, search and ownership rules.
"""
import pytest

from app.db.models.job import Job
from app.db.models.application import Application


JOB_PAYLOAD = {
    "title": "Data Engineer",
    "description": "Build pipelines",
    "requirements": "Python, SQL",
    "salary": 95000,
    "location": "Berlin",
}


# ============================================
# Posting
# ============================================

def test_post_job_as_employer(client, db, employer, auth_headers):
    response = client.post("/api/jobs", json=JOB_PAYLOAD, headers=auth_headers(employer))

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Job posted successfully"

    job = db.query(Job).filter(Job.id == data["job_id"]).first()
    assert job.employer_id == employer.id
    assert job.title == "Data Engineer"
    assert job.salary == 95000
    # Falls back to the employer's company
    assert job.company_name == "Acme Corp"


def test_post_job_keeps_explicit_company_name(client, db, employer, auth_headers):
    payload = dict(JOB_PAYLOAD, company_name="Acme Labs")

    response = client.post("/api/jobs", json=payload, headers=auth_headers(employer))

    job = db.query(Job).filter(Job.id == response.json()["job_id"]).first()
    assert job.company_name == "Acme Labs"


def test_post_job_as_job_seeker_forbidden(client, seeker, auth_headers):
    response = client.post("/api/jobs", json=JOB_PAYLOAD, headers=auth_headers(seeker))

    assert response.status_code == 403
    assert "error" in response.json()


def test_post_job_without_token(client):
    response = client.post("/api/jobs", json=JOB_PAYLOAD)

    assert response.status_code == 401


def test_post_job_non_numeric_salary(client, employer, auth_headers):
    payload = dict(JOB_PAYLOAD, salary="lots")

    response = client.post("/api/jobs", json=payload, headers=auth_headers(employer))

    assert response.status_code == 400
    assert "salary" in response.json()["error"]


def test_post_job_numeric_string_salary(client, db, employer, auth_headers):
    payload = dict(JOB_PAYLOAD, salary="5000")

    response = client.post("/api/jobs", json=payload, headers=auth_headers(employer))

    assert response.status_code == 201
    assert db.query(Job).filter(Job.id == response.json()["job_id"]).first().salary == 5000


# ============================================
# Lookup
# ============================================

def test_get_job(client, employer, make_job):
    job = make_job(employer, title="QA Lead", location="Remote", salary=70000)

    response = client.get(f"/api/jobs/{job.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == job.id
    assert data["title"] == "QA Lead"
    assert data["employer_id"] == employer.id
    assert data["employer_name"] == "Erin Employer"
    assert data["salary"] == 70000


def test_get_missing_job(client):
    response = client.get("/api/jobs/9999")

    assert response.status_code == 404
    assert response.json() == {"error": "Job not found"}


def test_my_jobs_lists_only_callers_jobs(client, employer, other_employer, make_job, auth_headers):
    first = make_job(employer, title="First")
    make_job(other_employer, title="Not Mine")
    second = make_job(employer, title="Second")

    response = client.get("/api/jobs/my-jobs", headers=auth_headers(employer))

    assert response.status_code == 200
    assert [job["id"] for job in response.json()] == [second.id, first.id]


def test_my_jobs_requires_employer(client, seeker, auth_headers):
    response = client.get("/api/jobs/my-jobs", headers=auth_headers(seeker))

    assert response.status_code == 403


# ============================================
# Search
# ============================================

@pytest.fixture
def salary_jobs(employer, make_job):
    return [
        make_job(employer, title="Junior", salary=1000, location="Berlin"),
        make_job(employer, title="Mid", salary=2000, location="Munich"),
        make_job(employer, title="Senior", salary=3000, location="Berlin"),
    ]


def test_search_salary_min(client, salary_jobs):
    """Test salary_min=1500 returns the 2000 and 3000 jobs, newest first."""
    response = client.get("/api/jobs", params={"salary_min": 1500})

    assert response.status_code == 200
    data = response.json()
    assert [job["salary"] for job in data] == [3000, 2000]
    assert data[0]["id"] > data[1]["id"]


def test_search_salary_range_is_inclusive(client, salary_jobs):
    response = client.get("/api/jobs", params={"salary_min": 1000, "salary_max": 2000})

    assert [job["salary"] for job in response.json()] == [2000, 1000]


def test_search_without_filters_newest_first(client, salary_jobs):
    response = client.get("/api/jobs")

    ids = [job["id"] for job in response.json()]
    assert ids == sorted((job.id for job in salary_jobs), reverse=True)


def test_search_location_and_salary_are_combined(client, salary_jobs):
    response = client.get("/api/jobs", params={"location": "Berlin", "salary_max": 2500})

    assert [job["title"] for job in response.json()] == ["Junior"]


def test_search_keyword_matches_any_text_field(client, employer, make_job):
    by_title = make_job(employer, title="Python Developer")
    by_description = make_job(employer, title="Dev", description="We love Python here")
    by_requirements = make_job(employer, title="Ops", requirements="Python scripting")
    make_job(employer, title="Designer", description="Figma")

    response = client.get("/api/jobs", params={"keyword": "Python"})

    assert [job["id"] for job in response.json()] == [by_requirements.id, by_description.id, by_title.id]


def test_search_keyword_is_case_sensitive(client, employer, make_job):
    make_job(employer, title="Python Developer")

    response = client.get("/api/jobs", params={"keyword": "python"})

    assert response.json() == []


def test_search_keyword_wildcards_are_literal(client, employer, make_job):
    make_job(employer, title="Sales 100% commission")
    make_job(employer, title="Sales 1000 base")

    response = client.get("/api/jobs", params={"keyword": "100%"})

    assert [job["title"] for job in response.json()] == ["Sales 100% commission"]


def test_search_pagination(client, employer, make_job):
    jobs = [make_job(employer, title=f"Job {i}") for i in range(15)]
    newest_first = [job.id for job in reversed(jobs)]

    first_page = client.get("/api/jobs").json()
    second_page = client.get("/api/jobs", params={"limit": 10, "offset": 10}).json()
    small_page = client.get("/api/jobs", params={"limit": 3, "offset": 2}).json()

    assert [job["id"] for job in first_page] == newest_first[:10]
    assert [job["id"] for job in second_page] == newest_first[10:]
    assert [job["id"] for job in small_page] == newest_first[2:5]


@pytest.mark.parametrize("params", [
    {"limit": "abc"},
    {"offset": "ten"},
    {"limit": "-1"},
    {"limit": "99999999999999999999"},
    {"offset": "9223372036854775808"},
])
def test_search_invalid_pagination(client, params):
    response = client.get("/api/jobs", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid limit or offset"}


def test_search_invalid_salary(client):
    response = client.get("/api/jobs", params={"salary_min": "cheap"})

    assert response.status_code == 400
    assert response.json() == {"error": "salary_min must be a valid number"}


@pytest.mark.parametrize("value", ["nan", "inf", "-Infinity"])
def test_search_non_finite_salary(client, value):
    response = client.get("/api/jobs", params={"salary_min": value})

    assert response.status_code == 400
    assert response.json() == {"error": "salary_min must be a valid number"}


# ============================================
# Update / delete with ownership
# ============================================

def test_update_own_job_is_partial(client, db, employer, make_job, auth_headers):
    job = make_job(employer, title="Old Title", location="Paris", salary=1000)
    job_id = job.id

    response = client.put(f"/api/jobs/{job_id}", json={"title": "New Title"}, headers=auth_headers(employer))

    assert response.status_code == 200
    assert response.json() == {"message": "Job updated successfully"}
    db.expire_all()
    updated = db.query(Job).filter(Job.id == job_id).first()
    assert updated.title == "New Title"
    assert updated.location == "Paris"
    assert updated.salary == 1000


def test_update_someone_elses_job_forbidden(client, employer, other_employer, make_job, auth_headers):
    job = make_job(employer)

    response = client.put(f"/api/jobs/{job.id}", json={"title": "Hijacked"}, headers=auth_headers(other_employer))

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


def test_update_missing_job(client, employer, auth_headers):
    response = client.put("/api/jobs/9999", json={"title": "Ghost"}, headers=auth_headers(employer))

    assert response.status_code == 404


def test_delete_someone_elses_job_forbidden(client, db, employer, other_employer, make_job, auth_headers):
    job = make_job(employer)
    job_id = job.id

    response = client.delete(f"/api/jobs/{job_id}", headers=auth_headers(other_employer))

    assert response.status_code == 403
    db.expire_all()
    assert db.query(Job).filter(Job.id == job_id).first() is not None


def test_delete_own_job_cascades_applications(client, db, employer, seeker, make_job, auth_headers):
    job = make_job(employer)
    job_id = job.id
    assert client.post(f"/api/jobs/{job_id}/apply", headers=auth_headers(seeker)).status_code == 201

    response = client.delete(f"/api/jobs/{job_id}", headers=auth_headers(employer))

    assert response.status_code == 200
    assert response.json() == {"message": "Job deleted successfully"}
    db.expire_all()
    assert db.query(Job).filter(Job.id == job_id).first() is None
    assert db.query(Application).filter(Application.job_id == job_id).count() == 0
    assert client.get("/api/jobs/applied", headers=auth_headers(seeker)).json() == []
