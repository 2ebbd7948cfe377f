"""Tests for the /api/jobs CRUD endpoints."""

import asyncio
from datetime import datetime

from bson import ObjectId


def parse_ts(value):
    return datetime.fromisoformat(value)


def create(client, headers, payload, **overrides):
    resp = client.post("/api/jobs", json={**payload, **overrides}, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


class TestAuthentication:

    def test_list_requires_user_header(self, client):
        resp = client.get("/api/jobs")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Not authenticated"

    def test_blank_user_header_rejected(self, client):
        resp = client.get("/api/jobs", headers={"X-User-Id": "  "})
        assert resp.status_code == 401

    def test_create_requires_user_header(self, client, job_payload):
        assert client.post("/api/jobs", json=job_payload).status_code == 401

    def test_update_and_delete_require_user_header(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        assert client.put(f"/api/jobs/{job['id']}", json={"notes": "x"}).status_code == 401
        assert client.delete(f"/api/jobs/{job['id']}").status_code == 401


class TestCreateJob:

    def test_create_minimal_job(self, client, alice):
        job = create(client, alice, {
            "companyName": "Acme",
            "jobTitle": "Engineer",
            "applicationDate": "2024-03-15",
        })

        assert job["id"]
        assert job["userId"] == "user-alice"
        assert job["companyName"] == "Acme"
        assert job["jobTitle"] == "Engineer"
        assert job["progress"] == 0
        for field in ("recruiterStatus", "referralStatus", "assessmentStatus",
                      "interviewStatus", "applicationStatus"):
            assert job[field] == "Not Started"
        assert job["createdAt"] == job["updatedAt"]

    def test_fields_persisted_verbatim(self, client, alice, job_payload):
        job = create(client, alice, job_payload, nextSteps="Follow up Monday",
                     jobDescription="Build things")

        assert job["location"] == "Berlin"
        assert job["salaryMin"] == 60000
        assert job["salaryMax"] == 80000
        assert job["notes"] == "Applied through the careers page"
        assert job["nextSteps"] == "Follow up Monday"
        assert job["jobDescription"] == "Build things"

    def test_date_only_values_pinned_to_noon(self, client, alice, job_payload):
        job = create(client, alice, job_payload, interviewDate="2024-04-01")

        assert parse_ts(job["applicationDate"]) == datetime(2024, 3, 15, 12, 0)
        assert parse_ts(job["interviewDate"]) == datetime(2024, 4, 1, 12, 0)

    def test_salary_strings_coerced(self, client, alice, job_payload):
        job = create(client, alice, job_payload, salaryMin="50000", salaryMax="")

        assert job["salaryMin"] == 50000
        assert job["salaryMax"] is None

    def test_progress_from_statuses(self, client, alice, job_payload):
        job = create(client, alice, job_payload,
                     recruiterStatus="Completed",
                     referralStatus="Rejected",
                     assessmentStatus="In Progress")
        assert job["progress"] == 50

    def test_stored_with_snake_case_keys(self, client, db, alice, job_payload):
        job = create(client, alice, job_payload)

        stored = asyncio.run(db.jobs.find_one({"_id": ObjectId(job["id"])}))
        assert stored["company_name"] == "Acme"
        assert stored["user_id"] == "user-alice"
        assert "progress" not in stored

    def test_duplicates_allowed(self, client, alice, job_payload):
        first = create(client, alice, job_payload)
        second = create(client, alice, job_payload)
        assert first["id"] != second["id"]
        assert len(client.get("/api/jobs", headers=alice).json()) == 2


class TestCreateValidation:

    def test_missing_company_name(self, client, alice, job_payload):
        del job_payload["companyName"]
        assert client.post("/api/jobs", json=job_payload, headers=alice).status_code == 400

    def test_blank_job_title(self, client, alice, job_payload):
        job_payload["jobTitle"] = "   "
        assert client.post("/api/jobs", json=job_payload, headers=alice).status_code == 400

    def test_missing_application_date(self, client, alice, job_payload):
        del job_payload["applicationDate"]
        assert client.post("/api/jobs", json=job_payload, headers=alice).status_code == 400

    def test_malformed_date(self, client, alice, job_payload):
        job_payload["applicationDate"] = "15/03/2024"
        assert client.post("/api/jobs", json=job_payload, headers=alice).status_code == 400

    def test_unknown_status(self, client, alice, job_payload):
        job_payload["interviewStatus"] = "Ghosted"
        assert client.post("/api/jobs", json=job_payload, headers=alice).status_code == 400

    def test_inverted_salary_range(self, client, alice, job_payload):
        job_payload["salaryMin"] = 90000
        assert client.post("/api/jobs", json=job_payload, headers=alice).status_code == 400

    def test_negative_salary(self, client, alice, job_payload):
        job_payload["salaryMin"] = -1
        assert client.post("/api/jobs", json=job_payload, headers=alice).status_code == 400

    def test_salary_too_large_to_store(self, client, alice, job_payload, db):
        job_payload.pop("salaryMin", None)
        job_payload["salaryMax"] = 10**19

        resp = client.post("/api/jobs", json=job_payload, headers=alice)

        assert resp.status_code == 400
        assert asyncio.run(db.jobs.count_documents({})) == 0

    def test_largest_storable_salary(self, client, alice, job_payload):
        job_payload.pop("salaryMin", None)
        job_payload["salaryMax"] = 2**63 - 1

        job = create(client, alice, job_payload)

        assert job["salaryMax"] == 2**63 - 1


class TestListJobs:

    def test_empty(self, client, alice):
        resp = client.get("/api/jobs", headers=alice)
        assert resp.status_code == 200
        assert resp.json() == []

    def test_only_own_jobs(self, client, alice, bob, job_payload):
        create(client, alice, job_payload)
        create(client, bob, job_payload, companyName="Globex")

        alice_jobs = client.get("/api/jobs", headers=alice).json()
        bob_jobs = client.get("/api/jobs", headers=bob).json()

        assert [j["companyName"] for j in alice_jobs] == ["Acme"]
        assert [j["companyName"] for j in bob_jobs] == ["Globex"]
        assert all(j["userId"] == "user-alice" for j in alice_jobs)

    def test_most_recently_updated_first(self, client, db, alice, job_payload):
        seeded = [
            {"company_name": "First", "updated_at": datetime(2024, 1, 1)},
            {"company_name": "Third", "updated_at": datetime(2024, 3, 1)},
            {"company_name": "Second", "updated_at": datetime(2024, 2, 1)},
        ]
        for doc in seeded:
            asyncio.run(db.jobs.insert_one({
                "user_id": "user-alice",
                "job_title": "Engineer",
                "application_date": datetime(2024, 1, 1, 12),
                "recruiter_status": "Not Started",
                "referral_status": "Not Started",
                "assessment_status": "Not Started",
                "interview_status": "Not Started",
                "application_status": "Not Started",
                "created_at": doc["updated_at"],
                **doc,
            }))

        listed = client.get("/api/jobs", headers=alice).json()
        assert [j["companyName"] for j in listed] == ["Third", "Second", "First"]

        first_id = listed[-1]["id"]
        client.put(f"/api/jobs/{first_id}", json={"notes": "bumped"}, headers=alice)
        names = [j["companyName"] for j in client.get("/api/jobs", headers=alice).json()]
        assert names == ["First", "Third", "Second"]


class TestUpdateJob:

    def test_update_status_refreshes_updated_at(self, client, alice, job_payload):
        job = create(client, alice, job_payload)

        resp = client.put(
            f"/api/jobs/{job['id']}",
            json={"interviewStatus": "In Progress"},
            headers=alice,
        )
        assert resp.status_code == 200

        fetched = client.get("/api/jobs", headers=alice).json()[0]
        assert fetched["interviewStatus"] == "In Progress"
        assert fetched["progress"] == 10
        assert parse_ts(fetched["updatedAt"]) > parse_ts(job["updatedAt"])
        assert fetched["createdAt"] == job["createdAt"]

    def test_partial_update_keeps_other_fields(self, client, alice, job_payload):
        job = create(client, alice, job_payload)

        updated = client.put(
            f"/api/jobs/{job['id']}", json={"location": "Remote"}, headers=alice
        ).json()

        assert updated["location"] == "Remote"
        assert updated["companyName"] == "Acme"
        assert updated["salaryMin"] == 60000

    def test_dates_renormalized(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        updated = client.put(
            f"/api/jobs/{job['id']}", json={"interviewDate": "2024-05-02"}, headers=alice
        ).json()
        assert parse_ts(updated["interviewDate"]) == datetime(2024, 5, 2, 12, 0)

    def test_clearing_optional_field(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        updated = client.put(
            f"/api/jobs/{job['id']}", json={"salaryMin": "", "notes": None}, headers=alice
        ).json()
        assert updated["salaryMin"] is None
        assert updated["notes"] is None

    def test_consecutive_updates_strictly_advance(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        stamps = [parse_ts(job["updatedAt"])]
        for note in ("a", "b", "c"):
            resp = client.put(f"/api/jobs/{job['id']}", json={"notes": note}, headers=alice)
            stamps.append(parse_ts(resp.json()["updatedAt"]))
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)

    def test_other_users_job_not_found(self, client, alice, bob, job_payload):
        job = create(client, alice, job_payload)

        resp = client.put(f"/api/jobs/{job['id']}", json={"notes": "mine now"}, headers=bob)
        assert resp.status_code == 404

        unchanged = client.get(f"/api/jobs/{job['id']}", headers=alice).json()
        assert unchanged["notes"] == "Applied through the careers page"

    def test_missing_job(self, client, alice):
        resp = client.put(
            "/api/jobs/507f1f77bcf86cd799439011", json={"notes": "x"}, headers=alice
        )
        assert resp.status_code == 404

    def test_invalid_id(self, client, alice):
        resp = client.put("/api/jobs/not-an-id", json={"notes": "x"}, headers=alice)
        assert resp.status_code == 400

    def test_empty_body(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        resp = client.put(f"/api/jobs/{job['id']}", json={}, headers=alice)
        assert resp.status_code == 400

    def test_blank_company_name_rejected(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        resp = client.put(f"/api/jobs/{job['id']}", json={"companyName": ""}, headers=alice)
        assert resp.status_code == 400

    def test_null_status_rejected(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        resp = client.put(f"/api/jobs/{job['id']}", json={"referralStatus": None}, headers=alice)
        assert resp.status_code == 400

    def test_salary_range_checked_against_stored_values(self, client, alice, job_payload):
        job = create(client, alice, job_payload)
        resp = client.put(f"/api/jobs/{job['id']}", json={"salaryMin": 100000}, headers=alice)
        assert resp.status_code == 400


class TestDeleteJob:

    def test_delete_removes_from_list(self, client, alice, job_payload):
        job = create(client, alice, job_payload)

        resp = client.delete(f"/api/jobs/{job['id']}", headers=alice)
        assert resp.status_code == 200
        assert resp.content == b""

        assert client.get("/api/jobs", headers=alice).json() == []
        assert client.get(f"/api/jobs/{job['id']}", headers=alice).status_code == 404

    def test_cannot_delete_other_users_job(self, client, alice, bob, job_payload):
        job = create(client, alice, job_payload)

        assert client.delete(f"/api/jobs/{job['id']}", headers=bob).status_code == 404
        assert len(client.get("/api/jobs", headers=alice).json()) == 1

    def test_delete_missing_job(self, client, alice):
        resp = client.delete("/api/jobs/507f1f77bcf86cd799439011", headers=alice)
        assert resp.status_code == 404


class TestRootEndpoints:

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_root(self, client):
        data = client.get("/").json()
        assert "/api/search-recruiters" in data["endpoints"]["lookups"]
