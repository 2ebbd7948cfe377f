import pytest

from jobtrack.models.job import (
    STAGE_FIELDS,
    STAGE_STATUSES,
    calculate_progress,
    status_weight,
)


def statuses(*values):
    return dict(zip(STAGE_FIELDS, values))


class TestStatusWeights:

    def test_known_weights(self):
        assert status_weight("Not Started") == 0
        assert status_weight("In Progress") == 0.5
        assert status_weight("Completed") == 1
        assert status_weight("Rejected") == 1

    def test_unknown_status_weighs_nothing(self):
        assert status_weight("Ghosted") == 0
        assert status_weight(None) == 0

    def test_four_statuses(self):
        assert STAGE_STATUSES == ("Not Started", "In Progress", "Completed", "Rejected")


class TestCalculateProgress:

    def test_all_not_started(self):
        assert calculate_progress(["Not Started"] * 5) == 0

    def test_all_completed(self):
        assert calculate_progress(["Completed"] * 5) == 100

    def test_one_in_progress(self):
        assert calculate_progress(["In Progress"] + ["Not Started"] * 4) == pytest.approx(10)

    def test_rejected_counts_as_finished_stage(self):
        assert calculate_progress(["Rejected"] * 5) == 100
        assert calculate_progress(["Rejected", "Completed", "Not Started", "Not Started", "Not Started"]) == pytest.approx(40)

    def test_mixed(self):
        values = ["Completed", "In Progress", "In Progress", "Rejected", "Not Started"]
        assert calculate_progress(values) == pytest.approx(60)

    def test_stored_document(self):
        job = statuses("Completed", "Completed", "In Progress", "Not Started", "Not Started")
        job["company_name"] = "Acme"
        assert calculate_progress(job) == pytest.approx(50)

    def test_api_field_names(self):
        job = {
            "recruiterStatus": "Completed",
            "referralStatus": "In Progress",
            "assessmentStatus": "Not Started",
            "interviewStatus": "Not Started",
            "applicationStatus": "Not Started",
        }
        assert calculate_progress(job) == pytest.approx(30)

    def test_missing_or_unknown_fields_are_zero(self):
        assert calculate_progress({"recruiter_status": "Completed"}) == pytest.approx(20)
        assert calculate_progress(statuses("Bogus", "Completed", None, "", "Completed")) == pytest.approx(40)

    def test_always_within_bounds(self):
        for status in STAGE_STATUSES:
            for other in STAGE_STATUSES:
                value = calculate_progress([status, other, status, other, status])
                assert 0 <= value <= 100
