import uuid

from sqlalchemy.exc import OperationalError

from jobboard.config import settings
from jobboard.models.application import Application
from jobboard.models.notification import Notification
from jobboard.repositories.notifications import notification_repository


def _notifications(db, recipient_id, type_=None):
    query = db.query(Notification).filter(Notification.recipient_id == recipient_id)
    if type_:
        query = query.filter(Notification.type == type_)
    return query.all()


class TestApply:
    def test_apply_creates_pending_application(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user(full_name="Jo Carer")
        job_id = post_job(employer)

        r = apply_to(carer, job_id, cover_letter="Hi")
        assert r.status_code == 201
        app = r.json()["application"]
        assert app["status"] == "Pending"
        assert app["employer_id"] == employer["id"]
        assert app["applicant_name"] == "Jo Carer"
        assert app["applicant_email"] == carer["email"]

    def test_apply_notifies_employer(self, client, db, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user(full_name="Jo Carer")
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]

        notes = _notifications(db, employer["id"], "job_application")
        assert len(notes) == 1
        assert notes[0].message == "Jo Carer has applied for your job: Caregiver"
        assert notes[0].related_id == app_id
        assert notes[0].sender_id == carer["id"]

    def test_apply_twice_conflicts(self, client, db, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)

        assert apply_to(carer, job_id).status_code == 201
        r = apply_to(carer, job_id, cover_letter="Again")
        assert r.status_code == 400
        assert r.json()["message"] == "You have already applied for this job"
        assert db.query(Application).filter(Application.job_id == job_id).count() == 1

    def test_missing_cover_letter(self, client, make_user, post_job):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        r = client.post("/api/applications/apply", data={"job_id": job_id}, headers=carer["headers"])
        assert r.status_code == 400

    def test_invalid_and_unknown_job(self, client, make_user, apply_to):
        carer = make_user()
        assert apply_to(carer, "123").status_code == 400
        assert apply_to(carer, str(uuid.uuid4())).status_code == 404

    def test_inactive_job(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer, active=False)
        assert apply_to(carer, job_id).status_code == 400

    def test_employer_cannot_apply(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        job_id = post_job(employer)
        assert apply_to(employer, job_id).status_code == 403

    def test_resume_upload(self, client, db, make_user, post_job, apply_to, tmp_data):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        r = apply_to(carer, job_id, files={"resume": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")})
        assert r.status_code == 201
        app_id = r.json()["application_id"]
        assert r.json()["application"]["resume_url"] == f"/api/applications/{app_id}/resume"

        stored = list((tmp_data / "uploads" / "resumes").iterdir())
        assert len(stored) == 1
        path = stored[0]
        assert path.name.startswith("resume-") and path.suffix == ".pdf"
        assert path.read_bytes() == b"%PDF-1.4 resume"
        application = db.get(Application, app_id)
        assert application.resume_path == path.name

    def test_application_without_resume_has_no_url(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        r = apply_to(carer, job_id)
        assert r.json()["application"]["resume_url"] is None
        listed = client.get("/api/applications/my-applications", headers=carer["headers"]).json()
        assert "resume_path" not in listed[0]

    def test_resume_over_size_limit(self, client, db, make_user, post_job, apply_to, tmp_data, monkeypatch):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        monkeypatch.setattr(settings, "max_resume_bytes", 10)

        r = apply_to(carer, job_id, files={"resume": ("cv.pdf", b"%PDF-1.4 " + b"x" * 41, "application/pdf")})
        assert r.status_code == 413
        assert r.json() == {"message": "File too large (max 10 bytes)"}

        resume_dir = tmp_data / "uploads" / "resumes"
        assert not resume_dir.exists() or not any(resume_dir.iterdir())
        assert db.query(Application).filter(Application.job_id == job_id).count() == 0

    def test_resume_download(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        stranger = make_user()
        job_id = post_job(employer)
        app_id = apply_to(
            carer, job_id, files={"resume": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")}
        ).json()["application_id"]

        r = client.get(f"/api/applications/{app_id}/resume", headers=employer["headers"])
        assert r.status_code == 200
        assert r.content == b"%PDF-1.4 resume"
        assert client.get(f"/api/applications/{app_id}/resume", headers=stranger["headers"]).status_code == 403

    def test_resume_download_without_resume(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]
        r = client.get(f"/api/applications/{app_id}/resume", headers=carer["headers"])
        assert r.status_code == 404

    def test_resume_wrong_type(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        r = apply_to(carer, job_id, files={"resume": ("cv.png", b"png", "image/png")})
        assert r.status_code == 400

    def test_notification_failure_does_not_fail_apply(self, client, db, make_user, post_job, apply_to, monkeypatch):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)

        def broken_create(*args, **kwargs):
            raise OperationalError("INSERT INTO notifications", {}, Exception("disk I/O error"))

        monkeypatch.setattr(notification_repository, "create", broken_create)
        r = apply_to(carer, job_id)
        assert r.status_code == 201
        assert db.query(Application).count() == 1
        assert _notifications(db, employer["id"]) == []

    def test_check_applied(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        assert client.get(f"/api/applications/check/{job_id}", headers=carer["headers"]).json() == {"has_applied": False}
        apply_to(carer, job_id)
        assert client.get(f"/api/applications/check/{job_id}", headers=carer["headers"]).json() == {"has_applied": True}


class TestWithdraw:
    def test_withdraw_pending(self, client, db, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]

        r = client.delete(f"/api/applications/{app_id}", headers=carer["headers"])
        assert r.status_code == 200
        assert db.query(Application).count() == 0
        # Applying again is allowed once the earlier one is withdrawn.
        assert apply_to(carer, job_id).status_code == 201

    def test_withdraw_non_pending_conflicts(self, client, db, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]
        client.put(f"/api/applications/{app_id}/status", json={"status": "Reviewed"}, headers=employer["headers"])

        r = client.delete(f"/api/applications/{app_id}", headers=carer["headers"])
        assert r.status_code == 400
        assert r.json()["message"] == "Can only withdraw pending applications"
        stored = db.get(Application, app_id)
        assert stored.status == "Reviewed"

    def test_withdraw_by_someone_else(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        other = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]
        r = client.delete(f"/api/applications/{app_id}", headers=other["headers"])
        assert r.status_code == 403

    def test_withdraw_invalid_id(self, client, make_user):
        carer = make_user()
        assert client.delete("/api/applications/xyz", headers=carer["headers"]).status_code == 400
        assert client.delete(f"/api/applications/{uuid.uuid4()}", headers=carer["headers"]).status_code == 404


class TestStatus:
    def _applied(self, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]
        return employer, carer, job_id, app_id

    def test_set_status_notifies_applicant(self, client, db, make_user, post_job, apply_to):
        employer, carer, job_id, app_id = self._applied(make_user, post_job, apply_to)
        r = client.put(f"/api/applications/{app_id}/status", json={"status": "Interviewing"},
                       headers=employer["headers"])
        assert r.status_code == 200
        assert r.json()["status"] == "Interviewing"

        notes = _notifications(db, carer["id"], "application_status")
        assert len(notes) == 1
        assert "Pending" in notes[0].message and "Interviewing" in notes[0].message

    def test_status_message_uses_current_job_title(self, client, db, make_user, post_job, apply_to):
        employer, carer, job_id, app_id = self._applied(make_user, post_job, apply_to)
        client.put(f"/api/jobs/{job_id}", json={"title": "Lead Caregiver"}, headers=employer["headers"])
        client.put(f"/api/applications/{app_id}/status", json={"status": "Reviewed"}, headers=employer["headers"])
        note = _notifications(db, carer["id"], "application_status")[0]
        assert "Lead Caregiver" in note.message

    def test_invalid_status(self, client, db, make_user, post_job, apply_to):
        employer, carer, job_id, app_id = self._applied(make_user, post_job, apply_to)
        r = client.put(f"/api/applications/{app_id}/status", json={"status": "Promoted"},
                       headers=employer["headers"])
        assert r.status_code == 400
        assert r.json()["message"] == "Invalid status"
        assert _notifications(db, carer["id"]) == []

    def test_missing_status(self, client, make_user, post_job, apply_to):
        employer, carer, job_id, app_id = self._applied(make_user, post_job, apply_to)
        r = client.put(f"/api/applications/{app_id}/status", json={}, headers=employer["headers"])
        assert r.status_code == 400
        assert r.json()["message"] == "Status is required"

    def test_same_status_is_no_change(self, client, make_user, post_job, apply_to):
        employer, carer, job_id, app_id = self._applied(make_user, post_job, apply_to)
        r = client.put(f"/api/applications/{app_id}/status", json={"status": "Pending"},
                       headers=employer["headers"])
        assert r.status_code == 400

    def test_other_employer_cannot_set_status(self, client, make_user, post_job, apply_to):
        employer, carer, job_id, app_id = self._applied(make_user, post_job, apply_to)
        other = make_user(role="employer")
        r = client.put(f"/api/applications/{app_id}/status", json={"status": "Hired"},
                       headers=other["headers"])
        assert r.status_code == 403


class TestListings:
    def test_my_applications_embed_job(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        apply_to(carer, job_id)

        r = client.get("/api/applications/my-applications", headers=carer["headers"])
        assert r.status_code == 200
        assert r.json()[0]["job"]["title"] == "Caregiver"
        assert r.json()[0]["job"]["missing"] is False

    def test_employer_applications_embed_applicant(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user(full_name="Sam Support")
        job_id = post_job(employer)
        apply_to(carer, job_id)

        r = client.get("/api/applications/employer-applications", headers=employer["headers"])
        assert r.status_code == 200
        data = r.json()
        assert len(data) == 1
        assert data[0]["applicant"]["full_name"] == "Sam Support"
        assert data[0]["applicant"]["email"] == carer["email"]

    def test_get_application_visibility(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        stranger = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]

        assert client.get(f"/api/applications/{app_id}", headers=carer["headers"]).status_code == 200
        assert client.get(f"/api/applications/{app_id}", headers=employer["headers"]).status_code == 200
        assert client.get(f"/api/applications/{app_id}", headers=stranger["headers"]).status_code == 403


class TestJobDeletion:
    def test_deleted_job_degrades_to_placeholder(self, client, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]

        assert client.delete(f"/api/jobs/{job_id}", headers=employer["headers"]).status_code == 200

        r = client.get("/api/applications/my-applications", headers=carer["headers"])
        assert r.status_code == 200
        job = r.json()[0]["job"]
        assert job == {**job, "id": job_id, "title": "Unknown Job", "missing": True}

        r = client.get(f"/api/applications/{app_id}", headers=carer["headers"])
        assert r.status_code == 200
        assert r.json()["job"]["title"] == "Unknown Job"

        r = client.get("/api/applications/employer-applications", headers=employer["headers"])
        assert r.json()[0]["job"]["missing"] is True

    def test_open_applicants_told_job_closed(self, client, db, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        pending = make_user()
        rejected = make_user()
        job_id = post_job(employer)
        apply_to(pending, job_id)
        rejected_app = apply_to(rejected, job_id).json()["application_id"]
        client.put(f"/api/applications/{rejected_app}/status", json={"status": "Rejected"},
                   headers=employer["headers"])

        r = client.delete(f"/api/jobs/{job_id}", headers=employer["headers"])
        assert r.json()["applicants_notified"] == 1
        assert len(_notifications(db, pending["id"], "job_closed")) == 1
        assert _notifications(db, rejected["id"], "job_closed") == []

    def test_status_change_after_job_deleted(self, client, db, make_user, post_job, apply_to):
        employer = make_user(role="employer")
        carer = make_user()
        job_id = post_job(employer)
        app_id = apply_to(carer, job_id).json()["application_id"]
        client.delete(f"/api/jobs/{job_id}", headers=employer["headers"])

        r = client.put(f"/api/applications/{app_id}/status", json={"status": "Rejected"},
                       headers=employer["headers"])
        assert r.status_code == 200
        note = _notifications(db, carer["id"], "application_status")[0]
        assert "Unknown Job" in note.message
