import io

import pytest
from twilio.base.exceptions import TwilioRestException

from digital_id.main import create_app


def test_login_and_me(client):
    assert client.get("/api/auth/me").status_code == 401

    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "admin"

    me = client.get("/api/auth/me").get_json()
    assert me["data"]["email"] == "admin@example.com"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_login_rejects_bad_password(client):
    resp = client.post("/api/auth/login", data={"email": "admin@example.com", "password": "wrong"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid email or password"}


@pytest.mark.parametrize(
    "method, url",
    [
        ("get", "/api/employees"),
        ("post", "/api/attendance/scan"),
        ("get", "/api/dashboard/stats"),
        ("get", "/api/roster"),
    ],
)
def test_protected_routes_need_login(client, method, url):
    resp = getattr(client, method)(url)

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


@pytest.mark.parametrize(
    "method, url",
    [
        ("post", "/api/employees"),
        ("get", "/api/settings"),
        ("get", "/api/reports/attendance"),
        ("post", "/api/send-message"),
        ("post", "/api/automation/daily-report"),
    ],
)
def test_admin_routes_reject_staff(staff_client, method, url):
    assert getattr(staff_client, method)(url).status_code == 403


def test_employee_create_and_lookup(admin_client):
    resp = admin_client.post(
        "/api/employees",
        json={
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "department": "IT",
            "position": "Engineer",
        },
    )
    assert resp.status_code == 201
    employee_id = resp.get_json()["data"]["employee_id"]
    assert employee_id.startswith("EMP")

    assert admin_client.get(f"/api/employees/{employee_id}").get_json()["data"]["first_name"] == "Ada"
    missing = admin_client.get("/api/employees/EMP000000")
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Employee not found"


def test_employee_create_reports_validation_errors(admin_client):
    resp = admin_client.post("/api/employees", json={"first_name": "Ada"})

    assert resp.status_code == 400
    assert "Last name is required" in resp.get_json()["message"]


def test_scan_check_in_then_check_out(staff_client, repos):
    repos.employees.add("EMP000001")

    first = staff_client.post("/api/attendance/scan", json={"code": "EMP000001"}).get_json()
    second = staff_client.post("/api/attendance/scan", json={"code": "EMP000001"}).get_json()

    assert first["data"]["action"] == "check_in"
    assert second["data"]["action"] == "check_out"
    assert second["message"].startswith("Check-out recorded at")
    assert repos.scans.scans[0][1] == 2


def test_scan_rejects_bad_codes(staff_client):
    resp = staff_client.post("/api/attendance/scan", json={"code": "hello world"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid QR code format"


def test_scan_image_requires_upload(staff_client):
    resp = staff_client.post("/api/attendance/scan/image", data={}, content_type="multipart/form-data")

    assert resp.status_code == 400


def test_public_mark_attendance(client, repos):
    repos.employees.add("EMP000001")

    resp = client.post("/mark-attendance/EMP000001")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["employee"]["employee_id"] == "EMP000001"
    assert client.post("/mark-attendance/EMP999999").status_code == 404


def test_dashboard_stats(staff_client, repos):
    repos.employees.add("EMP000001")

    data = staff_client.get("/api/dashboard/stats").get_json()["data"]

    assert data["total_employees"] == 1
    assert data["department_counts"] == {"IT": 1}


def test_send_message_validation(admin_client):
    resp = admin_client.post("/api/send-message", json={"to": "+15551234567"})

    assert resp.status_code == 400
    assert resp.get_json() == {
        "success": False,
        "error": "Missing required parameters: to and message are required",
    }


def test_send_message_without_twilio(admin_client):
    resp = admin_client.post("/api/send-message", json={"to": "+15551234567", "message": "hi"})

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Missing Twilio configuration. Please check your environment variables."


def test_send_message_method_not_allowed(admin_client):
    assert admin_client.get("/api/send-message").status_code == 405


def _admin(app):
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["role"] = "admin"
    return client


def test_send_message_through_twilio(settings, build, fake_twilio_factory):
    twilio = fake_twilio_factory()
    client = _admin(create_app(settings, build(twilio=twilio, TWILIO_PHONE_NUMBER="+15005550006")))

    resp = client.post("/api/send-message", json={"to": "+15551234567", "message": "hi"})

    assert resp.get_json() == {"success": True, "messageId": "SM0001"}
    assert twilio.sent[0]["from_"] == "+15005550006"


def test_send_message_reports_twilio_errors(settings, build, fake_twilio_factory):
    error = TwilioRestException(400, "/Messages", msg="Invalid 'To' number", code=21211)
    app = create_app(settings, build(twilio=fake_twilio_factory(error=error), TWILIO_PHONE_NUMBER="+15005550006"))

    resp = _admin(app).post("/api/send-message", json={"to": "+15551234567", "message": "hi"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Twilio Error 21211: Invalid 'To' number"


def test_notifications_endpoint(admin_client, repos):
    resp = admin_client.post(
        "/api/notifications", json={"phone_number": "+15551234567", "message": "Hello", "type": "whatsapp"}
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["url"].startswith("https://wa.me/15551234567")
    assert admin_client.post("/api/notifications", json={"type": "pigeon"}).status_code == 400


def test_reports_csv_and_bad_period(admin_client):
    resp = admin_client.get("/api/reports/attendance.csv?period=weekly&date=2026-03-04")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance-report-2026-03-01-2026-03-07.csv" in resp.headers["Content-Disposition"]

    bad = admin_client.get("/api/reports/attendance?period=yearly")
    assert bad.status_code == 400
    assert bad.get_json()["message"] == "Period must be daily, weekly or monthly"


def test_roster_routes(admin_client, repos):
    repos.employees.add("EMP000001")

    created = admin_client.post(
        "/api/roster", json={"employee_id": "EMP000001", "date": "2026-03-02", "shift_type": "night"}
    )
    assert created.status_code == 201

    listing = admin_client.get("/api/roster?date=2026-03-02").get_json()
    assert listing["date"] == "2026-03-02"
    night = listing["data"]["night"]
    assert night["label"] == "Night Shift"
    assert night["shifts"][0]["start_time"] == "00:00"

    shift_id = created.get_json()["data"]["id"]
    assert admin_client.delete(f"/api/roster/{shift_id}").status_code == 200
    assert admin_client.delete(f"/api/roster/{shift_id}").status_code == 404


def test_settings_routes(admin_client):
    bad = admin_client.put("/api/settings/admin_phone", json={"value": "12345"})
    assert bad.status_code == 400

    saved = admin_client.put("/api/settings/admin_phone", json={"value": "+15550000000"})
    assert saved.get_json()["data"]["value"] == "+15550000000"

    resp = admin_client.put(
        "/api/admin/notification-settings", json={"phone_number": "+15550000001", "notify_on_late": True}
    )
    assert resp.status_code == 200
    data = admin_client.get("/api/admin/notification-settings").get_json()["data"]
    assert data == {"admin_id": 1, "phone_number": "+15550000001", "notify_on_late": True}


def test_import_template_and_preview(admin_client):
    template = admin_client.get("/api/employees/import/template.xlsx")
    assert template.status_code == 200
    assert template.data[:2] == b"PK"

    csv_bytes = (
        "First Name,Last Name,Email,Department,Position\n"
        "Ada,Lovelace,ada@example.com,IT,Engineer\n"
        "Bob,,bob@bad,Sales,Rep\n"
    ).encode("utf-8")
    resp = admin_client.post(
        "/api/employees/import/preview",
        data={"file": (io.BytesIO(csv_bytes), "employees.csv")},
        content_type="multipart/form-data",
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert (body["valid"], body["invalid"]) == (1, 1)

    missing = admin_client.post("/api/employees/import/preview", data={}, content_type="multipart/form-data")
    assert missing.status_code == 400


def test_automation_summary(admin_client, repos):
    repos.employees.add("EMP000001")

    data = admin_client.get("/api/automation/summary?date=2026-03-02").get_json()["data"]

    assert data["totals"]["absent"] == 1
    assert "March 2nd, 2026" in data["message"]


def test_import_preview_rejects_corrupt_workbook(admin_client):
    resp = admin_client.post(
        "/api/employees/import/preview",
        data={"file": (io.BytesIO(b"not a zip at all"), "staff.xlsx")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
    assert resp.get_json()["message"].startswith("Failed to process file")


def test_roster_rejects_bad_date(staff_client):
    resp = staff_client.get("/api/roster?date=2026-13-40")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid date format"


def test_bulk_delete_rejects_non_numeric_ids(admin_client):
    resp = admin_client.post("/api/employees/bulk-delete", json={"ids": ["abc"]})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid employee ids"


def test_json_bodies_must_be_objects(admin_client):
    resp = admin_client.post("/api/roster", json=[1])

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Request body must be a JSON object"


def test_qr_bulk_reports_counts_in_headers(admin_client):
    csv_bytes = (
        "First Name,Last Name,Email,Department,Position\n"
        "Ada,Lovelace,ada@example.com,IT,Engineer\n"
        "Bob,,bob@bad,Sales,Rep\n"
    ).encode("utf-8")

    resp = admin_client.post(
        "/api/qr/bulk",
        data={"file": (io.BytesIO(csv_bytes), "employees.csv")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    assert resp.mimetype == "application/zip"
    assert (resp.headers["X-Bulk-Generated"], resp.headers["X-Bulk-Failed"]) == ("1", "1")
    assert "X-Bulk-Results" not in resp.headers
