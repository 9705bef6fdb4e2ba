from models import Teacher

from helpers import EMAIL, PASSWORD, register, login


def test_root_redirects_by_login_state(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]

    register(client)
    resp = client.get("/")
    assert "/students" in resp.headers["Location"]


def test_pages_require_login(client):
    for path in ("/students", "/goals", "/assessments", "/reports/student", "/reports/class"):
        resp = client.get(path)
        assert resp.status_code == 302
        assert "/login" in resp.headers["Location"]


def test_register_logs_in_and_hashes_password(app, client):
    resp = register(client)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/students")
    assert client.get("/students").status_code == 200

    with app.app_context():
        t = Teacher.query.filter_by(email=EMAIL).one()
        assert t.password_hash != PASSWORD
        assert t.check_password(PASSWORD)


def test_register_rejects_missing_and_mismatched(client):
    resp = register(client, email="")
    assert b"Please fill in all fields." in resp.data

    resp = register(client, confirm="different")
    assert b"Passwords do not match." in resp.data


def test_register_duplicate_email_is_case_insensitive(client, other_client):
    register(client, email="Teacher@School.test")
    resp = register(other_client, email="TEACHER@school.TEST")
    assert resp.status_code == 200
    assert b"An account with this email already exists." in resp.data


def test_login_and_logout(client):
    register(client)
    client.post("/logout")
    assert "/login" in client.get("/students").headers["Location"]

    resp = login(client, password="wrong")
    assert b"Incorrect email or password." in resp.data

    resp = login(client, email=EMAIL.upper())
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/students")


def test_sessions_are_per_client(client, other_client):
    register(client)
    register(other_client, email="second@school.test")
    other_client.post("/logout")

    # logging one browser out leaves the other signed in
    assert client.get("/students").status_code == 200
    assert other_client.get("/students").status_code == 302
