from fastapi import status

from conftest import TEST_PASSWORD, login

CONSTRUCTION = "Statyba, remontas, medžiagos, NT"


def signup_body(**overrides):
    body = {
        "email": "naujas@example.com",
        "password": TEST_PASSWORD,
        "confirm_password": TEST_PASSWORD,
        "first_name": "Naujas",
        "last_name": "Vartotojas",
    }
    body.update(overrides)
    return body


def specialist_body(**overrides):
    body = signup_body(
        email="meistras@example.com",
        specialist_type="individual",
        categories=[CONSTRUCTION],
        cities=["Vilnius"],
        services=["Stogų dengimas"],
    )
    body.update(overrides)
    return body


def test_signup_customer(client):
    response = client.post("/v1/auth/signup", json=signup_body())
    assert response.status_code == status.HTTP_201_CREATED

    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "naujas@example.com"
    assert data["user"]["role"] == "customer"
    assert data["user"]["display_name"] == "Naujas Vartotojas"
    assert "password_hash" not in data["user"]

    me = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["id"] == data["user"]["id"]


def test_signup_existing_email(client, test_customer):
    response = client.post("/v1/auth/signup", json=signup_body(email="PETRAS@example.com"))
    assert response.status_code == status.HTTP_409_CONFLICT
    error = response.json()["error"]
    assert error["code"] == "userExistsError"
    assert error["message"] == "Vartotojas su šiuo el. paštu jau egzistuoja."


def test_signup_reports_first_problem(client):
    cases = [
        (signup_body(email=""), "pleaseEnterEmail"),
        (signup_body(email="not-an-email"), "pleaseEnterValidEmail"),
        (signup_body(password="", confirm_password=""), "pleaseEnterPassword"),
        (signup_body(password="weak", confirm_password="weak"), "passwordTooWeak"),
        (signup_body(confirm_password="Other123!"), "passwordMismatchError"),
        (signup_body(first_name=" "), "pleaseEnterFirstName"),
        (signup_body(last_name=""), "pleaseEnterLastName"),
    ]
    for body, code in cases:
        response = client.post("/v1/auth/signup", json=body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST, code
        assert response.json()["error"]["code"] == code


def test_signup_individual_specialist(client):
    response = client.post("/v1/auth/signup/specialist", json=specialist_body())
    assert response.status_code == status.HTTP_201_CREATED
    user = response.json()["user"]
    assert user["role"] == "individual_specialist"

    headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    profile = client.get("/v1/specialists/me/profile", headers=headers).json()
    # No profession given: the first category stands in
    assert profile["profession"] == CONSTRUCTION
    assert profile["locations"] == ["Vilnius"]
    assert profile["services"] == ["Stogų dengimas"]
    assert profile["verified"] is False


def test_signup_business_specialist(client):
    body = specialist_body(
        specialist_type="business", first_name="", last_name="",
        company_name="UAB Stogas", company_code="301234567", profession="Stogdengiai", cities=[],
    )
    response = client.post("/v1/auth/signup/specialist", json=body)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"]["role"] == "business_specialist"
    assert response.json()["user"]["display_name"] == "UAB Stogas"


def test_signup_specialist_validation(client):
    cases = [
        (specialist_body(specialist_type="business", company_name=""), "pleaseEnterCompanyName"),
        (specialist_body(specialist_type="business", company_name="UAB", company_code=""), "pleaseEnterCompanyCode"),
        (specialist_body(categories=[]), "pleaseSelectCategory"),
        (specialist_body(categories=["Kosmosas"]), "invalidCategory"),
        (specialist_body(services=[" "]), "pleaseSelectServices"),
        (specialist_body(cities=["Paryžius"]), "invalidCity"),
    ]
    for body, code in cases:
        response = client.post("/v1/auth/signup/specialist", json=body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST, code
        assert response.json()["error"]["code"] == code


def test_login(client, test_customer):
    response = client.post("/v1/auth/login", json={"email": test_customer.email, "password": TEST_PASSWORD})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == test_customer.id


def test_login_wrong_password(client, test_customer):
    response = client.post(
        "/v1/auth/login",
        json={"email": test_customer.email, "password": "Wrong123!"},
        headers={"Accept-Language": "en"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"] == {
        "message": "Invalid email or password.",
        "code": "invalidCredentialsError",
        "details": {},
    }


def test_login_unknown_user_looks_the_same(client):
    response = client.post("/v1/auth/login", json={"email": "nera@example.com", "password": TEST_PASSWORD})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["code"] == "invalidCredentialsError"


def test_login_requires_fields(client):
    response = client.post("/v1/auth/login", json={"email": "", "password": ""})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "pleaseEnterEmail"


def test_logout(client, test_customer):
    headers = login(client, test_customer.email)

    response = client.post("/v1/auth/logout", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Atsijungėte."}

    me = client.get("/v1/auth/me", headers=headers)
    assert me.status_code == status.HTTP_401_UNAUTHORIZED
    assert me.json()["error"]["code"] == "notAuthenticated"


def test_logout_when_logged_out(client):
    response = client.post("/v1/auth/logout")
    assert response.status_code == status.HTTP_200_OK


def test_me_without_token(client):
    response = client.get("/v1/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_forgot_password_does_not_reveal_accounts(client, test_customer):
    known = client.post("/v1/auth/forgot-password", json={"email": test_customer.email})
    unknown = client.post("/v1/auth/forgot-password", json={"email": "nera@example.com"})

    assert known.status_code == unknown.status_code == status.HTTP_200_OK
    assert known.json() == unknown.json()


def test_forgot_password_validates_email(client):
    response = client.post("/v1/auth/forgot-password", json={"email": "nope"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "pleaseEnterValidEmail"
