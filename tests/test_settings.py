from fastapi import status


def test_settings_require_login(client):
    assert client.get("/v1/settings").status_code == status.HTTP_401_UNAUTHORIZED


def test_default_settings(authorized_client):
    response = authorized_client.get("/v1/settings")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["email_notifications"] is True
    assert data["profile_visibility"] == "public"
    assert data["working_hours"] == {"start": "09:00", "end": "17:00"}
    assert data["timezone"] == "Europe/Vilnius"


def test_update_settings(authorized_client):
    response = authorized_client.put(
        "/v1/settings",
        json={"sms_notifications": True, "auto_respond": True, "auto_respond_message": "Atsakysiu rytoj"},
    )
    assert response.status_code == status.HTTP_200_OK

    saved = authorized_client.get("/v1/settings").json()
    assert saved["sms_notifications"] is True
    assert saved["auto_respond_message"] == "Atsakysiu rytoj"


def test_settings_are_per_user(client, customer_headers, specialist_headers):
    client.put("/v1/settings", json={"marketing_emails": False}, headers=customer_headers)
    assert client.get("/v1/settings", headers=specialist_headers).json()["marketing_emails"] is True


def test_invalid_settings(authorized_client):
    response = authorized_client.put("/v1/settings", json={"working_hours": {"start": "9am", "end": "17:00"}})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_subscription(authorized_client):
    data = authorized_client.get("/v1/settings/subscription").json()
    assert data["current_plan"] == "free"
    assert data["plans"][0]["name"] == "Nemokamas"
    assert data["plans"][0]["current"] is True

    data = authorized_client.put("/v1/settings/subscription", json={"plan": "professional"}).json()
    assert data["current_plan"] == "professional"
    assert [p["current"] for p in data["plans"]] == [False, True, False]

    assert authorized_client.get("/v1/settings/subscription").json()["current_plan"] == "professional"


def test_unknown_subscription_plan(authorized_client):
    response = authorized_client.put("/v1/settings/subscription", json={"plan": "platinum"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "unknownSubscriptionPlan"


def test_language_switch(authorized_client):
    response = authorized_client.put("/v1/settings/language", json={"language": "en"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"language": "en"}

    # Later responses follow the session language
    plans = authorized_client.get("/v1/settings/subscription").json()["plans"]
    assert plans[0]["name"] == "Free"

    error = authorized_client.get("/v1/search").json()["error"]
    assert error["message"] == "No search in progress."


def test_unsupported_language(authorized_client):
    response = authorized_client.put("/v1/settings/language", json={"language": "fr"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "unsupportedLanguage"
