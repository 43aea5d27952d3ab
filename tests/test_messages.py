from unittest.mock import Mock, patch

import httpx
from fastapi import status

from intouch.services.email_service import email_service


class TestCompose:
    def test_requires_subject(self, authorized_client):
        response = authorized_client.post(
            "/v1/messages/compose", json={"message": "Sveiki", "recipients": ["jonas@example.com"]}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "pleaseEnterSubject"

    def test_requires_recipients(self, authorized_client):
        response = authorized_client.post(
            "/v1/messages/compose", json={"message": "Sveiki", "subject": "Tema", "recipients": [" "]}
        )
        assert response.json()["error"]["code"] == "pleaseSelectRecipients"

    def test_compose(self, authorized_client):
        response = authorized_client.post(
            "/v1/messages/compose",
            json={
                "subject": "Pasiūlymas",
                "message": "Sveiki",
                "recipients": ["jonas@example.com", "ona@example.com", "jonas@example.com"],
            },
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["recipients"] == ["jonas@example.com", "ona@example.com"]
        assert data["mailto"] == (
            "mailto:jonas%40example.com%3Bona%40example.com"
            "?subject=Pasi%C5%ABlymas&body=Sveiki"
        )


class TestContactSpecialist:
    def test_falls_back_to_mailto(self, authorized_client):
        response = authorized_client.post(
            "/v1/messages/contact", json={"specialist_email": "jonas@example.com", "message": "Ar galite?"}
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "mailto": "mailto:jonas%40example.com?subject=U%C5%BEklausa%20i%C5%A1%20InTouch&body=Ar%20galite%3F",
        }

    @patch('httpx.post')
    def test_sends_notification_and_confirmation(self, mock_post, authorized_client):
        mock_post.return_value = Mock()

        with patch.object(email_service, "api_key", "test-api-key"):
            response = authorized_client.post(
                "/v1/messages/contact", json={"specialist_email": "jonas@example.com", "message": "Ar galite?"}
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "mailto": None}
        recipients = [c.kwargs["json"]["to"] for c in mock_post.call_args_list]
        assert recipients == ["jonas@example.com", "petras@example.com"]
        assert "Petras Klientas" in mock_post.call_args_list[0].kwargs["json"]["html"]

    @patch('httpx.post')
    def test_provider_failure(self, mock_post, authorized_client):
        mock_post.side_effect = httpx.ConnectError("connection refused")

        with patch.object(email_service, "api_key", "test-api-key"):
            response = authorized_client.post(
                "/v1/messages/contact",
                json={"specialist_email": "jonas@example.com", "message": "Ar galite?"},
                headers={"Accept-Language": "en"},
            )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["error"]["code"] == "messageSendFailed"

    def test_unknown_specialist(self, authorized_client):
        response = authorized_client.post(
            "/v1/messages/contact", json={"specialist_email": "nera@example.com", "message": "Labas"}
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "specialistNotFound"

    def test_empty_message(self, authorized_client):
        response = authorized_client.post(
            "/v1/messages/contact", json={"specialist_email": "jonas@example.com", "message": ""}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "pleaseEnterMessage"

    def test_requires_login(self, client):
        response = client.post("/v1/messages/contact", json={"specialist_email": "jonas@example.com"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
