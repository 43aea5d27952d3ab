"""Tests for email service functionality"""

from unittest.mock import Mock, patch

import httpx

from intouch.services.email_service import EmailService


class TestEmailService:
    """Test cases for EmailService"""

    def setup_method(self):
        """Set up test fixtures"""
        self.service = EmailService()
        self.service.api_key = "test-api-key"
        self.service.base_url = "https://mail.example.com/v1"
        self.service.from_address = "noreply@intouch.lt"

    def test_is_configured_true(self):
        assert self.service.is_configured() is True

    def test_is_configured_false(self):
        service = EmailService()
        service.api_key = ""
        assert service.is_configured() is False

    @patch('httpx.post')
    def test_send_email_success(self, mock_post):
        """Test the provider request and a successful reply"""
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_post.return_value = mock_response

        result = self.service.send_email("jonas@example.com", "Tema", "<p>Tekstas</p>")

        assert result is True
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == "https://mail.example.com/v1/send"
        assert kwargs["headers"]["Authorization"] == "Bearer test-api-key"
        assert kwargs["json"] == {
            "to": "jonas@example.com",
            "from": "noreply@intouch.lt",
            "subject": "Tema",
            "html": "<p>Tekstas</p>",
        }

    @patch('httpx.post')
    def test_send_email_transport_error(self, mock_post):
        mock_post.side_effect = httpx.RequestError("API Error")
        assert self.service.send_email("jonas@example.com", "Tema", "Tekstas") is False

    @patch('httpx.post')
    def test_send_email_http_error(self, mock_post):
        request = httpx.Request("POST", "https://mail.example.com/v1/send")
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server error", request=request, response=httpx.Response(500, request=request)
        )
        mock_post.return_value = mock_response

        assert self.service.send_email("jonas@example.com", "Tema", "Tekstas") is False

    @patch('httpx.post')
    def test_not_configured_does_not_call_provider(self, mock_post):
        self.service.api_key = ""
        assert self.service.send_email("jonas@example.com", "Tema", "Tekstas") is False
        mock_post.assert_not_called()

    @patch('httpx.post')
    def test_contact_notification_escapes_user_input(self, mock_post):
        mock_post.return_value = Mock()

        result = self.service.send_contact_notification(
            "jonas@example.com", "Petras <b>", "<script>alert(1)</script>", language="en"
        )

        assert result is True
        payload = mock_post.call_args.kwargs["json"]
        assert payload["subject"] == "New inquiry from Petras <b> - InTouch"
        assert "<script>" not in payload["html"]
        assert "&lt;script&gt;" in payload["html"]

    @patch('httpx.post')
    def test_contact_confirmation(self, mock_post):
        mock_post.return_value = Mock()

        assert self.service.send_contact_confirmation("petras@example.com", language="en") is True
        payload = mock_post.call_args.kwargs["json"]
        assert payload["to"] == "petras@example.com"
        assert payload["subject"] == "Inquiry sent - InTouch"
