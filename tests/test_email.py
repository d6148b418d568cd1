"""
Tests for email rendering and the SMTP sender's disabled/error states.
"""
from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from portal.notifications.base_sender import EmailMessage
from portal.notifications.email_sender import EmailSender, mask_email
from portal.notifications.templates import (
    KIND_DEPARTMENT,
    KIND_MENTION,
    content_preview,
    render_post_email,
)


def render(kind, **overrides):
    args = dict(
        kind=kind,
        to_email="dev1@byte.kr",
        to_name="박부원",
        author="김회장",
        title="회의 안내",
        content="<p>내일 회의가 있습니다</p>",
        post_id=42,
        site_url="https://byte.example.kr/",
    )
    args.update(overrides)
    return render_post_email(**args)


class TestTemplates:
    """render_post_email"""

    def test_mention_email(self):
        message = render(KIND_MENTION)
        assert message.to == "dev1@byte.kr"
        assert message.subject == "[Byte] 김회장님이 게시글에서 당신을 언급했습니다"
        assert "@멘션" in message.html
        assert "https://byte.example.kr/posts/42" in message.text

    def test_department_email(self):
        message = render(KIND_DEPARTMENT, department="개발부")
        assert message.subject == "[Byte] 김회장님이 개발부 부서 게시글을 작성했습니다"
        assert "부서 게시글 (개발부)" in message.html

    def test_values_are_escaped(self):
        message = render(KIND_MENTION, title="<script>alert(1)</script>")
        assert "<script>" not in message.html
        assert "&lt;script&gt;" in message.html

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            render("digest")

    def test_preview_strips_markup_and_truncates(self):
        assert content_preview("<p>안녕 &amp; 반가워</p>") == "안녕 & 반가워"
        long_text = "가" * 250
        assert content_preview(long_text) == "가" * 200 + "..."
        assert content_preview(None) == ""


class TestEmailSender:
    """EmailSender"""

    def test_mask_email(self):
        assert mask_email("president@byte.kr") == "pr***@byte.kr"
        assert mask_email("") == "(none)"

    @pytest.mark.asyncio
    async def test_unconfigured_sender_reports_instead_of_raising(self):
        sender = EmailSender(smtp_host="smtp.gmail.com")
        assert sender.is_configured is False

        result = await sender.send(EmailMessage(to="a@byte.kr", subject="s", html="<p>h</p>"))

        assert result.success is False
        assert result.error == "SMTP not configured"

    @pytest.mark.asyncio
    async def test_transport_error_becomes_failed_result(self):
        sender = EmailSender(smtp_host="smtp.example.kr", smtp_user="bot@byte.kr", smtp_password="pw")
        with patch(
            "portal.notifications.email_sender.aiosmtplib.send",
            new=AsyncMock(side_effect=aiosmtplib.SMTPConnectError("refused")),
        ):
            result = await sender.send(EmailMessage(to="a@byte.kr", subject="s", html="<p>h</p>"))

        assert result.success is False
        assert "refused" in result.error

    @pytest.mark.asyncio
    async def test_successful_send_builds_multipart_message(self):
        sender = EmailSender(
            smtp_host="smtp.example.kr", smtp_port=465, smtp_user="bot@byte.kr",
            smtp_password="pw", use_tls=True, from_name="Byte",
        )
        send = AsyncMock(return_value=({}, "OK"))
        with patch("portal.notifications.email_sender.aiosmtplib.send", new=send):
            result = await sender.send(EmailMessage(to="a@byte.kr", subject="제목", html="<b>본문</b>"))

        assert result.success is True
        msg = send.await_args.args[0]
        assert msg["To"] == "a@byte.kr"
        assert msg["From"] == "Byte <bot@byte.kr>"
        assert [part.get_content_subtype() for part in msg.get_payload()] == ["plain", "html"]
        assert send.await_args.kwargs["use_tls"] is True
        assert send.await_args.kwargs["start_tls"] is False
