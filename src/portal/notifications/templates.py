"""
Email Templates

Renders post notification emails (mention / department broadcast).
"""
import html
import re
from typing import Optional

from .base_sender import EmailMessage

PREVIEW_LENGTH = 200

KIND_MENTION = "mention"
KIND_DEPARTMENT = "department"

_TAG_PATTERN = re.compile(r"<[^>]*>")

_BADGE_STYLES = {
    KIND_MENTION: ("#e3f2fd", "#1976d2"),
    KIND_DEPARTMENT: ("#f3e5f5", "#7b1fa2"),
}

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }}
    .container {{ background-color: #ffffff; border-radius: 12px; padding: 24px; box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1); }}
    .header {{ border-bottom: 2px solid #1d1d1f; padding-bottom: 16px; margin-bottom: 24px; }}
    .logo {{ font-size: 24px; font-weight: bold; color: #1d1d1f; }}
    .badge {{ display: inline-block; background-color: {badge_bg}; color: {badge_fg}; padding: 4px 12px; border-radius: 4px; font-weight: 600; margin-bottom: 16px; }}
    .post-title {{ font-size: 20px; font-weight: 700; color: #1d1d1f; margin-bottom: 12px; }}
    .post-author {{ color: #86868b; font-size: 14px; margin-bottom: 16px; }}
    .post-content {{ background-color: #f5f5f7; padding: 16px; border-radius: 8px; margin-bottom: 24px; color: #1d1d1f; }}
    .button {{ display: inline-block; background-color: #1d1d1f; color: #ffffff; padding: 12px 24px; border-radius: 8px; text-decoration: none; font-weight: 600; margin-top: 16px; }}
    .footer {{ margin-top: 24px; padding-top: 16px; border-top: 1px solid #e5e5ea; color: #86868b; font-size: 12px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><div class="logo">Byte</div></div>
    <div class="content">
      <div class="badge">{badge}</div>
      <p>안녕하세요, <strong>{to_name}</strong>님!</p>
      <p>{lead}</p>
      <div class="post-title">{title}</div>
      <div class="post-author">작성자: {author}</div>
      <div class="post-content">{preview}</div>
      <a href="{post_url}" class="button">게시글 보기</a>
    </div>
    <div class="footer">
      <p>이 이메일은 Byte 플랫폼에서 자동으로 전송되었습니다.</p>
      <p>{site_url}</p>
    </div>
  </div>
</body>
</html>
"""


def content_preview(content: Optional[str], length: int = PREVIEW_LENGTH) -> str:
    """Plain-text preview of rich post content"""
    text = html.unescape(_TAG_PATTERN.sub("", content or "")).strip()
    if len(text) > length:
        return text[:length] + "..."
    return text


def render_post_email(
    kind: str,
    to_email: str,
    to_name: str,
    author: str,
    title: str,
    content: str,
    post_id: int,
    site_url: str,
    department: Optional[str] = None,
) -> EmailMessage:
    """
    Render a post notification email.

    kind is KIND_MENTION for "you were mentioned" mails and KIND_DEPARTMENT
    for department broadcasts.
    """
    if kind not in _BADGE_STYLES:
        raise ValueError(f"Unknown email kind: {kind}")

    site_url = site_url.rstrip("/")
    post_url = f"{site_url}/posts/{post_id}"
    scope = f"{department} 부서" if department else None

    if kind == KIND_MENTION:
        badge = "@멘션"
        subject = f"[Byte] {author}님이 게시글에서 당신을 언급했습니다"
        lead = f"<strong>{html.escape(author)}</strong>님이 게시글에서 당신을 언급했습니다."
        text = f'{to_name}님, {author}님이 게시글 "{title}"에서 당신을 언급했습니다. 게시글 보기: {post_url}'
    else:
        badge = f"부서 게시글 ({department})" if department else "부서 게시글"
        subject = f"[Byte] {author}님이 {scope or '새로운'} 게시글을 작성했습니다"
        lead = f"<strong>{html.escape(author)}</strong>님이 {html.escape(scope or '귀하의 부서')} 게시글을 작성했습니다."
        text = f'{to_name}님, {author}님이 {scope or "새로운"} 게시글 "{title}"을 작성했습니다. 게시글 보기: {post_url}'

    badge_bg, badge_fg = _BADGE_STYLES[kind]
    body = _HTML_TEMPLATE.format(
        badge_bg=badge_bg,
        badge_fg=badge_fg,
        badge=html.escape(badge),
        to_name=html.escape(to_name),
        lead=lead,
        title=html.escape(title),
        author=html.escape(author),
        preview=html.escape(content_preview(content)),
        post_url=html.escape(post_url, quote=True),
        site_url=html.escape(site_url),
    )

    return EmailMessage(to=to_email, subject=subject, html=body, text=text)
