"""Rendering of notification emails in HTML and plain text."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape

DEFAULT_USER_NAME = "Event Finder User"


@dataclass(frozen=True)
class TypeStyle:
    background: str
    icon: str


TYPE_STYLES: dict[str, TypeStyle] = {
    "reminder": TypeStyle(background="#fef3c7", icon="🔔"),
    "confirmation": TypeStyle(background="#d1fae5", icon="✅"),
    "update": TypeStyle(background="#dbeafe", icon="📝"),
    "cancellation": TypeStyle(background="#fee2e2", icon="❌"),
}
DEFAULT_STYLE = TypeStyle(background="#f3f4f6", icon="📬")


@dataclass(frozen=True)
class EmailRequest:
    """Everything needed to email one notification to its recipient."""

    notification_id: str
    user_email: str
    notification_type: str
    title: str
    message: str
    user_name: str | None = None
    event_title: str | None = None
    event_date: str | None = None
    event_time: str | None = None
    event_location: str | None = None


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str
    text: str


_BASE_STYLES = """
    <style>
      body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 0; padding: 0; background-color: #f9fafb; }
      .container { max-width: 600px; margin: 0 auto; background-color: #ffffff; }
      .header { padding: 32px 24px; text-align: center; }
      .header h1 { color: #111827; margin: 0; font-size: 24px; }
      .content { padding: 32px 24px; }
      .event-card { background-color: #f9fafb; border-radius: 12px; padding: 20px; margin: 20px 0; }
      .event-title { font-size: 18px; font-weight: 600; color: #111827; margin: 0 0 12px 0; }
      .event-detail { margin: 8px 0; color: #6b7280; font-size: 14px; }
      .button { display: inline-block; background: #0d9488; color: #ffffff; text-decoration: none; padding: 12px 24px; border-radius: 8px; font-weight: 600; margin-top: 20px; }
      .footer { background-color: #f9fafb; padding: 24px; text-align: center; color: #9ca3af; font-size: 12px; }
    </style>
"""


def style_for(notification_type: str) -> TypeStyle:
    """Return the presentation for ``notification_type`` or the default one."""

    return TYPE_STYLES.get(notification_type, DEFAULT_STYLE)


def _event_details(request: EmailRequest) -> list[tuple[str, str, str]]:
    """Return ``(icon, label, value)`` rows for the event card, if any."""

    if not request.event_title:
        return []
    rows = [
        ("📅", "Date", request.event_date),
        ("🕐", "Time", request.event_time),
        ("📍", "Location", request.event_location),
    ]
    return [(icon, label, value) for icon, label, value in rows if value]


def _render_html(
    request: EmailRequest, *, user_name: str, style: TypeStyle, site_url: str, year: int
) -> str:
    event_card = ""
    if request.event_title:
        details = "".join(
            f'<p class="event-detail">{icon} {escape(value)}</p>'
            for icon, _label, value in _event_details(request)
        )
        event_card = (
            '<div class="event-card">'
            f'<p class="event-title">{escape(request.event_title)}</p>'
            f"{details}"
            "</div>"
        )

    site = escape(site_url, quote=True)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  {_BASE_STYLES}
</head>
<body>
  <div class="container">
    <div class="header" style="background-color: {style.background};">
      <h1>{style.icon} {escape(request.title)}</h1>
    </div>
    <div class="content">
      <p>Hi {escape(user_name)},</p>
      <p>{escape(request.message)}</p>
      {event_card}
      <a href="{site}/notifications" class="button">View Notifications</a>
    </div>
    <div class="footer">
      <p>You're receiving this email because you have email notifications enabled.</p>
      <p>To change your notification preferences, visit your <a href="{site}/profile/settings">settings</a>.</p>
      <p>&copy; {year} Local Event Finder</p>
    </div>
  </div>
</body>
</html>
"""


def _render_text(
    request: EmailRequest, *, user_name: str, style: TypeStyle, site_url: str, year: int
) -> str:
    lines = [f"{style.icon} {request.title}", "", f"Hi {user_name},", "", request.message]
    if request.event_title:
        lines.extend(["", f"Event: {request.event_title}"])
        lines.extend(f"{label}: {value}" for _icon, label, value in _event_details(request))
    lines.extend(
        [
            "",
            f"View all notifications: {site_url}/notifications",
            "",
            "---",
            "You're receiving this email because you have email notifications enabled.",
            f"To change your preferences, visit: {site_url}/profile/settings",
            f"© {year} Local Event Finder",
        ]
    )
    return "\n".join(lines)


def render_email(request: EmailRequest, *, site_url: str, year: int) -> EmailContent:
    """Render the subject, HTML and plain-text bodies for ``request``.

    Both bodies carry the same information; the event card only appears when
    ``event_title`` is set.
    """

    site_url = site_url.rstrip("/")
    user_name = request.user_name or DEFAULT_USER_NAME
    style = style_for(request.notification_type)
    return EmailContent(
        subject=request.title,
        html=_render_html(
            request, user_name=user_name, style=style, site_url=site_url, year=year
        ),
        text=_render_text(
            request, user_name=user_name, style=style, site_url=site_url, year=year
        ),
    )


__all__ = [
    "DEFAULT_STYLE",
    "DEFAULT_USER_NAME",
    "EmailContent",
    "EmailRequest",
    "TYPE_STYLES",
    "TypeStyle",
    "render_email",
    "style_for",
]
