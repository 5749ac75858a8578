"""
Notification content for a matched publication.

All data extraction happens in _prepare_message_data() so the text and HTML
formatters only handle presentation.
"""

import html
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config import settings
from models import Publication, SubscriberPreferences
from shared.utils import format_publication_date

EMAIL_SUBJECT_TEMPLATE = "Nova publicação {number} corresponde às suas preferências"


def _local_zone(preferences: SubscriberPreferences) -> ZoneInfo:
    """Subscriber's zone, falling back to DEFAULT_TIMEZONE for unknown names."""
    try:
        return ZoneInfo(preferences.timezone or settings.DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(settings.DEFAULT_TIMEZONE)


def _prepare_message_data(
    preferences: SubscriberPreferences,
    publication: Publication,
    matched_fields: list[str],
    detected_at: datetime | None = None,
) -> dict[str, Any]:
    """
    Extract and format every value shown in a notification.

    Args:
        preferences: Recipient preferences (name and timezone)
        publication: The matched publication
        matched_fields: Matched dimension descriptions, in display order
        detected_at: Detection time (defaults to now)

    Returns:
        Dict of display-ready strings
    """
    if detected_at is None:
        detected_at = datetime.now(timezone.utc)

    local_time = detected_at.astimezone(_local_zone(preferences))

    return {
        "user_name": preferences.name_for_greeting,
        "detection_time": local_time.strftime("%d/%m/%Y, %H:%M:%S"),
        "publication_number": str(publication.publication_number),
        "publication_date": format_publication_date(publication.publication_date),
        "decision_type": publication.decision.decision_type_name or "Não informado",
        "court": publication.decision.court_acronym,
        "body_text": publication.body_text,
        "matched_fields": list(matched_fields),
    }


def build_subject(publication: Publication) -> str:
    return EMAIL_SUBJECT_TEMPLATE.format(number=publication.publication_number)


def build_text(data: dict[str, Any]) -> str:
    """Plain text body, used for SMS and as the email text part."""
    lines = [
        f"Olá {data['user_name']}!",
        "",
        f"Nova publicação detectada às {data['detection_time']} "
        "que corresponde às suas preferências:",
        "",
        f"Número da Publicação: {data['publication_number']}",
        f"Data: {data['publication_date']}",
        f"Tipo de Decisão: {data['decision_type']}",
    ]
    if data["court"]:
        lines.append(f"Tribunal: {data['court']}")
    lines.extend(
        [
            f"Conteúdo: {data['body_text']}",
            "",
            "Preferências Correspondidas:",
            *[f"- {field}" for field in data["matched_fields"]],
            "",
            "Atenciosamente,",
            "Seu robô de notificações",
        ]
    )
    return "\n".join(lines)


def build_html(data: dict[str, Any]) -> str:
    """HTML email body. Every value is escaped."""
    esc = {
        key: html.escape(value) if isinstance(value, str) else value
        for key, value in data.items()
    }
    fields_html = "".join(
        f"<li>{html.escape(field)}</li>" for field in data["matched_fields"]
    )
    court_html = (
        f"<p><strong>Tribunal:</strong> {esc['court']}</p>" if data["court"] else ""
    )
    body_html = esc["body_text"].replace("\n", "<br>")

    return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Nova publicação</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;
            line-height: 1.6;
            color: #333;
            max-width: 600px;
            margin: 0 auto;
            padding: 20px;
            background-color: #f5f5f5;
        }}
        .container {{
            background-color: white;
            padding: 30px;
            border-radius: 8px;
        }}
        .meta {{
            color: #6b7280;
            font-size: 13px;
        }}
        .matched {{
            background-color: #f0fdf4;
            border-left: 3px solid #10b981;
            padding: 8px 12px;
            margin: 10px 0;
            color: #065f46;
        }}
        .content {{
            border-left: 4px solid #e5e7eb;
            padding: 15px;
            background-color: #f9fafb;
        }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Olá {esc['user_name']}!</h1>
        <p class="meta">Nova publicação detectada às {esc['detection_time']} que corresponde às suas preferências.</p>
        <p><strong>Número da Publicação:</strong> {esc['publication_number']}</p>
        <p><strong>Data:</strong> {esc['publication_date']}</p>
        <p><strong>Tipo de Decisão:</strong> {esc['decision_type']}</p>
        {court_html}
        <div class="matched">
            <strong>Preferências Correspondidas:</strong>
            <ul>{fields_html}</ul>
        </div>
        <div class="content">{body_html}</div>
        <p class="meta">Atenciosamente,<br>Seu robô de notificações</p>
    </div>
</body>
</html>
"""


def build_message(
    preferences: SubscriberPreferences,
    publication: Publication,
    matched_fields: list[str],
    detected_at: datetime | None = None,
) -> dict[str, str]:
    """
    Build every rendering of one notification.

    Returns:
        Dict with 'subject', 'text' and 'html'
    """
    data = _prepare_message_data(preferences, publication, matched_fields, detected_at)
    return {
        "subject": build_subject(publication),
        "text": build_text(data),
        "html": build_html(data),
    }
