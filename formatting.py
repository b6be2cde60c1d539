"""Report formatting: localized timestamp plus decorative template.

Pure functions, no I/O. The Persian rendering uses the Solar Hijri
calendar (via jdatetime) with Persian month names and digits, matching how
Iranian readers expect dates in a channel post.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

import jdatetime

RULE = "━━━━━━━━━━━━━━━━━"

REPORT_HEADERS = {
    "fa": "📊 گزارش هوشمند: وضعیت اینترنت ایران",
    "en": "📊 Smart Report: Internet Status in Iran",
}

_PERSIAN_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")


def to_persian_digits(text: str) -> str:
    """Replace ASCII digits with Extended Arabic-Indic (Persian) digits."""
    return text.translate(_PERSIAN_DIGITS)


def format_timestamp(now: datetime, language: str = "fa", tz: str | None = None) -> str:
    """Render a timestamp in the long calendar format of the target locale.

    Args:
        now: Moment to render (naive values are taken as already local)
        language: 'fa' for Solar Hijri/Persian, anything else for English
        tz: Optional IANA timezone to convert into first

    Returns:
        e.g. '۱۳ فروردین ۱۴۰۳، ساعت ۰۹:۰۵' or 'April 1, 2024 at 09:05'
    """
    if tz and now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(tz))

    if language == "fa":
        jnow = jdatetime.datetime.fromgregorian(datetime=now)
        month = jdatetime.date.j_months_fa[jnow.month - 1]
        text = f"{jnow.day} {month} {jnow.year}، ساعت {jnow.hour:02d}:{jnow.minute:02d}"
        return to_persian_digits(text)

    return f"{now.strftime('%B')} {now.day}, {now.year} at {now.strftime('%H:%M')}"


def format_report(
    summary: str,
    now: datetime,
    language: str = "fa",
    tz: str | None = None,
) -> str:
    """Wrap a summary with the report header and a timestamp footer.

    Args:
        summary: Summarizer output (inserted verbatim)
        now: Generation time
        language: Report language
        tz: IANA timezone for the footer timestamp

    Returns:
        Final report text, ready to persist and publish
    """
    header = REPORT_HEADERS.get(language, REPORT_HEADERS["en"])
    stamp = format_timestamp(now, language=language, tz=tz)
    return f"""
{header}

{summary}

{RULE}
🕒 {stamp}
{RULE}
"""
