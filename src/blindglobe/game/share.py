"""Share text for a finished daily game."""

SHARE_TEMPLATE = (
    "{site}\n"
    "\U0001f648\U0001f30d{date_key}\n"
    "\U0001f3c6 Score: {total_score}\n"
    "\n"
    "Can you top my geo-spatial awareness today?"
)


def format_share_text(total_score: int, date_key: str, site: str) -> str:
    """Render the share message for a day's total score."""
    return SHARE_TEMPLATE.format(site=site, date_key=date_key, total_score=total_score)
