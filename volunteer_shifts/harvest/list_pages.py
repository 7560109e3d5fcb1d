"""Location list-page retrieval for the HTML fallback path."""

from __future__ import annotations

import logging

from volunteer_shifts.common.config_loader import build_url
from volunteer_shifts.common.http import HttpClient, HttpRequestError
from volunteer_shifts.common.logging import get_logger, log_event

logger = get_logger("harvest")


def fetch_list_page(client: HttpClient, source_config: dict, slug: str) -> str | None:
    """Return page markup, or None when the location does not exist."""
    url = build_url(source_config, source_config["list_pages"]["endpoint_template"].format(slug=slug))
    try:
        text = client.get_text(url)
    except HttpRequestError as exc:
        log_event(
            logger,
            f"list page unavailable for {slug}: {exc}",
            level=logging.DEBUG,
            stage="probe",
            source=url,
            source_id=slug,
            event="FETCH_FAIL",
            status="skipped",
            error_code=exc.error_code,
        )
        return None

    # The upstream echoes the slug back for locations it does not know.
    if text.strip() == slug:
        return None
    return text
