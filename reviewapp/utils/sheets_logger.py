import concurrent.futures
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

import requests

logger = logging.getLogger(__name__)


class SheetsLogger:
    """Fire-and-forget logging of analyzed reviews to a Google Apps Script web app.

    ``log`` hands the POST to ``executor`` and returns right away; failures
    end up as warnings in the application log and nowhere else. The caller
    owns the executor and shuts it down.
    """

    def __init__(self, url: Optional[str], executor: concurrent.futures.Executor,
                 timeout: float = 10.0) -> None:
        self.url = (url or "").strip()
        self.timeout = timeout
        self._executor = executor

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def log(self, review: str, sentiment: str, action_code: str,
            meta: Mapping[str, Any]) -> Optional["concurrent.futures.Future[bool]"]:
        if not self.enabled:
            logger.debug("sheets logging disabled; skipping")
            return None
        form = {
            "review": review,
            "sentiment": sentiment,
            "action": action_code,
            "meta": json.dumps(dict(meta), ensure_ascii=False),
        }
        try:
            return self._executor.submit(self._post, form)
        except RuntimeError:
            # executor already shut down (app teardown)
            logger.warning("Failed to log to Google Sheets: executor unavailable")
            return None

    def _post(self, form: Dict[str, str]) -> bool:
        try:
            # data= with a dict sends application/x-www-form-urlencoded
            r = requests.post(self.url, data=form, timeout=self.timeout)
        except Exception as e:
            logger.warning("Error logging to Google Sheets: %s", e)
            return False
        if not r.ok:
            logger.warning("Failed to log to Google Sheets: %s %s", r.status_code, r.reason)
            return False
        return True


def build_meta(headers: Mapping[str, str], client_meta: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Collect contextual metadata for a logged interaction.

    Browser-only facts (screen size, navigator.platform) come from
    ``client_meta`` when the page sends them; the rest from request headers.
    """
    client = dict(client_meta or {})
    platform = client.get("platform") or (headers.get("Sec-CH-UA-Platform") or "").strip('"')
    return {
        "userAgent": client.get("userAgent") or headers.get("User-Agent", ""),
        "platform": platform,
        "language": client.get("language") or (headers.get("Accept-Language", "").split(",")[0].strip()),
        "screen": client.get("screen", ""),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
