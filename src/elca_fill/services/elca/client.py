from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from elca_fill.errors import AuthenticationFailed, ReportFetchFailed, ReportNotFound


LOGIN_PATH = "/login/"
PROJECTS_PATH = "/projects/"
REPORT_PATH = "/project-reports/summaryElementTypes/"
REPORT_VIEW_KEY = "Elca\\View\\Report\\ElcaReportElementTypeEffectsView"
SID_COOKIE = "sid"

_XHR_HEADERS = {
    "accept": "*/*",
    "x-requested-with": "XMLHttpRequest",
}


def mask_secret(value: str | None, keep: int = 4) -> str:
    s = str(value or "")
    if len(s) <= keep:
        return "*" * len(s)
    return s[:keep] + "*" * (len(s) - keep)


@dataclass
class ElcaClient:
    """Minimal eLCA web client: form login and the element-types summary report."""

    base_url: str = "https://www.bauteileditor.de"
    timeout_sec: float = 30.0
    transport: httpx.BaseTransport | None = None

    def _client(self, sid: str | None = None) -> httpx.Client:
        cookies = {SID_COOKIE: sid} if sid else None
        return httpx.Client(
            base_url=self.base_url.rstrip("/"),
            timeout=self.timeout_sec,
            follow_redirects=False,
            cookies=cookies,
            transport=self.transport,
        )

    def login(self, username: str, password: str) -> str:
        """Post the login form and return the `sid` session cookie."""
        if not username or not password:
            raise AuthenticationFailed("ELCA_USERNAME and ELCA_PASSWORD must be set")
        form = {
            "origin": PROJECTS_PATH,
            "authName": username,
            "authKey": password,
            "login": "send",
        }
        with self._client() as client:
            r = client.post(
                LOGIN_PATH,
                data=form,
                headers={**_XHR_HEADERS, "Referer": f"{self.base_url.rstrip('/')}{PROJECTS_PATH}"},
            )
            if not r.is_success:
                raise AuthenticationFailed(f"Authentication failed with status {r.status_code}")
            sid = r.cookies.get(SID_COOKIE)
        if not sid:
            raise AuthenticationFailed("No SID found in cookies")
        return sid

    def fetch_report_html(self, sid: str, project_id: str) -> str:
        """Return the HTML fragment of the project's element-types summary report."""
        project_url = f"{PROJECTS_PATH}{project_id}/"
        with self._client(sid) as client:
            # The report endpoint reports on the project currently selected in the session.
            r = client.get(project_url, headers=_XHR_HEADERS)
            if not r.is_success:
                raise ReportFetchFailed(r.status_code, r.text)

            r = client.get(
                REPORT_PATH,
                headers={
                    **_XHR_HEADERS,
                    "x-hash-url": REPORT_PATH,
                    "Referer": f"{self.base_url.rstrip('/')}{project_url}",
                },
            )
            if not r.is_success:
                raise ReportFetchFailed(r.status_code, r.text)
            try:
                data: Any = r.json()
            except ValueError:
                raise ReportNotFound(["<non-JSON response>"]) from None

        if not isinstance(data, dict):
            raise ReportNotFound([type(data).__name__])
        html = data.get(REPORT_VIEW_KEY)
        if not html:
            raise ReportNotFound([str(k) for k in data.keys()])
        return str(html)
