"""Authorization header providers: legacy ClientLogin and bearer credentials"""

import re
import threading
from typing import Optional

import httpx

from gdata_uploader.core.config import CLIENT_LOGIN_URL
from gdata_uploader.core.exceptions import AuthenticationError, ResponseParseError, UploadError
from gdata_uploader.core.logging import auth_logger

_AUTH_RE = re.compile(r"^Auth=(.+)$", re.MULTILINE)
_ERROR_RE = re.compile(r"^Error=(.+)$", re.MULTILINE)


class BearerAuth:
    """Credential obtained elsewhere (e.g. an OAuth flow); sent as-is"""

    def __init__(self, access_token: str):
        if not access_token:
            raise ValueError("access_token must not be empty")
        self._access_token = access_token

    def header(self) -> str:
        return f"Bearer {self._access_token.strip()}"


class ClientLoginAuth:
    """Legacy username/password login, performed once per instance.

    The token is fetched on first use and kept for the lifetime of the
    object. A lock serializes the first calls so concurrent uploads trigger
    a single login. Failures are not cached; the next call tries again.
    """

    def __init__(
        self,
        username: str,
        password: str,
        client_id: str,
        http: httpx.Client,
        login_url: str = CLIENT_LOGIN_URL
    ):
        self.username = username
        self._password = password
        self.client_id = client_id
        self._http = http
        self.login_url = login_url
        self._token: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def token(self) -> str:
        if self._token is None:
            with self._lock:
                if self._token is None:
                    self._token = self._login()
        return self._token

    def header(self) -> str:
        return f"GoogleLogin auth={self.token}"

    def _login(self) -> str:
        """POST credentials to ClientLogin and return the Auth value

        Raises:
            AuthenticationError: Credentials rejected (HTTP 403)
            UploadError: Any other non-200 reply, message is the Error= value
            ResponseParseError: 200 reply without an Auth= line
        """
        auth_logger.info(f"Requesting ClientLogin token for {self.username}")
        response = self._http.post(
            self.login_url,
            data={
                "Email": self.username,
                "Passwd": self._password,
                "service": "youtube",
                "source": self.client_id,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        if response.status_code != 200:
            match = _ERROR_RE.search(response.text)
            error = match.group(1).strip() if match else response.text.strip()
            auth_logger.error(f"ClientLogin failed for {self.username}: HTTP {response.status_code} - {error}")
            if response.status_code == 403:
                raise AuthenticationError(error, status_code=403)
            raise UploadError(error, status_code=response.status_code)

        match = _AUTH_RE.search(response.text)
        if not match:
            raise ResponseParseError("ClientLogin response has no Auth= line")

        auth_logger.debug(f"ClientLogin token obtained for {self.username}")
        return match.group(1).strip()
