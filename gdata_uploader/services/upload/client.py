"""GData video upload client - uploads, updates, deletions and upload tokens"""

from typing import Any, Dict, Optional

import httpx

from gdata_uploader.core.config import (
    settings as default_settings, Settings, UPLOADS_PATH, UPLOAD_TOKEN_PATH
)
from gdata_uploader.core.logging import http_logger, upload_logger
from gdata_uploader.schemas.video import UploadOptions, UploadToken, VideoRecord
from gdata_uploader.services.upload.auth import BearerAuth, ClientLoginAuth
from gdata_uploader.services.upload.multipart import build_upload_body, multipart_content_type
from gdata_uploader.services.upload.responses import (
    parse_upload_token, parse_video_id, parse_video_record, raise_on_faulty_response
)
from gdata_uploader.utils.templates import generate_unique_filename, render_video_xml

ATOM_XML = "application/atom+xml"
ATOM_XML_UTF8 = "application/atom+xml; charset=UTF-8"
_REDACTED_HEADERS = {"authorization", "x-gdata-key"}


def _redact(headers: httpx.Headers) -> Dict[str, str]:
    return {
        k: ("<redacted>" if k.lower() in _REDACTED_HEADERS else v)
        for k, v in headers.items()
    }


def _log_request(request: httpx.Request):
    http_logger.debug(f"-> {request.method} {request.url} headers={_redact(request.headers)}")


def _log_response(response: httpx.Response):
    request = response.request
    http_logger.debug(
        f"<- {response.status_code} {response.reason_phrase} for {request.method} {request.url} "
        f"headers={dict(response.headers)}"
    )


class VideoUploadClient:
    """Uploads, updates and deletes videos through the GData API.

        with VideoUploadClient("user", "pass", "dev-key") as client:
            with open("test.m4v", "rb") as f:
                video_id = client.upload(f, {
                    "title": "test",
                    "description": "cool vid",
                    "category": "People",
                    "keywords": ["cool", "blah", "test"],
                })

    Without an access_token the client logs in through ClientLogin on first
    use and reuses the token for its lifetime. With one, it is sent as a
    bearer credential and no login happens.

    Every call performs one blocking round trip and is not retried.
    Field validation failures raise UploadError (message lists
    "field: code" lines); rejected credentials raise AuthenticationError.
    """

    def __init__(
        self,
        username: str,
        password: Optional[str],
        developer_key: str,
        client_id: str = "gdata_uploader",
        access_token: Optional[str] = None,
        *,
        base_url: str = default_settings.GDATA_BASE_URL,
        uploads_url: str = default_settings.GDATA_UPLOADS_URL,
        login_url: str = default_settings.CLIENT_LOGIN_URL,
        boundary: str = default_settings.MULTIPART_BOUNDARY,
        timeout: float = default_settings.HTTP_TIMEOUT,
        http_client: Optional[httpx.Client] = None
    ):
        self.username = username
        self.developer_key = developer_key
        self.client_id = client_id
        self.base_url = base_url.rstrip("/")
        self.uploads_url = uploads_url.rstrip("/")
        self.boundary = boundary

        # A caller-provided client is left open on close()
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)
        self._http_debugging = False

        if access_token:
            self.auth = BearerAuth(access_token)
        else:
            self.auth = ClientLoginAuth(username, password or "", client_id, self._http, login_url=login_url)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "VideoUploadClient":
        """Build a client from environment-backed settings"""
        settings = settings or default_settings
        client = cls(
            settings.GDATA_USERNAME,
            settings.GDATA_PASSWORD,
            settings.GDATA_DEVELOPER_KEY,
            client_id=settings.GDATA_CLIENT_ID,
            access_token=settings.GDATA_ACCESS_TOKEN,
            base_url=settings.GDATA_BASE_URL,
            uploads_url=settings.GDATA_UPLOADS_URL,
            login_url=settings.CLIENT_LOGIN_URL,
            boundary=settings.MULTIPART_BOUNDARY,
            timeout=settings.HTTP_TIMEOUT,
            **kwargs
        )
        if settings.HTTP_DEBUG:
            client.enable_http_debugging()
        return client

    def enable_http_debugging(self):
        """Log every request and response line to the "http" logger"""
        if self._http_debugging:
            return
        hooks = self._http.event_hooks
        hooks["request"].append(_log_request)
        hooks["response"].append(_log_response)
        self._http.event_hooks = hooks
        self._http_debugging = True

    def close(self):
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _uploads_path(self, video_id: Optional[str] = None) -> str:
        path = UPLOADS_PATH.format(user=self.username or "default")
        if video_id:
            path = f"{path}/{video_id}"
        return path

    def _base_headers(self) -> Dict[str, str]:
        return {
            "X-GData-Key": f"key={self.developer_key}",
            "Authorization": self.auth.header(),
        }

    def upload(self, data: Any, options: Optional[Any] = None) -> str:
        """Upload `data` (bytes, a binary file handle or a Segment) and return the new video id.

        The handle is streamed from its current position and stays open; it
        must not change size until this call returns.

        Raises:
            AuthenticationError: Credentials rejected
            UploadError: The API refused one or more fields
            ResponseParseError: The success response carried no video id
        """
        opts = UploadOptions.from_options(options)
        filename = opts.filename or generate_unique_filename(data)

        body = build_upload_body(render_video_xml(opts), data, opts.mime_type, self.boundary)
        headers = self._base_headers()
        headers.update({
            "Slug": filename,
            "Content-Type": multipart_content_type(self.boundary),
            "Content-Length": str(body.length()),  # required by the API, no chunked uploads
        })

        url = f"{self.uploads_url}{self._uploads_path()}"
        upload_logger.info(f"Uploading {filename} ({body.length()} bytes, {opts.mime_type}) to {url}")
        response = self._http.post(url, content=body, headers=headers)

        raise_on_faulty_response(response)
        video_id = parse_video_id(response.text)
        upload_logger.info(f"Upload of {filename} complete: video_id={video_id}")
        return video_id

    def update(self, video_id: str, options: Any) -> VideoRecord:
        """Replace a video's metadata and return the updated entry"""
        opts = UploadOptions.from_options(options)
        body = render_video_xml(opts).encode("utf-8")

        headers = self._base_headers()
        headers.update({
            "GData-Version": "2",
            "Content-Type": ATOM_XML,
            "Content-Length": str(len(body)),
        })

        url = f"{self.base_url}{self._uploads_path(video_id)}"
        upload_logger.info(f"Updating video {video_id}")
        response = self._http.put(url, content=body, headers=headers)

        raise_on_faulty_response(response)
        return parse_video_record(response.text)

    def delete(self, video_id: str) -> bool:
        """Delete a video; returns True once the API accepts the deletion"""
        headers = self._base_headers()
        headers.update({
            "Content-Type": ATOM_XML_UTF8,
            "Content-Length": "0",
        })

        url = f"{self.base_url}{self._uploads_path(video_id)}"
        upload_logger.info(f"Deleting video {video_id}")
        response = self._http.delete(url, headers=headers)

        raise_on_faulty_response(response)
        return True

    def get_upload_token(self, options: Any, next_url: str) -> UploadToken:
        """Request a browser-based upload target for a video described by `options`"""
        opts = UploadOptions.from_options(options)
        body = render_video_xml(opts).encode("utf-8")

        headers = self._base_headers()
        headers.update({
            "Content-Type": ATOM_XML_UTF8,
            "Content-Length": str(len(body)),
        })

        url = f"{self.base_url}{UPLOAD_TOKEN_PATH}"
        upload_logger.info(f"Requesting upload token (next_url={next_url})")
        response = self._http.post(url, content=body, headers=headers)

        raise_on_faulty_response(response)
        return parse_upload_token(response.text, next_url)
