"""Shared pytest fixtures for test suite"""
import pytest
import httpx
from typing import Dict, Generator, List, Tuple

from gdata_uploader.services.upload.client import VideoUploadClient


LOGIN_PATH = "/youtube/accounts/ClientLogin"
UPLOADS_PATH = "/feeds/api/users/testuser/uploads"

LOGIN_OK = "SID=sid-value\nLSID=lsid-value\nAuth=TOKEN123\n"

UPLOAD_OK = (
    "<?xml version='1.0' encoding='UTF-8'?>"
    "<entry xmlns='http://www.w3.org/2005/Atom'>"
    "<id>http://gdata.youtube.com/feeds/api/videos/ABC123</id>"
    "<title type='text'>t</title>"
    "</entry>"
)

UPDATED_ENTRY = (
    "<?xml version='1.0' encoding='UTF-8'?>"
    "<entry xmlns='http://www.w3.org/2005/Atom' "
    "xmlns:media='http://search.yahoo.com/mrss/' "
    "xmlns:yt='http://gdata.youtube.com/schemas/2007'>"
    "<id>tag:youtube.com,2008:video:XYZ789</id>"
    "<media:group>"
    "<media:title type='plain'>New title</media:title>"
    "<media:description type='plain'>New description</media:description>"
    "<media:keywords>one, two</media:keywords>"
    "<media:category label='People' scheme='http://gdata.youtube.com/schemas/2007/categories.cat'>People</media:category>"
    "<yt:private/>"
    "<yt:videoid>XYZ789</yt:videoid>"
    "</media:group>"
    "<yt:accessControl action='comment' permission='denied'/>"
    "</entry>"
)

TOKEN_OK = (
    "<?xml version='1.0' encoding='UTF-8'?>"
    "<response><url>http://uploads.gdata.youtube.com/action/FormDataUpload/AIwbF</url>"
    "<token>AEwbFAQEvf3xox</token></response>"
)

VALIDATION_ERROR = (
    "<?xml version='1.0' encoding='UTF-8'?>"
    "<errors xmlns='http://schemas.google.com/g/2005'>"
    "<error><domain>yt:validation</domain><code>too_long</code>"
    "<location type='xpath'>media:group/media:title/text()</location></error>"
    "<error><domain>yt:validation</domain><code>required</code>"
    "<location type='xpath'>media:group/media:category/text()</location></error>"
    "</errors>"
)


class FakeGDataAPI:
    """Routes requests by (method, path) to canned responses and records them"""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, str]] = {
            ("POST", LOGIN_PATH): (200, LOGIN_OK),
        }
        self.requests: List[httpx.Request] = []

    def route(self, method: str, path: str, status: int = 200, text: str = ""):
        self.routes[(method, path)] = (status, text)

    def requests_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, text = self.routes.get((request.method, request.url.path), (404, "Not Found"))
        return httpx.Response(status, text=text)


@pytest.fixture
def gdata_api() -> FakeGDataAPI:
    """Fake GData API with a successful ClientLogin route"""
    return FakeGDataAPI()


@pytest.fixture
def http_client(gdata_api) -> Generator[httpx.Client, None, None]:
    with httpx.Client(transport=httpx.MockTransport(gdata_api.handler)) as c:
        yield c


@pytest.fixture
def client(http_client) -> VideoUploadClient:
    """Client authenticating through ClientLogin"""
    return VideoUploadClient("testuser", "secret", "devkey", http_client=http_client)


@pytest.fixture
def bearer_client(http_client) -> VideoUploadClient:
    """Client with a pre-authorized bearer credential"""
    return VideoUploadClient(
        "testuser", None, "devkey", access_token="ya29.bearer", http_client=http_client
    )


@pytest.fixture
def video_file(tmp_path):
    """Binary video file on disk"""
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42" + bytes(range(256)) * 40)
    return path
