"""Response classification and parsing for GData API replies"""

import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple

import httpx

from gdata_uploader.core.exceptions import (
    AuthenticationError, ResponseParseError, UploadError
)
from gdata_uploader.core.logging import upload_logger
from gdata_uploader.schemas.video import VideoRecord, UploadToken

FEED_NS = {
    "atom": "http://www.w3.org/2005/Atom",
    "media": "http://search.yahoo.com/mrss/",
    "yt": "http://gdata.youtube.com/schemas/2007",
}

_TITLE_RE = re.compile(r"<TITLE>(.+?)</TITLE>", re.IGNORECASE | re.DOTALL)
_URL_RE = re.compile(r"<url>(.+?)</url>", re.DOTALL)
_TOKEN_RE = re.compile(r"<token>(.+?)</token>", re.DOTALL)
_LOCATION_FIELD_RE = re.compile(r"([^/]+)/text\(\)")
# v1 ids end in ".../videos/<id>", v2 ids in "...:video:<id>"
_VIDEO_ID_RE = re.compile(r"(?:videos/|:video:)(.+)$")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_xml(body: str) -> ET.Element:
    try:
        return ET.fromstring(body)
    except ET.ParseError as e:
        raise ResponseParseError(f"Response body is not valid XML: {e}") from e


def raise_on_faulty_response(response: httpx.Response) -> None:
    """Map a non-2xx response to AuthenticationError or UploadError

    Raises:
        AuthenticationError: HTTP 403, message is the error page title
        UploadError: Any other non-2xx status, message lists "field: code" lines
    """
    status = response.status_code
    if status == 403:
        title = extract_error_title(response.text)
        upload_logger.error(f"Request rejected: HTTP 403 - {title}")
        raise AuthenticationError(title or response.reason_phrase, status_code=status)

    if status // 100 != 2:
        errors = parse_upload_errors(response.text)
        message = format_upload_errors(errors) if errors else response.text.strip()
        upload_logger.error(f"Request failed: HTTP {status} - {message.strip()}")
        raise UploadError(message, status_code=status, errors=errors)


def extract_error_title(body: str) -> Optional[str]:
    match = _TITLE_RE.search(body or "")
    return match.group(1).strip() if match else None


def _field_from_location(location: str) -> str:
    """'media:group/media:title/text()' -> 'title'"""
    match = _LOCATION_FIELD_RE.search(location)
    if not match:
        return location.strip()
    return match.group(1).rsplit(":", 1)[-1]


def parse_upload_errors(body: str) -> List[Tuple[str, str]]:
    """Extract (field, code) pairs from an <errors> document.

    Bodies that are not XML (proxy pages, empty bodies) give an empty list.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        return []

    errors = []
    for element in root.iter():
        if _local_name(element.tag) != "error":
            continue
        location = code = ""
        for child in element:
            name = _local_name(child.tag)
            if name == "location":
                location = child.text or ""
            elif name == "code":
                code = child.text or ""
        errors.append((_field_from_location(location), code))
    return errors


def format_upload_errors(errors: List[Tuple[str, str]]) -> str:
    return "".join(f"{field}: {code}\n" for field, code in errors)


def _extract_video_id(id_text: Optional[str]) -> Optional[str]:
    match = _VIDEO_ID_RE.search((id_text or "").strip())
    return match.group(1) if match else None


def parse_video_id(body: str) -> str:
    """Video id from the <id> element of an upload response

    Raises:
        ResponseParseError: If the body has no <id> or it holds no video id
    """
    root = _parse_xml(body)
    id_element = next((e for e in root.iter() if _local_name(e.tag) == "id"), None)
    if id_element is None:
        raise ResponseParseError("Upload response has no <id> element")
    video_id = _extract_video_id(id_element.text)
    if not video_id:
        raise ResponseParseError(f"Could not find a video id in {id_element.text!r}")
    return video_id


def parse_video_record(body: str) -> VideoRecord:
    """Parse an Atom entry returned by an update into a VideoRecord"""
    root = _parse_xml(body)
    if _local_name(root.tag) != "entry":
        raise ResponseParseError(f"Expected an Atom <entry>, got <{_local_name(root.tag)}>")

    video_id = _extract_video_id(root.findtext("atom:id", namespaces=FEED_NS))
    group = root.find("media:group", FEED_NS)
    if group is None:
        return VideoRecord(video_id=video_id, raw=body)

    # v2 entries carry the bare id in media:group
    video_id = group.findtext("yt:videoid", default=video_id, namespaces=FEED_NS)
    keywords = group.findtext("media:keywords", default="", namespaces=FEED_NS)

    return VideoRecord(
        video_id=video_id,
        title=group.findtext("media:title", default="", namespaces=FEED_NS),
        description=group.findtext("media:description", default="", namespaces=FEED_NS),
        category=group.findtext("media:category", default="", namespaces=FEED_NS),
        keywords=[k.strip() for k in keywords.split(",") if k.strip()],
        private=group.find("yt:private", FEED_NS) is not None,
        access_controls={
            e.get("action"): e.get("permission")
            for e in root.findall("yt:accessControl", FEED_NS)
        },
        raw=body,
    )


def parse_upload_token(body: str, next_url: str) -> UploadToken:
    """Build the browser upload target from a GetUploadToken response

    Raises:
        ResponseParseError: If <url> or <token> is missing
    """
    url = _URL_RE.search(body or "")
    token = _TOKEN_RE.search(body or "")
    if not url or not token:
        raise ResponseParseError("GetUploadToken response is missing <url> or <token>")
    return UploadToken(url=f"{url.group(1)}?nexturl={next_url}", token=token.group(1))
