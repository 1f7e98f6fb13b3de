"""multipart/related request body for video uploads"""

from gdata_uploader.core.config import MULTIPART_BOUNDARY
from gdata_uploader.utils.chain_io import ChainedStream

CRLF = "\r\n"
ATOM_CONTENT_TYPE = "application/atom+xml; charset=UTF-8"


def multipart_content_type(boundary: str = MULTIPART_BOUNDARY) -> str:
    return f"multipart/related; boundary={boundary}"


def build_upload_body(
    video_xml: str,
    data,
    mime_type: str = "video/mp4",
    boundary: str = MULTIPART_BOUNDARY
) -> ChainedStream:
    """Wrap the metadata document and the video source into a streamed body.

    The video source is passed through untouched; for file handles nothing is
    read until the transport pulls from the returned stream.

    Raises:
        ValueError: If an in-memory payload contains the boundary delimiter
    """
    delimiter = f"--{boundary}"
    if isinstance(data, str):
        data = data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)) and delimiter.encode("utf-8") in data:
        raise ValueError(f"Video payload contains the multipart boundary {boundary!r}")

    return ChainedStream([
        f"{delimiter}{CRLF}",
        f"Content-Type: {ATOM_CONTENT_TYPE}{CRLF}{CRLF}",
        video_xml,
        f"{CRLF}{delimiter}{CRLF}",
        f"Content-Type: {mime_type}{CRLF}Content-Transfer-Encoding: binary{CRLF}{CRLF}",
        data,
        f"{CRLF}{delimiter}--{CRLF}",
    ])
