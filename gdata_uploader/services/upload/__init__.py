"""Upload service module - public API exports"""

from gdata_uploader.services.upload.client import VideoUploadClient
from gdata_uploader.services.upload.auth import BearerAuth, ClientLoginAuth
from gdata_uploader.services.upload.multipart import build_upload_body, multipart_content_type
from gdata_uploader.services.upload.responses import (
    raise_on_faulty_response,
    parse_upload_errors,
    format_upload_errors,
    parse_video_id,
    parse_video_record,
    parse_upload_token,
)

__all__ = [
    "VideoUploadClient",
    "BearerAuth",
    "ClientLoginAuth",
    "build_upload_body",
    "multipart_content_type",
    "raise_on_faulty_response",
    "parse_upload_errors",
    "format_upload_errors",
    "parse_video_id",
    "parse_video_record",
    "parse_upload_token",
]
