"""Client for uploading, updating and deleting videos through the GData API"""

from gdata_uploader.core.exceptions import (
    GDataError,
    AuthenticationError,
    UploadError,
    ResponseParseError,
)
from gdata_uploader.schemas.video import UploadOptions, VideoRecord, UploadToken
from gdata_uploader.services.upload import VideoUploadClient
from gdata_uploader.utils.chain_io import (
    ChainedStream,
    BytesSegment,
    FileSegment,
    StreamSegment,
)

__version__ = "0.1.0"

__all__ = [
    "VideoUploadClient",
    "UploadOptions",
    "VideoRecord",
    "UploadToken",
    "ChainedStream",
    "BytesSegment",
    "FileSegment",
    "StreamSegment",
    "GDataError",
    "AuthenticationError",
    "UploadError",
    "ResponseParseError",
]
