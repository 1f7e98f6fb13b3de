"""Atom entry rendering and upload filename helpers"""
import hashlib
import io
import uuid
import xml.etree.ElementTree as ET

from gdata_uploader.core.config import CATEGORIES_SCHEME
from gdata_uploader.schemas.video import UploadOptions
from gdata_uploader.utils.chain_io import Segment

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

ENTRY_NAMESPACES = {
    "xmlns": "http://www.w3.org/2005/Atom",
    "xmlns:media": "http://search.yahoo.com/mrss/",
    "xmlns:yt": "http://gdata.youtube.com/schemas/2007",
}


def render_video_xml(options: UploadOptions) -> str:
    """Render video attributes as the Atom entry the API expects.

    Tags keep their literal prefixes so the document matches the API schema
    regardless of ElementTree's namespace registry.
    """
    entry = ET.Element("entry", ENTRY_NAMESPACES)

    group = ET.SubElement(entry, "media:group")
    ET.SubElement(group, "media:title", {"type": "plain"}).text = options.title
    ET.SubElement(group, "media:description", {"type": "plain"}).text = options.description
    ET.SubElement(group, "media:keywords").text = ",".join(options.keywords)
    ET.SubElement(group, "media:category", {"scheme": CATEGORIES_SCHEME}).text = options.category
    if options.private:
        ET.SubElement(group, "yt:private")

    for action, permission in options.access_controls():
        ET.SubElement(entry, "yt:accessControl", {"action": action, "permission": permission})

    return XML_DECLARATION + ET.tostring(entry, encoding="unicode")


def generate_unique_filename(data) -> str:
    """Derive a stable Slug for the upload.

    Handles with a name hash the name; other readables hash their first
    1024 bytes and are rewound; raw bytes are hashed whole. Segments are
    never read: they hash their wrapped name or bytes, else their length
    and a random uuid.
    """
    if isinstance(data, Segment):
        source = data.source
        if isinstance(source, bytes) or isinstance(getattr(source, "name", None), (str, bytes)):
            return generate_unique_filename(source)
        return hashlib.md5(f"{data.length}-{uuid.uuid4().hex}".encode("utf-8")).hexdigest()

    name = getattr(data, "name", None)
    if isinstance(name, (str, bytes)):
        if isinstance(name, str):
            name = name.encode("utf-8")
        return hashlib.md5(name).hexdigest()

    if hasattr(data, "read"):
        position = data.tell()
        chunk = data.read(1024)
        data.seek(position, io.SEEK_SET)
        return hashlib.md5(chunk).hexdigest()

    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data).hexdigest()
