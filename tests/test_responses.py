"""Response classification and parsing tests"""
import httpx
import pytest

from gdata_uploader.core.exceptions import (
    AuthenticationError, ResponseParseError, UploadError
)
from gdata_uploader.services.upload.responses import (
    format_upload_errors, parse_upload_errors, parse_upload_token,
    parse_video_id, parse_video_record, raise_on_faulty_response
)

from tests.conftest import TOKEN_OK, UPDATED_ENTRY, UPLOAD_OK, VALIDATION_ERROR


@pytest.mark.critical
class TestRaiseOnFaultyResponse:
    """Test HTTP status classification"""

    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_success_passes(self, status):
        raise_on_faulty_response(httpx.Response(status, text=""))

    def test_403_is_authentication_error_with_title(self):
        body = "<HTML><HEAD><TITLE>Bad creds</TITLE></HEAD><BODY></BODY></HTML>"
        with pytest.raises(AuthenticationError) as exc_info:
            raise_on_faulty_response(httpx.Response(403, text=body))
        assert str(exc_info.value) == "Bad creds"
        assert exc_info.value.status_code == 403

    def test_403_without_title_uses_reason_phrase(self):
        with pytest.raises(AuthenticationError, match="Forbidden"):
            raise_on_faulty_response(httpx.Response(403, text="nope"))

    def test_400_lists_field_and_code(self):
        body = (
            "<errors><error><domain>yt:validation</domain><code>too_long</code>"
            "<location type='xpath'>.../title/text()</location></error></errors>"
        )
        with pytest.raises(UploadError) as exc_info:
            raise_on_faulty_response(httpx.Response(400, text=body))
        assert str(exc_info.value) == "title: too_long\n"
        assert exc_info.value.errors == [("title", "too_long")]
        assert exc_info.value.status_code == 400

    def test_multiple_errors_newline_joined(self):
        with pytest.raises(UploadError) as exc_info:
            raise_on_faulty_response(httpx.Response(400, text=VALIDATION_ERROR))
        assert str(exc_info.value) == "title: too_long\ncategory: required\n"

    def test_non_xml_error_body_kept_verbatim(self):
        with pytest.raises(UploadError) as exc_info:
            raise_on_faulty_response(httpx.Response(502, text="Bad Gateway\n"))
        assert str(exc_info.value) == "Bad Gateway"
        assert exc_info.value.errors == []


class TestParseUploadErrors:
    """Test error list extraction"""

    def test_namespaced_errors(self):
        assert parse_upload_errors(VALIDATION_ERROR) == [
            ("title", "too_long"), ("category", "required")
        ]

    def test_location_without_text_step_kept(self):
        body = "<errors><error><code>invalid</code><location>videoId</location></error></errors>"
        assert parse_upload_errors(body) == [("videoId", "invalid")]

    def test_format(self):
        assert format_upload_errors([("a", "b"), ("c", "d")]) == "a: b\nc: d\n"
        assert format_upload_errors([]) == ""


@pytest.mark.critical
class TestParseVideoId:
    """Test video id extraction from upload responses"""

    def test_v1_id(self):
        assert parse_video_id(UPLOAD_OK) == "ABC123"

    def test_bare_id_element(self):
        assert parse_video_id("<id>...videos/ABC123</id>") == "ABC123"

    def test_v2_id(self):
        assert parse_video_id("<entry><id>tag:youtube.com,2008:video:Q1w2E3</id></entry>") == "Q1w2E3"

    def test_missing_id_raises(self):
        with pytest.raises(ResponseParseError):
            parse_video_id("<entry><title>t</title></entry>")

    def test_invalid_xml_raises(self):
        with pytest.raises(ResponseParseError):
            parse_video_id("not xml")


class TestParseVideoRecord:
    """Test parsing of updated entries"""

    def test_full_entry(self):
        record = parse_video_record(UPDATED_ENTRY)
        assert record.video_id == "XYZ789"
        assert record.title == "New title"
        assert record.description == "New description"
        assert record.category == "People"
        assert record.keywords == ["one", "two"]
        assert record.private is True
        assert record.access_controls == {"comment": "denied"}
        assert record.raw == UPDATED_ENTRY

    def test_entry_without_media_group(self):
        record = parse_video_record(UPLOAD_OK)
        assert record.video_id == "ABC123"
        assert record.title == ""

    def test_non_entry_document_raises(self):
        with pytest.raises(ResponseParseError):
            parse_video_record("<feed/>")


class TestParseUploadToken:
    """Test GetUploadToken responses"""

    def test_url_and_token(self):
        token = parse_upload_token(TOKEN_OK, "http://example.com/done")
        assert token.url == "http://uploads.gdata.youtube.com/action/FormDataUpload/AIwbF?nexturl=http://example.com/done"
        assert token.token == "AEwbFAQEvf3xox"

    def test_missing_token_raises(self):
        with pytest.raises(ResponseParseError):
            parse_upload_token("<response><url>http://x</url></response>", "n")
