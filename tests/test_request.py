"""Tests for building RequestModel instances."""
import pytest
import requests

from s3signer.exceptions import RequestBuildError
from s3signer.models import RequestModel
from s3signer.request import (
    build_request,
    from_prepared_request,
    load_request_file,
    parse_header_line,
    request_hints,
)

from . import vectors


class TestRequestModel:

    def test_defaults(self):
        request = RequestModel()
        assert request.method == "GET"
        assert request.path == "/"
        assert request.query_string == ""
        assert dict(request.headers) == {}
        assert request.raw_authorization_header == ""

    def test_normalization(self):
        request = RequestModel(method="put", query_string="?a=1",
                               headers=[("X-Amz-Date", "1"), ("x-amz-date", "2")])
        assert request.method == "PUT"
        assert request.query_string == "a=1"
        assert dict(request.headers) == {"x-amz-date": "2"}

    def test_only_one_question_mark_stripped(self):
        assert RequestModel(query_string="??a=1").query_string == "?a=1"
        assert RequestModel(query_string="a=1?").query_string == "a=1?"

    def test_headers_read_only(self):
        request = RequestModel(headers={"host": "h"})
        with pytest.raises(TypeError):
            request.headers["host"] = "other"

    def test_caller_dict_copied(self):
        headers = {"Host": "h"}
        request = RequestModel(headers=headers)
        headers["Host"] = "changed"
        assert request.headers["host"] == "h"

    def test_authorization_picked_from_headers(self):
        request = RequestModel(headers={"Authorization": vectors.GET_OBJECT_AUTHORIZATION})
        assert request.raw_authorization_header == vectors.GET_OBJECT_AUTHORIZATION


class TestBuildRequest:

    def test_url_split(self):
        request = build_request("get", "https://b.s3.amazonaws.com/dir/key.txt?list-type=2&prefix=a", {})
        assert request.method == "GET"
        assert request.path == "/dir/key.txt"
        assert request.query_string == "list-type=2&prefix=a"
        assert request.url == "https://b.s3.amazonaws.com/dir/key.txt?list-type=2&prefix=a"

    def test_root_path(self):
        assert build_request("GET", "https://b.s3.amazonaws.com", None).path == "/"

    def test_header_lines(self):
        request = build_request("GET", "https://h/", ["Range: bytes=0-9", "X-Amz-Date:20130524T000000Z"])
        assert dict(request.headers) == {"range": "bytes=0-9", "x-amz-date": "20130524T000000Z"}

    def test_explicit_authorization(self):
        request = build_request("GET", "https://h/", {}, authorization="AWS4-HMAC-SHA256 x")
        assert request.raw_authorization_header == "AWS4-HMAC-SHA256 x"

    @pytest.mark.parametrize("url", ["", "/relative/path", "https://h:notaport/"])
    def test_invalid_url(self, url):
        with pytest.raises(RequestBuildError):
            build_request("GET", url, {})


class TestParseHeaderLine:

    def test_value_with_colons(self):
        assert parse_header_line("Date: Fri, 24 May 2013 00:00:00 GMT") == \
            ("Date", "Fri, 24 May 2013 00:00:00 GMT")

    def test_missing_colon(self):
        with pytest.raises(RequestBuildError):
            parse_header_line("no colon here")


def test_from_prepared_request():
    prepared = requests.Request("GET", vectors.GET_OBJECT_URL, headers=vectors.GET_OBJECT_HEADERS).prepare()
    request = from_prepared_request(prepared)
    assert request.path == "/test.txt"
    assert request.headers["range"] == "bytes=0-9"
    assert request.headers["host"] == "examplebucket.s3.amazonaws.com"


class TestLoadRequestFile:

    def test_mapping_headers(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text(
            "method: PUT\n"
            "url: https://examplebucket.s3.amazonaws.com/key\n"
            "headers:\n"
            "  X-Amz-Date: 20130524T000000Z\n"
            "  Content-Length: 5\n"
        )
        request = load_request_file(str(path))
        assert request.method == "PUT"
        assert dict(request.headers) == {"x-amz-date": "20130524T000000Z", "content-length": "5"}

    def test_list_headers(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text("url: https://h/k\nheaders:\n  - 'Range: bytes=0-1'\n")
        request = load_request_file(str(path))
        assert request.method == "GET"
        assert request.headers["range"] == "bytes=0-1"

    def test_list_of_one_key_mappings(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text("url: https://h/k\nheaders:\n  - Range: bytes=0-1\n  - X-Amz-Date: 20130524T000000Z\n")
        request = load_request_file(str(path))
        assert dict(request.headers) == {"range": "bytes=0-1", "x-amz-date": "20130524T000000Z"}

    @pytest.mark.parametrize("headers", ["  - [a, b, c]\n", "  - {Range: a, Accept: b}\n", "  - 5\n"])
    def test_bad_header_entry(self, tmp_path, headers):
        path = tmp_path / "request.yaml"
        path.write_text("url: https://h/k\nheaders:\n" + headers)
        with pytest.raises(RequestBuildError):
            load_request_file(str(path))

    def test_headers_not_a_list(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text("url: https://h/k\nheaders: 5\n")
        with pytest.raises(RequestBuildError):
            load_request_file(str(path))

    def test_url_not_a_string(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text("url: 12\n")
        with pytest.raises(RequestBuildError, match="url"):
            load_request_file(str(path))

    def test_missing_url(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text("method: GET\n")
        with pytest.raises(RequestBuildError):
            load_request_file(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(RequestBuildError):
            load_request_file(str(tmp_path / "absent.yaml"))


class TestRequestHints:

    def test_from_authorization_and_path(self):
        request = build_request(
            "GET", "https://s3.amazonaws.com/examplebucket/test.txt",
            {"Authorization": vectors.GET_OBJECT_AUTHORIZATION},
        )
        assert request_hints(request) == {
            "endpoint_url": "https://s3.amazonaws.com",
            "access_key_id": vectors.ACCESS_KEY_ID,
            "region": "us-east-1",
            "bucket_name": "examplebucket",
        }

    def test_regional_host_overrides_scope(self):
        request = build_request(
            "GET", "https://bucket.s3.eu-west-1.amazonaws.com/key",
            {"Authorization": vectors.GET_OBJECT_AUTHORIZATION},
        )
        assert request_hints(request)["region"] == "eu-west-1"

    def test_dash_style_host(self):
        request = build_request("GET", "https://s3-ap-southeast-2.amazonaws.com/b/k", {})
        assert request_hints(request)["region"] == "ap-southeast-2"

    def test_nothing_to_read(self):
        hints = request_hints(RequestModel())
        assert hints == {"endpoint_url": "", "access_key_id": "", "region": "", "bucket_name": ""}
