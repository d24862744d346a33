"""Ways to obtain a RequestModel: URL + headers, requests objects, YAML files."""
import re
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

import requests
import yaml

from .exceptions import RequestBuildError
from .models import RequestModel

_S3_REGION_HOST_RE = re.compile(r's3[.-]([^.]+)\.amazonaws\.com')
_CREDENTIAL_SCOPE_RE = re.compile(r'Credential=([^/]+)/[^/]+/([^/]+)/s3/aws4_request')
_ACCESS_KEY_RE = re.compile(r'Credential=([^/]+)')


def parse_header_line(line: str) -> Tuple[str, str]:
    """Split a ``Name: value`` line as given to curl's -H option."""
    name, sep, value = line.partition(':')
    if not sep or not name.strip():
        raise RequestBuildError(f"Invalid header line: {line!r}")
    return name.strip(), value.strip()


def build_request(method: str, url: str, headers=None, authorization: Optional[str] = None) -> RequestModel:
    """Build a RequestModel from a method, an absolute URL and headers.

    :param headers: mapping, list of (name, value) pairs or of ``Name: value`` lines.
    :raise RequestBuildError: if the URL cannot be parsed.
    """
    try:
        parsed = urlsplit(url or '')
        parsed.port
    except ValueError as e:
        raise RequestBuildError(f"Invalid URL {url!r}: {e}")
    if not parsed.scheme or not parsed.netloc:
        raise RequestBuildError(f"Invalid URL {url!r}: scheme and host are required")

    pairs = _header_pairs(headers)
    return RequestModel(
        method=method,
        path=parsed.path or '/',
        query_string=parsed.query,
        headers=pairs,
        raw_authorization_header=authorization or '',
        url=url,
    )


def from_prepared_request(prepared: requests.PreparedRequest) -> RequestModel:
    """Describe a prepared (not sent) requests request."""
    return build_request(prepared.method, prepared.url, list(prepared.headers.items()))


def load_request_file(path: str) -> RequestModel:
    """Load a request description from a YAML file with method, url and headers."""
    try:
        with open(path, 'r') as f:
            doc = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise RequestBuildError(f"Cannot read request file {path}: {e}")
    if not isinstance(doc, dict) or 'url' not in doc:
        raise RequestBuildError(f"Request file {path} must define a 'url'")
    if not isinstance(doc['url'], str):
        raise RequestBuildError(f"Request file {path}: 'url' must be a string, got {doc['url']!r}")
    return build_request(doc.get('method', 'GET'), doc['url'], doc.get('headers'),
                         authorization=doc.get('authorization'))


def request_hints(request: RequestModel) -> dict:
    """Values that can be read off a request: endpoint, key id, region, bucket."""
    hints = {'endpoint_url': '', 'access_key_id': '', 'region': '', 'bucket_name': ''}
    auth = request.raw_authorization_header

    key_match = _ACCESS_KEY_RE.search(auth)
    if key_match:
        hints['access_key_id'] = key_match.group(1)
    scope_match = _CREDENTIAL_SCOPE_RE.search(auth)
    if scope_match:
        hints['region'] = scope_match.group(2)

    if request.url:
        parsed = urlsplit(request.url)
        hints['endpoint_url'] = f"{parsed.scheme}://{parsed.netloc.rpartition('@')[2]}"
        host_match = _S3_REGION_HOST_RE.search(parsed.netloc)
        if host_match:
            hints['region'] = host_match.group(1)

    bucket_match = re.match(r'^/([^/]+)', request.path)
    if bucket_match:
        hints['bucket_name'] = bucket_match.group(1)
    return hints


def _header_pairs(headers) -> List[Tuple[str, str]]:
    if headers is None:
        return []
    if hasattr(headers, 'items'):
        return [(str(k), '' if v is None else str(v)) for k, v in headers.items()]
    if not isinstance(headers, (list, tuple)):
        raise RequestBuildError(f"Invalid headers: {headers!r}")
    pairs = []
    for item in headers:
        if isinstance(item, str):
            pairs.append(parse_header_line(item))
        elif isinstance(item, dict):
            # YAML list entry written as "- Name: value"
            if len(item) != 1:
                raise RequestBuildError(f"Invalid header entry: {item!r}")
            (name, value), = item.items()
            pairs.append((str(name), '' if value is None else str(value)))
        else:
            try:
                name, value = item
            except (TypeError, ValueError):
                raise RequestBuildError(f"Invalid header entry: {item!r}")
            pairs.append((str(name), '' if value is None else str(value)))
    return pairs
