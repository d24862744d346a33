"""Header selection and canonical request assembly for S3 SigV4."""
import hashlib
import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple
from urllib.parse import urlsplit

from .models import DegradedFieldWarning, RequestModel

logger = logging.getLogger(__name__)

# SHA-256 of the empty string, the payload hash of every GET request
EMPTY_PAYLOAD_SHA256 = hashlib.sha256(b'').hexdigest()

AMZ_HEADER_PREFIX = 'x-amz-'
CONTENT_SHA256_HEADER = 'x-amz-content-sha256'

_DEFAULT_PORTS = {'http': 80, 'https': 443}
_SIGNED_HEADERS_RE = re.compile(r'SignedHeaders=([^,]+)')


def derive_host(url: Optional[str]) -> str:
    """Return the host[:port] authority of a URL, '' when unavailable.

    The port is dropped when it is the default one for the scheme.
    """
    if not url:
        return ''
    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
        port = parsed.port
    except ValueError:
        return ''
    if not hostname:
        return ''
    if ':' in hostname:
        hostname = f"[{hostname}]"
    if port is not None and port != _DEFAULT_PORTS.get(parsed.scheme.lower()):
        return f"{hostname}:{port}"
    return hostname


def with_host(request: RequestModel) -> Dict[str, str]:
    """Return a copy of the request headers with a host header filled in."""
    headers = dict(request.headers)
    if not headers.get('host'):
        host = derive_host(request.url)
        if host:
            headers['host'] = host
    return headers


def original_signed_headers(authorization: str) -> List[str]:
    """Header names listed in the SignedHeaders component of an Authorization value."""
    match = _SIGNED_HEADERS_RE.search(authorization or '')
    if not match:
        return []
    return [name.strip().lower() for name in match.group(1).split(';') if name.strip()]


def select_headers(headers: Mapping[str, str], authorization: str = '') -> Set[str]:
    """Decide which headers participate in signing."""
    selected = set()

    # 1) host
    if headers.get('host'):
        selected.add('host')

    # 2) Content-MD5
    if headers.get('content-md5'):
        selected.add('content-md5')

    # 3) every x-amz-* header, whatever its value
    for name in headers:
        if name.startswith(AMZ_HEADER_PREFIX):
            selected.add(name)

    # 4) headers the original signer chose, when we still have them
    for name in original_signed_headers(authorization):
        if name != 'authorization' and headers.get(name):
            selected.add(name)

    # 5) Range
    if headers.get('range'):
        selected.add('range')

    return selected


def canonical_header_value(value: str) -> str:
    """Trim a header value and collapse inner whitespace runs to one space."""
    return ' '.join((value or '').split())


def canonical_headers(headers: Mapping[str, str], names: Iterable[str]) -> Tuple[str, str]:
    """Return (canonical header block, signed header list) for ``names``."""
    ordered = sorted(names)
    block = '\n'.join(f"{name}:{canonical_header_value(headers.get(name, ''))}" for name in ordered)
    return block, ';'.join(ordered)


def hashed_payload(method: str, headers: Mapping[str, str], warnings: Optional[list] = None) -> str:
    """Payload hash line: the empty-body hash for GET, the declared hash otherwise."""
    if method == 'GET':
        return EMPTY_PAYLOAD_SHA256
    declared = headers.get(CONTENT_SHA256_HEADER)
    if not declared:
        degrade(warnings, CONTENT_SHA256_HEADER,
                f"missing on {method} request, payload hash left empty")
        return ''
    return declared


def build_canonical_request(method: str, path: str, query_string: str,
                            header_block: str, signed_headers: str, payload_hash: str) -> str:
    return '\n'.join([
        method,
        path,
        query_string,
        header_block + '\n',
        signed_headers,
        payload_hash,
    ])


def degrade(warnings: Optional[list], field: str, message: str) -> None:
    logger.warning("Degraded field %s: %s", field, message)
    if warnings is not None:
        warnings.append(DegradedFieldWarning(field, message))
