"""S3 SigV4 string-to-sign, key derivation and Authorization assembly."""
import hashlib
import hmac
import logging
import re
from typing import List, Sequence, Tuple

from .canonical import (
    build_canonical_request,
    canonical_headers,
    degrade,
    hashed_payload,
    select_headers,
    with_host,
)
from .exceptions import StructuralInputError
from .models import Credentials, RequestModel, SignatureResult

logger = logging.getLogger(__name__)

ALGORITHM = 'AWS4-HMAC-SHA256'
SCOPE_SERVICE = 's3'
SCOPE_TERMINATOR = 'aws4_request'
DATE_HEADER = 'x-amz-date'

_DATE_STAMP_RE = re.compile(r'^[0-9]{8}')
_SIGNATURE_RE = re.compile(r'Signature=([a-f0-9]+)')


def hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode('utf-8', 'surrogateescape'), hashlib.sha256).digest()


def sha256_hex(data: str) -> str:
    return hashlib.sha256(data.encode('utf-8', 'surrogateescape')).hexdigest()


def date_stamp_from(amz_date: str) -> str:
    """YYYYMMDD prefix of an x-amz-date value, '' when it is not one."""
    match = _DATE_STAMP_RE.match(amz_date or '')
    return match.group(0) if match else ''


def scope_components(date_stamp: str, region: str) -> List[str]:
    return [date_stamp, region, SCOPE_SERVICE, SCOPE_TERMINATOR]


def credential_scope(date_stamp: str, region: str) -> str:
    return '/'.join(scope_components(date_stamp, region))


def build_string_to_sign(amz_date: str, scope: str, canonical_request: str) -> str:
    return '\n'.join([
        ALGORITHM,
        amz_date,
        scope,
        sha256_hex(canonical_request),
    ])


def derive_signing_keys(secret_access_key: str, components: Sequence[str]) -> List[bytes]:
    """Run the HMAC chain over the scope components.

    Each stage is keyed with the raw digest of the previous one; the
    returned list holds every stage, the signing key last.
    """
    key = f"AWS4{secret_access_key}".encode('utf-8', 'surrogateescape')
    keys = []
    for component in components:
        key = hmac_sha256(key, component)
        keys.append(key)
    return keys


def sign(signing_key: bytes, string_to_sign: str) -> str:
    return hmac.new(signing_key, string_to_sign.encode('utf-8', 'surrogateescape'), hashlib.sha256).hexdigest()


def build_authorization_header(access_key_id: str, scope: str, signed_headers: str, signature: str) -> str:
    return (
        f"{ALGORITHM} "
        f"Credential={access_key_id}/{scope}, "
        f"SignedHeaders={signed_headers}, "
        f"Signature={signature}"
    )


def extract_signature(authorization: str) -> str:
    match = _SIGNATURE_RE.search(authorization or '')
    return match.group(1) if match else ''


def compute(request: RequestModel, credentials: Credentials) -> SignatureResult:
    """Compute the S3 SigV4 signature of ``request``.

    Missing or malformed fields never raise: they are replaced by empty
    strings and listed in ``SignatureResult.warnings``.

    :raise StructuralInputError: if request or credentials is None.
    """
    if request is None:
        raise StructuralInputError("request is required")
    if credentials is None:
        raise StructuralInputError("credentials are required")

    warnings = []
    region = credentials.region

    # 1) Header set
    headers = with_host(request)
    if not headers.get('host'):
        degrade(warnings, 'host', "no host header and no URL to derive it from")
    names = select_headers(headers, request.raw_authorization_header)
    header_block, signed_headers = canonical_headers(headers, names)

    # 2) Canonical request
    payload_hash = hashed_payload(request.method, headers, warnings)
    canonical_request = build_canonical_request(
        request.method, request.path, request.query_string,
        header_block, signed_headers, payload_hash
    )

    # 3) String to sign
    amz_date = headers.get(DATE_HEADER, '')
    if not amz_date:
        degrade(warnings, DATE_HEADER, "missing, date line and scope date left empty")
    date_stamp = date_stamp_from(amz_date)
    if amz_date and not date_stamp:
        degrade(warnings, DATE_HEADER, f"malformed value {amz_date!r}, scope date left empty")
    scope = credential_scope(date_stamp, region)
    string_to_sign = build_string_to_sign(amz_date, scope, canonical_request)

    # 4) Signing key and signature
    k_date, k_region, k_service, k_signing = derive_signing_keys(
        credentials.secret_access_key, scope_components(date_stamp, region)
    )
    signature = sign(k_signing, string_to_sign)
    logger.debug("Signed %s %s with scope %s", request.method, request.path, scope)

    # 5) Authorization header
    authorization = build_authorization_header(
        credentials.access_key_id, scope, signed_headers, signature
    )

    return SignatureResult(
        canonical_request=canonical_request,
        string_to_sign=string_to_sign,
        signed_headers_list=signed_headers,
        date_stamp=date_stamp,
        date_key=k_date.hex(),
        date_region_key=k_region.hex(),
        date_region_service_key=k_service.hex(),
        signing_key=k_signing.hex(),
        signature=signature,
        original_signature=extract_signature(request.raw_authorization_header),
        authorization_header=authorization,
        region=region,
        access_key_id=credentials.access_key_id,
        credential_scope=scope,
        canonical_headers=header_block,
        headers=_sorted_items(headers),
        warnings=tuple(warnings),
    )


def _sorted_items(headers) -> Tuple[Tuple[str, str], ...]:
    return tuple(sorted(headers.items()))
