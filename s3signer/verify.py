"""Compare a computed signature with the one carried by the original request."""
import re
from typing import Optional

from .canonical import original_signed_headers
from .models import RequestModel, SignatureResult, Verification
from .signing import extract_signature

_CREDENTIAL_RE = re.compile(r'Credential=(?P<key_id>[^/,\s]+)/(?P<scope>[^,\s]+)')


def squash_whitespace(value: str) -> str:
    return ''.join((value or '').split())


def parse_credential(authorization: str) -> Optional[re.Match]:
    return _CREDENTIAL_RE.search(authorization or '')


def verify(request: RequestModel, result: SignatureResult) -> Verification:
    """Compare ``result`` with the Authorization header of ``request``.

    Signatures are compared as plain strings and Authorization headers
    with all whitespace removed. An original header that does not parse
    leaves the diagnostic fields empty.
    """
    original = request.raw_authorization_header or ''
    original_signature = extract_signature(original)

    key_id, scope = '', ''
    credential = parse_credential(original)
    if credential:
        key_id, scope = credential.group('key_id'), credential.group('scope')

    original_names = tuple(original_signed_headers(original))
    computed_names = [n for n in result.signed_headers_list.split(';') if n]
    missing = tuple(n for n in original_names if n not in computed_names)
    extra = tuple(n for n in computed_names if n not in original_names) if original_names else ()

    return Verification(
        signature=result.signature,
        original_signature=original_signature,
        signature_matches=bool(original_signature) and result.signature == original_signature,
        authorization_header=result.authorization_header,
        original_authorization=original,
        authorization_matches=bool(original) and (
            squash_whitespace(result.authorization_header) == squash_whitespace(original)
        ),
        original_access_key_id=key_id,
        original_scope=scope,
        scope_matches=bool(scope) and scope == result.credential_scope,
        original_signed_headers=original_names,
        missing_signed_headers=missing,
        extra_signed_headers=extra,
    )
