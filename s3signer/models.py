"""Data structures consumed and produced by the signature engine."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

DEFAULT_METHOD = 'GET'
DEFAULT_PATH = '/'
DEFAULT_REGION = 'us-east-1'


def normalize_headers(headers) -> Dict[str, str]:
    """Lowercase header names; the last occurrence of a name wins.

    Accepts a mapping or an iterable of (name, value) pairs.
    """
    if headers is None:
        return {}
    items = headers.items() if hasattr(headers, 'items') else headers
    normalized = {}
    for name, value in items:
        normalized[name.lower()] = '' if value is None else str(value)
    return normalized


@dataclass(frozen=True)
class RequestModel:
    """Normalized HTTP request description the engine operates on."""
    method: str = DEFAULT_METHOD
    path: str = DEFAULT_PATH
    query_string: str = ''
    headers: Mapping[str, str] = field(default_factory=dict)
    raw_authorization_header: str = ''
    url: Optional[str] = None

    def __post_init__(self):
        headers = normalize_headers(self.headers)
        object.__setattr__(self, 'method', (self.method or DEFAULT_METHOD).upper())
        object.__setattr__(self, 'path', self.path or DEFAULT_PATH)
        query = self.query_string or ''
        object.__setattr__(self, 'query_string', query[1:] if query.startswith('?') else query)
        object.__setattr__(self, 'headers', MappingProxyType(headers))
        if not self.raw_authorization_header:
            object.__setattr__(self, 'raw_authorization_header', headers.get('authorization', ''))


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    secret_access_key: str
    region: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'region', self.region or DEFAULT_REGION)

    def __repr__(self):
        return f"Credentials(access_key_id={self.access_key_id!r}, region={self.region!r})"


@dataclass(frozen=True)
class DegradedFieldWarning:
    """A field the engine replaced with an empty substitute.

    Not an exception: the computation still completes and the
    substitution shows up in the resulting strings.
    """
    field: str
    message: str

    def __str__(self):
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class SignatureResult:
    canonical_request: str
    string_to_sign: str
    signed_headers_list: str
    date_stamp: str
    date_key: str
    date_region_key: str
    date_region_service_key: str
    signing_key: str
    signature: str
    original_signature: str
    authorization_header: str
    region: str = DEFAULT_REGION
    access_key_id: str = ''
    credential_scope: str = ''
    canonical_headers: str = ''
    headers: Tuple[Tuple[str, str], ...] = ()
    warnings: Tuple[DegradedFieldWarning, ...] = ()

    def to_dict(self) -> dict:
        return {
            'canonical_request': self.canonical_request,
            'string_to_sign': self.string_to_sign,
            'signed_headers': self.signed_headers_list,
            'date_stamp': self.date_stamp,
            'region': self.region,
            'access_key_id': self.access_key_id,
            'credential_scope': self.credential_scope,
            'date_key': self.date_key,
            'date_region_key': self.date_region_key,
            'date_region_service_key': self.date_region_service_key,
            'signing_key': self.signing_key,
            'signature': self.signature,
            'original_signature': self.original_signature,
            'authorization_header': self.authorization_header,
            'warnings': [str(w) for w in self.warnings],
        }


@dataclass(frozen=True)
class Verification:
    """Outcome of comparing a computed signature with the original one."""
    signature: str
    original_signature: str
    signature_matches: bool
    authorization_header: str
    original_authorization: str
    authorization_matches: bool
    original_access_key_id: str = ''
    original_scope: str = ''
    scope_matches: bool = False
    original_signed_headers: Tuple[str, ...] = ()
    missing_signed_headers: Tuple[str, ...] = ()
    extra_signed_headers: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            'signature_matches': self.signature_matches,
            'signature': self.signature,
            'original_signature': self.original_signature,
            'authorization_matches': self.authorization_matches,
            'authorization_header': self.authorization_header,
            'original_authorization': self.original_authorization,
            'original_access_key_id': self.original_access_key_id,
            'original_scope': self.original_scope,
            'scope_matches': self.scope_matches,
            'original_signed_headers': ';'.join(self.original_signed_headers),
            'missing_signed_headers': list(self.missing_signed_headers),
            'extra_signed_headers': list(self.extra_signed_headers),
        }
