"""AWS Signature Version 4 computation and verification for S3 requests."""

from .exceptions import ConfigurationError, RequestBuildError, S3SignerError, StructuralInputError
from .models import Credentials, DegradedFieldWarning, RequestModel, SignatureResult, Verification
from .request import build_request, from_prepared_request, load_request_file, request_hints
from .signing import compute
from .verify import verify

__all__ = [
    "compute",
    "verify",
    "build_request",
    "from_prepared_request",
    "load_request_file",
    "request_hints",
    "Credentials",
    "DegradedFieldWarning",
    "RequestModel",
    "SignatureResult",
    "Verification",
    "S3SignerError",
    "StructuralInputError",
    "RequestBuildError",
    "ConfigurationError",
]
