"""Exceptions raised by the s3signer package."""


class S3SignerError(Exception):
    """Base exception class for s3signer errors."""


class StructuralInputError(S3SignerError):
    """Exception raised when the request or credentials object is missing."""


class RequestBuildError(S3SignerError):
    """Exception raised when a request description cannot be built."""


class ConfigurationError(S3SignerError):
    """Exception raised when there are configuration issues."""
