"""
Share codec errors

DecodingError covers every reason a shared link cannot be opened;
ValidationError narrows it to a payload that decoded but is missing
required fields.
"""


class ShareCodecError(Exception):
    """Base class for share token failures."""


class EncodingError(ShareCodecError):
    """Assessment data could not be serialized into a token."""


class DecodingError(ShareCodecError):
    """Token is not valid base64, UTF-8 or JSON."""


class ValidationError(DecodingError):
    """Token decoded but the payload lacks answers or organization data."""
