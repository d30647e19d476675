# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class SigningException(Exception):
    """Top-level exception to capture signing-related errors."""


class InvalidProviderError(SigningException, ValueError):
    """The configured provider could not be split into usable name variants."""


class ProviderTooLongError(InvalidProviderError):
    """A provider name or prefix exceeds the maximum supported length."""


class SecretTooLongError(SigningException, ValueError):
    """The secret key does not fit in the fixed-length signing key."""


class MalformedEndpointError(SigningException, ValueError):
    """The destination lacks the host, region, service or path structure needed
    to build a credential scope."""


class MissingSigningMaterialError(SigningException, ValueError):
    """Neither a Content-Type header nor a query string is present on the
    request."""


class ClockUnavailableError(SigningException):
    """The signing timestamp could not be formatted."""


class IdentityError(SigningException):
    """Credentials required for signing could not be resolved."""
