# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""HTTP V4 Signers computes provider-prefixed Version 4 request signatures for use
with any HTTP tool. The signer only returns the header fields to attach; sending
the request is left to the caller."""

from __future__ import annotations

from ._http import Field, Fields, SigningRequest
from ._identity import CredentialIdentity
from .config import SignerConfig
from .credentials import EnvironmentCredentialsResolver, StaticCredentialsResolver
from .signers import (
    AsyncHTTPV4Signer,
    HTTPV4Signer,
    SigningContext,
    SigningResult,
)

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "AsyncHTTPV4Signer",
    "CredentialIdentity",
    "EnvironmentCredentialsResolver",
    "Field",
    "Fields",
    "HTTPV4Signer",
    "SignerConfig",
    "SigningContext",
    "SigningRequest",
    "SigningResult",
    "StaticCredentialsResolver",
)
