#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
import os

from ._identity import CredentialIdentity
from .exceptions import IdentityError
from .interfaces.identity import CredentialsIdentity, IdentityResolver

logger = logging.getLogger(__name__)


class StaticCredentialsResolver(IdentityResolver):
    """Resolve a fixed set of credentials."""

    def __init__(self, identity: CredentialsIdentity) -> None:
        self._identity = identity

    async def get_identity(self) -> CredentialsIdentity:
        return self._identity


class EnvironmentCredentialsResolver(IdentityResolver):
    """Resolves signing credentials from system environment variables."""

    def __init__(self):
        self._credentials: CredentialIdentity | None = None

    async def get_identity(self) -> CredentialIdentity:
        if self._credentials is not None:
            return self._credentials

        logger.debug("Attempting to resolve credentials from the environment.")
        access_key_id = os.getenv("HTTP_V4_ACCESS_KEY_ID")
        secret_key = os.getenv("HTTP_V4_SECRET_KEY")

        if access_key_id is None or secret_key is None:
            raise IdentityError(
                "HTTP_V4_ACCESS_KEY_ID and HTTP_V4_SECRET_KEY are required"
            )

        self._credentials = CredentialIdentity(
            access_key_id=access_key_id,
            secret_key=secret_key,
        )

        return self._credentials
