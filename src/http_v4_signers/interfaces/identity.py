# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Identity(Protocol):
    """An entity available to the signer representing who the caller is."""

    expiration: datetime | None = None
    """The expiration time of the identity.

    If time zone is provided, it is updated to UTC. The value must always be in UTC.
    """

    @property
    def is_expired(self) -> bool:
        """Whether the identity is expired."""
        if self.expiration is None:
            return False
        return datetime.now(tz=UTC) >= self.expiration


@runtime_checkable
class CredentialsIdentity(Identity, Protocol):
    """Provider credentials identity."""

    access_key_id: str
    """A public identifier sent in the ``Credential`` component of the
    Authorization header."""

    secret_key: str
    """The secret used to seed the signing key chain. It never leaves the
    signer."""


@runtime_checkable
class IdentityResolver(Protocol):
    """Used to load a :py:class:`CredentialsIdentity` on demand."""

    async def get_identity(self) -> CredentialsIdentity:
        """Load the credentials used for signing."""
        ...
