# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass, field
from datetime import datetime

from .interfaces.identity import CredentialsIdentity


@dataclass(kw_only=True)
class CredentialIdentity(CredentialsIdentity):
    access_key_id: str
    secret_key: str = field(repr=False)
    expiration: datetime | None = None
