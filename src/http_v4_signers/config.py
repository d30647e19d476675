# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, ClassVar, Literal

from ._http import Fields, SigningRequest
from ._identity import CredentialIdentity
from .exceptions import IdentityError, InvalidProviderError

SOURCE_CONSTRUCTOR = "constructor"
SOURCE_ENVIRONMENT = "environment"
SOURCE_DEFAULT = "default"
SOURCE_IN_CODE_UPDATE = "in_code_update"

SourceType = Literal[
    "constructor",
    "environment",
    "default",
    "in_code_update",
]


class ConfigValue:
    """Configuration value with metadata about its source"""

    def __init__(self, value: Any, source: SourceType):
        self.value = value
        self.source = source


class SignerConfig:
    """
    Signer configuration with precedence-based resolution.

    Values are taken from the constructor first, then from the environment, then
    from the defaults in ``CONFIG_FIELDS``. The sentinel value (...) lets the
    constructor distinguish "not provided" from "explicitly set to None".

    HOW TO ADD A NEW CONFIG FIELD:

    1. Add the parameter to __init__ with a sentinel default.
    2. Add an entry to CONFIG_FIELDS with "default", "type" and an optional
       "env_var".
    3. Add a property getter and setter storing a ConfigValue with
       SOURCE_IN_CODE_UPDATE.
    """

    CONFIG_FIELDS: ClassVar[dict[str, dict[str, Any]]] = {
        "provider": {
            "env_var": "HTTP_V4_PROVIDER",
            "default": None,
            "type": str | None,
        },
        "access_key_id": {
            "env_var": "HTTP_V4_ACCESS_KEY_ID",
            "default": None,
            "type": str | None,
        },
        "secret_key": {
            "env_var": "HTTP_V4_SECRET_KEY",
            "default": None,
            "type": str | None,
        },
        "method": {
            "env_var": "HTTP_V4_METHOD",
            "default": None,
            "type": str | None,
        },
    }

    def __init__(
        self,
        *,
        provider: str | None = ...,  # type: ignore[assignment]
        access_key_id: str | None = ...,  # type: ignore[assignment]
        secret_key: str | None = ...,  # type: ignore[assignment]
        method: str | None = ...,  # type: ignore[assignment]
    ):
        self._constructor_values = {
            k: v for k, v in locals().items() if k != "self" and v is not ...
        }
        self._resolved = False

    def resolve(
        self, *, environment_loader: Callable[[], Mapping[str, str]] | None = None
    ) -> None:
        """Resolve configuration from all sources

        Args:
            environment_loader: Custom environment loader function
        """
        if self._resolved:
            raise RuntimeError(
                "Config has already been resolved. Multiple calls to resolve() are "
                "not allowed."
            )

        env_values = (environment_loader or self._load_environment_values)()
        for field_name, field_info in self.CONFIG_FIELDS.items():
            resolved_value = self._resolve_field(
                field_name, env_values, field_info["default"]
            )
            setattr(self, f"_{field_name}", resolved_value)

        self._resolved = True

    def _load_environment_values(self) -> Mapping[str, str]:
        return os.environ

    def _resolve_field(
        self, field_name: str, env_values: Mapping[str, str], default_value: Any
    ) -> ConfigValue:
        field_config = self.CONFIG_FIELDS[field_name]
        env_var = field_config.get("env_var")

        if field_name in self._constructor_values:
            value = self._constructor_values[field_name]
            source = SOURCE_CONSTRUCTOR
        elif env_var and env_var in env_values:
            value = env_values[env_var]
            source = SOURCE_ENVIRONMENT
        else:
            value = default_value
            source = SOURCE_DEFAULT

        expected_type = field_config["type"]
        if not isinstance(value, expected_type):
            raise TypeError(
                f"{field_name} must be {expected_type}, got {type(value).__name__}"
            )
        return ConfigValue(value, source)

    def get_config_value_object(self, field_name: str) -> ConfigValue:
        """Get the raw ConfigValue object for a field"""
        if not self._resolved:
            raise RuntimeError("Config must be resolved before accessing values")
        return getattr(self, f"_{field_name}")

    def identity(self) -> CredentialIdentity:
        """Build a credential identity from the resolved key pair."""
        if self.access_key_id is None or self.secret_key is None:
            raise IdentityError(
                "access_key_id and secret_key are required to build an identity"
            )
        return CredentialIdentity(
            access_key_id=self.access_key_id, secret_key=self.secret_key
        )

    def request(
        self,
        url: str,
        *,
        fields: Fields | None = None,
        body: bytes = b"",
        timestamp: datetime | None = None,
    ) -> SigningRequest:
        """Build a :py:class:`SigningRequest` for ``url`` with the configured
        provider and method."""
        if self.provider is None:
            raise InvalidProviderError("No provider has been configured.")
        return SigningRequest.from_url(
            url,
            provider=self.provider,
            method=self.method,
            fields=fields if fields is not None else Fields(),
            body=body,
            timestamp=timestamp,
        )

    @property
    def provider(self) -> str | None:
        return self.get_config_value_object("provider").value

    @provider.setter
    def provider(self, value: str | None) -> None:
        self._provider = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def access_key_id(self) -> str | None:
        return self.get_config_value_object("access_key_id").value

    @access_key_id.setter
    def access_key_id(self, value: str | None) -> None:
        self._access_key_id = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def secret_key(self) -> str | None:
        return self.get_config_value_object("secret_key").value

    @secret_key.setter
    def secret_key(self, value: str | None) -> None:
        self._secret_key = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def method(self) -> str | None:
        return self.get_config_value_object("method").value

    @method.setter
    def method(self, value: str | None) -> None:
        self._method = ConfigValue(value, SOURCE_IN_CODE_UPDATE)
