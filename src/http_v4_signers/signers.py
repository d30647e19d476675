# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import hmac
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from hashlib import sha256

from ._endpoint import EndpointParts, parse_endpoint
from ._http import Field, Fields, SigningRequest
from ._provider import MAX_PROVIDER_LENGTH, ProviderContext, normalize_provider
from .exceptions import (
    ClockUnavailableError,
    MissingSigningMaterialError,
    SecretTooLongError,
)
from .interfaces.identity import CredentialsIdentity, IdentityResolver

logger = logging.getLogger(__name__)

SIGV4_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"
DEFAULT_METHOD: str = "POST"
EMPTY_SHA256_HASH = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

SECRET_KEY_MAX_LENGTH: int = 40
# "<PREFIX>4" followed by the secret.
SIGNING_KEY_LENGTH: int = MAX_PROVIDER_LENGTH + 1 + SECRET_KEY_MAX_LENGTH

_CONTENT_TYPE_PREFIX = "content-type:"


@dataclass(frozen=True, kw_only=True)
class SigningContext:
    """Everything derived from a request before any key material is touched."""

    provider: ProviderContext
    endpoint: EndpointParts
    method: str
    content_type: str | None
    timestamp: str
    """ISO-8601 basic format, for example ``20200101T000000Z``."""

    @property
    def date(self) -> str:
        return self.timestamp[0:8]


@dataclass(frozen=True, kw_only=True)
class SigningResult:
    """The fields a caller must attach to the outbound request.

    Both fields are ``None`` when the request already carried an ``Authorization``
    header and signing was skipped.
    """

    date_field: Field | None = None
    authorization_field: Field | None = None

    @property
    def already_signed(self) -> bool:
        return self.authorization_field is None

    def apply_to(self, fields: Fields) -> None:
        """Append the emitted fields to ``fields`` without replacing any entry."""
        fields.extend(self)

    def __iter__(self) -> Iterator[Field]:
        if self.date_field is not None:
            yield self.date_field
        if self.authorization_field is not None:
            yield self.authorization_field


class HTTPV4Signer:
    """Request signer applying the provider-prefixed Version 4 algorithm."""

    def sign(
        self,
        *,
        request: SigningRequest,
        identity: CredentialsIdentity,
    ) -> SigningResult:
        """Generate the date and Authorization fields for a request.

        The request is never modified. If it already has an ``Authorization``
        header an empty :py:class:`SigningResult` is returned and the identity is
        not read.

        :param request: The fully assembled request about to be dispatched.
        :param identity: Credentials used for the ``Credential`` component and to
            seed the signing key.
        """
        if self.is_signed(request):
            logger.debug("Authorization field already present, skipping signing.")
            return SigningResult()

        self._validate_identity(identity=identity)
        context = self.signing_context(request=request)

        # Construct core signing components
        canonical_request = self.canonical_request(context=context, request=request)
        string_to_sign = self.string_to_sign(
            canonical_request=canonical_request, context=context
        )
        signature = self._signature(
            string_to_sign=string_to_sign,
            secret_key=identity.secret_key,
            context=context,
        )

        credential_scope = self.credential_scope(context=context)
        credential = f"{identity.access_key_id}/{credential_scope}"
        authorization = self.generate_authorization_field(
            algorithm=context.provider.algorithm,
            credential=credential,
            signed_headers=list(self._canonical_fields(context=context)),
            signature=signature,
        )
        return SigningResult(
            date_field=Field(
                name=context.provider.date_field_name, values=[context.timestamp]
            ),
            authorization_field=authorization,
        )

    def is_signed(self, request: SigningRequest) -> bool:
        return "Authorization" in request.fields

    def signing_context(self, *, request: SigningRequest) -> SigningContext:
        """Normalize the provider, parse the destination and capture the timestamp.

        The timestamp is read once here and reused for every component that needs
        it.
        """
        provider = normalize_provider(request.provider)
        endpoint = parse_endpoint(request.destination)
        content_type = self._resolve_content_type(fields=request.fields)
        if content_type is None and endpoint.query is None:
            raise MissingSigningMaterialError(
                "A Content-Type header or a query string is required to sign "
                f"a request to {request.destination!r}."
            )
        return SigningContext(
            provider=provider,
            endpoint=endpoint,
            method=request.method or DEFAULT_METHOD,
            content_type=content_type,
            timestamp=self._format_timestamp(request.timestamp),
        )

    def canonical_request(
        self, *, context: SigningContext, request: SigningRequest
    ) -> str:
        """The canonical request is the fixed layout of everything covered by the
        signature. It is useful for comparing against a verifier when chasing
        signature mismatches.

        The layout is:
            <HTTPMethod>\n
            <URIPath>\n
            <QueryString>\n
            <CanonicalHeaders>\n
            <SignedHeaders>\n
            <HashedPayload>

        The query string is passed through exactly as it appeared in the
        destination.

        :param context: SigningContext produced by :py:meth:`signing_context`.
        :param request: The request being signed, used for its body.
        """
        canonical_fields = self._canonical_fields(context=context)
        canonical_headers = "".join(
            f"{name}:{value}\n" for name, value in canonical_fields.items()
        )
        canonical_request = (
            f"{context.method}\n"
            f"{context.endpoint.path or '/'}\n"
            f"{context.endpoint.query or ''}\n"
            f"{canonical_headers}\n"
            f"{';'.join(canonical_fields)}\n"
            f"{self._payload_hash(body=request.body)}"
        )
        logger.debug("Canonical request:\n%s", canonical_request)
        return canonical_request

    def string_to_sign(self, *, canonical_request: str, context: SigningContext) -> str:
        """Concatenate the algorithm, timestamp, credential scope and a hash of the
        canonical request.

        The layout is:
            Algorithm \n
            RequestDateTime \n
            CredentialScope \n
            HashedCanonicalRequest
        """
        string_to_sign = (
            f"{context.provider.algorithm}\n"
            f"{context.timestamp}\n"
            f"{self.credential_scope(context=context)}\n"
            f"{sha256(canonical_request.encode()).hexdigest()}"
        )
        logger.debug("String to sign:\n%s", string_to_sign)
        return string_to_sign

    def credential_scope(self, *, context: SigningContext) -> str:
        # Scope format: <YYYYMMDD>/<region>/<service>/<prefix>4_request
        return (
            f"{context.date}/{context.endpoint.region}/"
            f"{context.endpoint.service}/{context.provider.request_type}"
        )

    def generate_authorization_field(
        self,
        *,
        algorithm: str,
        credential: str,
        signed_headers: list[str],
        signature: str,
    ) -> Field:
        """Generate the `Authorization` field.

        :param algorithm: Algorithm identifier, for example ``OSC4-HMAC-SHA256``.
        :param credential:
            Access key and credential scope. Defined as:
                <access_key>/<date>/<region>/<service>/<request_type>
        :param signed_headers:
            A list of the field names used in signing.
        :param signature:
            Hex signature of the string to sign.
        """
        signed_headers_str = ";".join(signed_headers)
        auth_str = (
            f"{algorithm} Credential={credential}, "
            f"SignedHeaders={signed_headers_str}, Signature={signature}"
        )
        return Field(name="Authorization", values=[auth_str])

    def _signature(
        self,
        *,
        string_to_sign: str,
        secret_key: str,
        context: SigningContext,
    ) -> str:
        """Sign the string to sign.

        A signing key scoped to the date, region, service and request type is
        derived from the secret, then used to sign the string to sign. Each
        intermediate key is cleared as soon as the next one exists.
        """

        # Components of Signing Key Calculation
        #
        # DateKey              = HMAC-SHA256("<PREFIX>4"+"<Secret>", "<YYYYMMDD>")
        # DateRegionKey        = HMAC-SHA256(<DateKey>, "<region>")
        # DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<service>")
        # SigningKey = HMAC-SHA256(<DateRegionServiceKey>, "<prefix>4_request")
        key = self._signing_key_seed(secret_key=secret_key, context=context)
        try:
            for value in (
                context.date,
                context.endpoint.region,
                context.endpoint.service,
                context.provider.request_type,
            ):
                next_key = self._hash(key=key, value=value)
                _clear(key)
                key = next_key
            signature = self._hash(key=key, value=string_to_sign)
            return signature.hex()
        finally:
            _clear(key)

    def _signing_key_seed(
        self, *, secret_key: str, context: SigningContext
    ) -> bytearray:
        secret = secret_key.encode()
        if len(secret) > SECRET_KEY_MAX_LENGTH:
            raise SecretTooLongError(
                f"Secret key is {len(secret)} bytes long; at most "
                f"{SECRET_KEY_MAX_LENGTH} are supported."
            )
        material = context.provider.secret_prefix.encode() + secret
        # NUL padding to the fixed length leaves the HMAC result unchanged.
        seed = bytearray(SIGNING_KEY_LENGTH)
        seed[: len(material)] = material
        return seed

    def _hash(self, key: bytearray, value: str) -> bytearray:
        digest = hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()
        return bytearray(digest)

    def _validate_identity(self, *, identity: CredentialsIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, CredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"CredentialsIdentity but received {type(identity)}."
            )
        elif identity.is_expired:
            raise ValueError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )

    def _format_timestamp(self, timestamp: datetime | None) -> str:
        if timestamp is None:
            timestamp = datetime.now(UTC)
        elif timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        try:
            formatted = timestamp.astimezone(UTC).strftime(SIGV4_TIMESTAMP_FORMAT)
        except (OverflowError, ValueError) as e:
            raise ClockUnavailableError(
                f"Unable to format signing timestamp {timestamp!r}."
            ) from e
        if len(formatted) != 16:
            raise ClockUnavailableError(
                f"Signing timestamp {timestamp!r} is outside the supported range."
            )
        return formatted

    def _resolve_content_type(self, *, fields: Fields) -> str | None:
        content_type = fields.get("Content-Type")
        if content_type is None:
            return None
        value = content_type.as_string()
        if value[: len(_CONTENT_TYPE_PREFIX)].lower() == _CONTENT_TYPE_PREFIX:
            value = value[len(_CONTENT_TYPE_PREFIX) :]
        return value.lstrip(" \t")

    def _canonical_fields(self, *, context: SigningContext) -> dict[str, str]:
        # Fixed order: content-type (optional), host, x-<provider>-date.
        canonical_fields: dict[str, str] = {}
        if context.content_type is not None:
            canonical_fields["content-type"] = context.content_type
        canonical_fields["host"] = context.endpoint.host
        canonical_fields[context.provider.canonical_date_field_name] = (
            context.timestamp
        )
        return canonical_fields

    def _payload_hash(self, *, body: bytes) -> str:
        if not body:
            return EMPTY_SHA256_HASH
        return sha256(body).hexdigest()


class AsyncHTTPV4Signer:
    """Request signer that resolves credentials only when a signature is needed."""

    def __init__(self, signer: HTTPV4Signer | None = None) -> None:
        self._signer = signer if signer is not None else HTTPV4Signer()

    async def sign(
        self,
        *,
        request: SigningRequest,
        identity_resolver: IdentityResolver,
    ) -> SigningResult:
        """Resolve an identity and generate the date and Authorization fields.

        :param request: The fully assembled request about to be dispatched.
        :param identity_resolver: Source of credentials. It is not consulted when
            the request is already signed.
        """
        if self._signer.is_signed(request):
            logger.debug("Authorization field already present, skipping signing.")
            return SigningResult()

        identity = await identity_resolver.get_identity()
        return self._signer.sign(request=request, identity=identity)


def _clear(buffer: bytearray) -> None:
    buffer[:] = bytes(len(buffer))
