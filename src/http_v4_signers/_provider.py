# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import astuple, dataclass

from .exceptions import InvalidProviderError, ProviderTooLongError

MAX_PROVIDER_LENGTH: int = 3
PROVIDER_SEPARATOR: str = ":"


@dataclass(frozen=True, kw_only=True)
class ProviderContext:
    """Case variants of a provider identifier used throughout one signature.

    The short prefix seeds the secret key and names the request type in the
    credential scope. The full name appears in the algorithm and header names.
    For a bare provider (no ``PREFIX:``) both are the same token.
    """

    upper_short: str
    lower_short: str
    upper_full: str
    lower_full: str
    title_full: str

    @property
    def algorithm(self) -> str:
        # Uses the full name. The C libcurl signer puts the upper short prefix here,
        # so PREFIX:NAME providers sign differently from it; bare providers match.
        return f"{self.upper_full}4-HMAC-SHA256"

    @property
    def request_type(self) -> str:
        return f"{self.lower_short}4_request"

    @property
    def secret_prefix(self) -> str:
        return f"{self.upper_short}4"

    @property
    def date_field_name(self) -> str:
        return f"X-{self.title_full}-Date"

    @property
    def canonical_date_field_name(self) -> str:
        return f"x-{self.lower_full}-date"


def normalize_provider(
    provider: str, *, max_length: int = MAX_PROVIDER_LENGTH
) -> ProviderContext:
    """Split a ``NAME`` or ``PREFIX:NAME`` provider into its case variants.

    Every variant is bounded in encoded bytes, so case mappings that grow a string
    (``"ß".upper() == "SS"``) are caught here rather than while signing.

    :param provider: The configured provider token.
    :param max_length: Longest accepted prefix or name, in UTF-8 bytes.
    :raises ProviderTooLongError: When any case variant is longer than
        ``max_length``.
    :raises InvalidProviderError: When either part is empty.
    """
    short, sep, full = provider.partition(PROVIDER_SEPARATOR)
    if not sep:
        full = short

    if not short or not full:
        raise InvalidProviderError(
            f"Provider {provider!r} has an empty prefix or name."
        )

    context = ProviderContext(
        upper_short=short.upper(),
        lower_short=short.lower(),
        upper_full=full.upper(),
        lower_full=full.lower(),
        title_full=full[:1].upper() + full[1:].lower(),
    )
    for variant in astuple(context):
        size = len(variant.encode())
        if size > max_length:
            raise ProviderTooLongError(
                f"Provider component {variant!r} is {size} bytes long; "
                f"at most {max_length} are supported."
            )
    return context
