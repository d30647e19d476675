# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Recover the signing scope from a destination string.

This is not a general URL grammar. Destinations are expected to follow
``service.region.<domain>/path?query`` with the scheme already removed, for
example ``api.eu-west-2.example.com/v1/items?limit=10``.
"""

from dataclasses import dataclass

from .exceptions import MalformedEndpointError


@dataclass(frozen=True, kw_only=True)
class EndpointParts:
    host: str
    """The full authority, sent as the canonical ``host`` header."""

    region: str
    """Second dot-separated label of the authority."""

    service: str
    """First dot-separated label of the authority."""

    path: str
    """Path component, always starting with ``/``."""

    query: str | None = None
    """Raw query string without the ``?``. ``None`` when absent or empty."""


def parse_endpoint(destination: str) -> EndpointParts:
    """Split a scheme-less destination into the parts needed for signing.

    :param destination: Authority, path and optional query.
    :raises MalformedEndpointError: When there is no path delimiter or the
        authority lacks a service or region label.
    """
    host, slash, remainder = destination.partition("/")
    if not slash:
        raise MalformedEndpointError(
            f"Destination {destination!r} has no path delimiter."
        )

    labels = host.split(".")
    # The region label must be terminated by another dot.
    if len(labels) < 3 or not labels[0] or not labels[1]:
        raise MalformedEndpointError(
            f"Host {host!r} does not match the service.region.<domain> layout."
        )

    path, _, query = remainder.partition("?")
    return EndpointParts(
        host=host,
        region=labels[1],
        service=labels[0],
        path=f"/{path}",
        query=query or None,
    )
