"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from ._http import URI

REGIONS: frozenset[str] = frozenset(
    (
        "eu-west-1",
        "sa-east-1",
        "us-east-1",
        "ap-northeast-1",
        "us-west-2",
        "us-west-1",
        "ap-southeast-1",
        "ap-southeast-2",
    )
)
DEFAULT_REGION: str = "ap-northeast-1"

SERVICE: str = "ec2"
BASE_HOST: str = "amazonaws.com"


def is_valid_region(region: str) -> bool:
    return region in REGIONS


def resolve_host(
    *,
    region: str,
    service: str = SERVICE,
    base_host: str = BASE_HOST,
) -> str:
    """Hostname for a regional service endpoint.

    Host format: ``<region>.<service>.<base_host>``, e.g.
    ``eu-west-1.ec2.amazonaws.com``.
    """
    return f"{region}.{service}.{base_host}"


def resolve_endpoint(
    *,
    region: str,
    use_tls: bool,
    service: str = SERVICE,
    base_host: str = BASE_HOST,
) -> URI:
    return URI(
        scheme="https" if use_tls else "http",
        host=resolve_host(region=region, service=service, base_host=base_host),
    )
