"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from dataclasses import dataclass, field

from .exceptions import ConfigurationError


@dataclass(kw_only=True, frozen=True)
class AWSCredentialIdentity:
    access_key_id: str
    secret_access_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.access_key_id:
            raise ConfigurationError("AccessKey is required.")
        if not self.secret_access_key:
            raise ConfigurationError("SecretAccessKey is required.")
