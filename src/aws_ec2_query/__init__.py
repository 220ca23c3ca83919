"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

AWS EC2 Query provides a minimal client for the EC2 query API. Requests are
signed with Signature Version 2 and responses are returned as XML, JSON or
nested Python structures.
"""

from __future__ import annotations

from ._http import URI
from ._identity import AWSCredentialIdentity
from ._version import __version__
from .client import ClientConfig, EC2QueryClient, QueryResponse
from .endpoints import DEFAULT_REGION, REGIONS
from .exceptions import (
    BaseEC2QueryException,
    ConfigurationError,
    ResponseParseError,
    UnknownFormatError,
)
from .formats import ReturnFormat
from .signers import SigV2Signer, SigV2SigningProperties

__license__ = "Apache-2.0"
__version__ = __version__

__all__ = (
    "AWSCredentialIdentity",
    "BaseEC2QueryException",
    "ClientConfig",
    "ConfigurationError",
    "DEFAULT_REGION",
    "EC2QueryClient",
    "QueryResponse",
    "REGIONS",
    "ResponseParseError",
    "ReturnFormat",
    "SigV2Signer",
    "SigV2SigningProperties",
    "URI",
    "UnknownFormatError",
)
