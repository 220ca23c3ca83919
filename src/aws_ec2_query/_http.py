"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from dataclasses import dataclass
from urllib.parse import urlunsplit


@dataclass(kw_only=True, frozen=True)
class URI:
    """Universal Resource Identifier, target location for a query request."""

    scheme: str = "https"
    host: str
    path: str = "/"
    query: str | None = None

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form ``{scheme}://{host}{path}?{query}``.
        """
        return urlunsplit((self.scheme, self.host, self.path, self.query or "", ""))

    def with_query(self, query: str) -> "URI":
        return URI(scheme=self.scheme, host=self.host, path=self.path, query=query)
