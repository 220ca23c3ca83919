"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from dataclasses import dataclass, field, replace
import datetime
import logging
from typing import Any
from urllib.parse import quote, urlencode
import warnings

import requests

from ._http import URI
from ._identity import AWSCredentialIdentity
from .endpoints import (
    BASE_HOST,
    DEFAULT_REGION,
    SERVICE,
    is_valid_region,
    resolve_endpoint,
)
from .exceptions import ConfigurationError, EC2QueryWarning
from .formats import ReturnFormat, convert_response
from .signers import (
    DEFAULT_SIGNATURE_METHOD,
    SIGNATURE_METHODS,
    SIGNATURE_VERSION,
    SigV2Signer,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"
DEFAULT_API_VERSION: str = "2012-07-20"
DEFAULT_RETURN_FORMAT: ReturnFormat = ReturnFormat.JSON
REDACTED_PARAMS: frozenset[str] = frozenset(("AWSAccessKeyId", "Signature"))


@dataclass(kw_only=True)
class ClientConfig:
    access_key: str
    secret_key: str = field(repr=False)
    region: str | None = None
    action: str = ""
    use_tls: bool = False
    return_format: str | ReturnFormat | None = None
    signature_method: str | None = None
    signature_version: int | None = None
    api_version: str | None = None


@dataclass(frozen=True)
class QueryResponse:
    """Outcome of a single query request.

    ``status_code`` and ``body`` are ``None`` when the request never produced
    an HTTP response, in which case ``error`` holds the transport exception.
    """

    status_code: int | None
    body: str | None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return (
            self.error is None
            and self.status_code is not None
            and 200 <= self.status_code < 300
        )


class EC2QueryClient:
    """
    Client for the EC2 query API, signing each GET request with Signature Version 2.
    """

    service: str = SERVICE
    base_host: str = BASE_HOST

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: requests.Session | None = None,
        signer: SigV2Signer | None = None,
    ):
        self._identity = AWSCredentialIdentity(
            access_key_id=config.access_key,
            secret_access_key=config.secret_key,
        )
        self._config = replace(config)
        self._session = session
        self._signer = signer if signer is not None else SigV2Signer()

        self._config.signature_method = self._resolve_signature_method(
            signature_method=config.signature_method
        )
        self._config.signature_version = self._resolve_signature_version(
            signature_version=config.signature_version
        )
        self._config.api_version = config.api_version or DEFAULT_API_VERSION
        self.set_region(config.region or DEFAULT_REGION)
        self.set_return_format(config.return_format or DEFAULT_RETURN_FORMAT)

    @classmethod
    def from_kwargs(
        cls, *, session: requests.Session | None = None, **kwargs: Any
    ) -> "EC2QueryClient":
        return cls(ClientConfig(**kwargs), session=session)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(region={self.region!r}, action={self.action!r}, "
            f"return_format={self.return_format.value!r}, scheme={self.scheme!r})"
        )

    @property
    def config(self) -> ClientConfig:
        """A copy of the client's current configuration."""
        return replace(self._config)

    @property
    def region(self) -> str:
        assert self._config.region is not None
        return self._config.region

    @property
    def action(self) -> str:
        return self._config.action

    @property
    def return_format(self) -> ReturnFormat:
        assert isinstance(self._config.return_format, ReturnFormat)
        return self._config.return_format

    @property
    def scheme(self) -> str:
        return self.endpoint.scheme

    @property
    def endpoint(self) -> URI:
        return resolve_endpoint(
            region=self.region,
            use_tls=self._config.use_tls,
            service=self.service,
            base_host=self.base_host,
        )

    @property
    def host(self) -> str:
        return self.endpoint.host

    def set_region(self, region: str) -> None:
        """Set the target region.

        :raises ConfigurationError: if ``region`` is not a supported region.
        """
        if not is_valid_region(region):
            raise ConfigurationError(f"unknown region: {region}")
        self._config.region = region

    def set_return_format(self, return_format: str | ReturnFormat) -> None:
        """Set the format :meth:`execute` returns.

        Accepts ``xml``, ``json``, ``raw`` or ``structured`` (alias ``perl``),
        in any case.
        """
        self._config.return_format = ReturnFormat.parse(return_format)

    def set_action(self, action: str) -> None:
        self._config.action = action

    def request_params(self, *, timestamp: str | None = None) -> dict[str, str]:
        """Build the signed parameter set for the current action."""
        if not self._config.action:
            raise ConfigurationError("Action is required.")
        params = {
            "AWSAccessKeyId": self._identity.access_key_id,
            "Action": self._config.action,
            "SignatureMethod": str(self._config.signature_method),
            "SignatureVersion": str(self._config.signature_version),
            "Timestamp": timestamp if timestamp is not None else self._timestamp(),
            "Version": str(self._config.api_version),
        }
        params["Signature"] = self._signer.sign(
            params=params,
            secret_key=self._identity.secret_access_key,
            host=self.host,
        )
        return params

    def request_url(self, *, params: dict[str, str]) -> str:
        return self.endpoint.with_query(urlencode(params, quote_via=quote)).build()

    def send(self) -> QueryResponse:
        """Issue the signed GET request for the current action.

        Transport failures are reported on the returned :class:`QueryResponse`
        rather than raised.
        """
        params = self.request_params()
        url = self.request_url(params=params)
        logger.debug(
            "Sending %s request to %s with params %s",
            self.action,
            self.host,
            _redact(params),
        )
        try:
            response = self._get(url)
        except requests.RequestException as e:
            logger.warning(
                "%s request to %s failed: %s", self.action, self.host, type(e).__name__
            )
            return QueryResponse(status_code=None, body=None, error=e)

        result = QueryResponse(status_code=response.status_code, body=response.text)
        if not result.ok:
            logger.warning(
                "%s request to %s returned HTTP %s",
                self.action,
                self.host,
                result.status_code,
            )
        return result

    def execute(self) -> Any | None:
        """Call the configured action and convert the response.

        :returns: the response in the configured return format, or ``None``
            when the request failed or returned a non-2xx status.
        """
        response = self.send()
        if not response.ok:
            return None
        assert response.body is not None
        return convert_response(body=response.body, return_format=self.return_format)

    def _get(self, url: str) -> requests.Response:
        if self._session is not None:
            return self._session.get(url)
        return requests.get(url)

    def _timestamp(self) -> str:
        return datetime.datetime.now(datetime.timezone.utc).strftime(TIMESTAMP_FORMAT)

    def _resolve_signature_method(self, *, signature_method: str | None) -> str:
        if signature_method is None:
            return DEFAULT_SIGNATURE_METHOD
        if signature_method not in SIGNATURE_METHODS:
            raise ConfigurationError(
                f"Unsupported signature method: {signature_method}. Expected one "
                f"of {', '.join(sorted(SIGNATURE_METHODS))}."
            )
        return signature_method

    def _resolve_signature_version(self, *, signature_version: int | None) -> int:
        if signature_version is None:
            return SIGNATURE_VERSION
        if signature_version != SIGNATURE_VERSION:
            warnings.warn(
                f"SignatureVersion {signature_version} requested, but requests are "
                f"always signed with the version {SIGNATURE_VERSION} algorithm.",
                EC2QueryWarning,
            )
        return signature_version


def _redact(params: dict[str, str]) -> dict[str, str]:
    return {
        key: "***REDACTED***" if key in REDACTED_PARAMS else value
        for key, value in params.items()
    }
