from base64 import b64encode
from collections.abc import Callable, Mapping
import hmac
from hashlib import sha1, sha256
from typing import Required, TypedDict
from urllib.parse import quote

from .exceptions import ConfigurationError

SIGNATURE_VERSION: int = 2
DEFAULT_SIGNATURE_METHOD: str = "HmacSHA256"
SIGNATURE_METHODS: dict[str, Callable] = {
    "HmacSHA256": sha256,
    "HmacSHA1": sha1,
}


class SigV2SigningProperties(TypedDict, total=False):
    host: Required[str]
    method: str
    path: str


class SigV2Signer:
    """
    Request signer for applying the AWS Signature Version 2 query algorithm.
    """

    def sign(
        self,
        *,
        params: Mapping[str, str],
        secret_key: str,
        host: str,
    ) -> str:
        """Compute the ``Signature`` value for a GET query request.

        :param params: every request parameter except ``Signature``.
        :param secret_key: secret access key used as the HMAC key.
        :param host: endpoint hostname, without scheme or path.
        :returns: base64 encoded signature.
        """
        digestmod = self._resolve_digest(
            signature_method=params.get("SignatureMethod", DEFAULT_SIGNATURE_METHOD)
        )
        canonical_query = self.canonical_query(params=params)
        string_to_sign = self.string_to_sign(
            canonical_query=canonical_query,
            signing_properties=SigV2SigningProperties(host=host),
        )
        return self._signature(
            string_to_sign=string_to_sign,
            secret_key=secret_key,
            digestmod=digestmod,
        )

    def canonical_query(self, *, params: Mapping[str, str]) -> str:
        # keys are sorted in byte order of their raw (unencoded) forms.
        sorted_params = sorted((str(key), str(value)) for key, value in params.items())
        return "&".join(
            f"{_uri_encode(key)}={_uri_encode(value)}" for key, value in sorted_params
        )

    def string_to_sign(
        self,
        *,
        canonical_query: str,
        signing_properties: SigV2SigningProperties,
    ) -> str:
        method = signing_properties.get("method", "GET")
        path = signing_properties.get("path", "/")
        return (
            f"{method.upper()}\n"
            f"{signing_properties['host']}\n"
            f"{path}\n"
            f"{canonical_query}"
        )

    def _signature(
        self,
        *,
        string_to_sign: str,
        secret_key: str,
        digestmod: Callable,
    ) -> str:
        digest = hmac.new(
            key=secret_key.encode("utf-8"),
            msg=string_to_sign.encode("utf-8"),
            digestmod=digestmod,
        ).digest()
        return b64encode(digest).decode("ascii")

    def _resolve_digest(self, *, signature_method: str) -> Callable:
        try:
            return SIGNATURE_METHODS[signature_method]
        except KeyError:
            raise ConfigurationError(
                f"Unsupported signature method: {signature_method}. Expected one "
                f"of {', '.join(sorted(SIGNATURE_METHODS))}."
            ) from None


def _uri_encode(value: str) -> str:
    """Percent-encode everything outside the :rfc:`3986#section-2.3` unreserved set."""
    return quote(string=value, safe="~")
