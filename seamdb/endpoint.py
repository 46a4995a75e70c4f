"""Textual endpoints, resource ids and service URIs for clusters and their resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from seamdb.uri import (
    Params,
    UriError,
    format_uri,
    is_valid_path,
    parse_params,
    validate_authority,
    validate_scheme,
)

__all__ = ["Endpoint", "ResourceId", "ServiceUri", "UriError"]


@dataclass(frozen=True, eq=False)
class Endpoint:
    """Service endpoint of a cluster shaped ``scheme://host1[:port1][,host2]``."""

    scheme: str
    address: str

    @classmethod
    def parse(cls, s: str) -> "Endpoint":
        uri = ServiceUri.parse(s)
        if uri.path:
            raise UriError(f"endpoint expect no path: {s}")
        if not uri.params.is_empty():
            raise UriError(f"endpoint expect no params: {s}")
        return uri.endpoint()

    def split(self) -> Iterator["Endpoint"]:
        """Yield one endpoint per comma separated server."""
        return self.split_with_scheme(self.scheme)

    def split_once(self) -> Optional[Tuple["Endpoint", "Endpoint"]]:
        """Split off the first server, or return None if there is only one."""
        server, sep, remainings = self.address.partition(",")
        if not sep:
            return None
        return Endpoint(self.scheme, server), Endpoint(self.scheme, remainings)

    def split_with_scheme(self, scheme: str) -> Iterator["Endpoint"]:
        """Yield one endpoint per server, each carrying ``scheme``."""
        return (Endpoint(scheme, server) for server in self.address.split(","))

    def __str__(self) -> str:
        return f"{self.scheme}://{self.address}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Endpoint):
            return (self.scheme, self.address) == (other.scheme, other.address)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))


@dataclass(frozen=True, eq=False)
class ResourceId:
    """Identifies a resource in a cluster: ``scheme://address/path``."""

    scheme: str
    address: str
    path: str

    @classmethod
    def parse(cls, s: str) -> "ResourceId":
        return cls.parse_named("resource id", s)

    @classmethod
    def parse_named(cls, name: str, s: str) -> "ResourceId":
        """Parse ``s``, naming it ``name`` in error messages."""
        uri = ServiceUri.parse(s)
        if len(uri.path) <= 1:
            raise UriError(f"{name} expect path: {uri}")
        if not uri.params.is_empty():
            raise UriError(f"{name} expect no params: {uri}")
        return uri.resource_id()

    def endpoint(self) -> Endpoint:
        """Endpoint of the cluster this resource is located in."""
        return Endpoint(self.scheme, self.address)

    def __str__(self) -> str:
        return f"{self.scheme}://{self.address}{self.path}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResourceId):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))


@dataclass(frozen=True, eq=False)
class ServiceUri:
    """Queryable endpoint shaped ``scheme://address[path][?param1=abc&param2=xyz]``."""

    scheme: str
    address: str
    path: str = ""
    params: Params = field(default_factory=Params)

    @classmethod
    def parse(cls, s: str) -> "ServiceUri":
        scheme, sep, trailing = s.partition("://")
        if not sep:
            raise UriError(f"invalid service uri: {s}")
        if not scheme:
            raise UriError(f"no scheme in service uri: {s}")
        try:
            validate_scheme(scheme)
        except UriError as err:
            raise UriError(f"invalid scheme in service uri: {s}") from err

        cut = min((i for i in (trailing.find("/"), trailing.find("?")) if i >= 0), default=len(trailing))
        address, trailing = trailing[:cut], trailing[cut:]
        if not address:
            raise UriError(f"no address in service uri: {s}")
        for server in address.split(","):
            try:
                username = validate_authority(server)
            except UriError as err:
                raise UriError(f"invalid address in service uri: {s}") from err
            if username is not None:
                raise UriError(f"unsupported username in service uri: {s}")

        path, question, query = trailing.partition("?")
        if not is_valid_path(path):
            raise UriError(f"invalid path in service uri: {s}")

        if not question:
            params = Params()
        elif not query:
            raise UriError(f"empty params in service uri: {s}")
        else:
            try:
                params = parse_params(query)
            except UriError as err:
                raise UriError(f"invalid params in service uri: {s}") from err
        return cls(scheme, address, path, params)

    def query(self, key: str) -> Optional[str]:
        return self.params.query(key)

    def endpoint(self) -> Endpoint:
        return Endpoint(self.scheme, self.address)

    def resource_id(self) -> ResourceId:
        return ResourceId(self.scheme, self.address, self.path)

    def parts(self) -> Tuple[ResourceId, Params]:
        return self.resource_id(), self.params

    def with_path(self, path: str) -> "ServiceUri":
        """Return a copy of this URI with ``path`` in place of its path."""
        if not is_valid_path(path):
            raise UriError(f"invalid path {path} for service uri")
        return ServiceUri(self.scheme, self.address, path, self.params)

    def __str__(self) -> str:
        return format_uri(self.scheme, self.address, self.path, self.params)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ServiceUri):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))