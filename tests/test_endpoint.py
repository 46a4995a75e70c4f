import pytest

from seamdb.endpoint import Endpoint, ResourceId, ServiceUri
from seamdb.uri import Params, UriError

ENDPOINT_TEXT = "scheme://address,host1:9999,127.0.0.1"


def test_endpoint_no_path():
    with pytest.raises(UriError, match="endpoint expect no path"):
        Endpoint.parse("scheme://address/path?key=value")


def test_endpoint_no_params():
    with pytest.raises(UriError, match="endpoint expect no params"):
        Endpoint.parse("scheme://address?key=value")


def test_endpoint_ok():
    endpoint = Endpoint.parse(ENDPOINT_TEXT)
    assert endpoint.scheme == "scheme"
    assert endpoint.address == "address,host1:9999,127.0.0.1"


def test_endpoint_equal():
    endpoint = Endpoint.parse(ENDPOINT_TEXT)
    copy = Endpoint(endpoint.scheme, endpoint.address)
    assert endpoint == ENDPOINT_TEXT
    assert copy == ENDPOINT_TEXT
    assert copy == endpoint
    assert str(endpoint) == ENDPOINT_TEXT
    assert hash(endpoint) == hash(ENDPOINT_TEXT)
    assert hash(copy) == hash(ENDPOINT_TEXT)
    assert endpoint != "scheme://address"


def test_endpoint_hashmap():
    endpoint = Endpoint.parse(ENDPOINT_TEXT)
    mapping = {Endpoint(endpoint.scheme, endpoint.address): "v1"}
    assert mapping.get(ENDPOINT_TEXT) == "v1"
    assert mapping.get(endpoint) == "v1"


def test_endpoint_split():
    endpoint = Endpoint.parse(ENDPOINT_TEXT)
    assert list(endpoint.split()) == [
        Endpoint("scheme", "address"),
        Endpoint("scheme", "host1:9999"),
        Endpoint("scheme", "127.0.0.1"),
    ]
    assert list(endpoint.split_with_scheme("http")) == [
        Endpoint("http", "address"),
        Endpoint("http", "host1:9999"),
        Endpoint("http", "127.0.0.1"),
    ]
    server, remainings = endpoint.split_once()
    assert server == Endpoint("scheme", "address")
    assert remainings == Endpoint("scheme", "host1:9999,127.0.0.1")
    assert server.split_once() is None


def test_resource_id_path():
    with pytest.raises(UriError, match="resource id expect path"):
        ResourceId.parse("scheme://address?key=value")


def test_resource_id_no_params():
    with pytest.raises(UriError, match="resource id expect no params"):
        ResourceId.parse("scheme://address/path?key=value")


def test_resource_id_ok():
    resource_id = ResourceId.parse("scheme://address/path")
    assert resource_id.path == "/path"
    assert resource_id.address == "address"


def test_resource_id_equal():
    text = "scheme://address,host1:9999,127.0.0.1/path"
    resource_id = ResourceId.parse(text)
    copy = ResourceId(resource_id.scheme, resource_id.address, resource_id.path)
    assert resource_id == text
    assert copy == text
    assert copy == resource_id
    assert str(resource_id.endpoint()) == ENDPOINT_TEXT
    assert hash(resource_id) == hash(text)
    assert hash(copy) == hash(text)


def test_resource_id_hashmap():
    text = "scheme://address/path"
    mapping = {ResourceId.parse(text): "v1"}
    assert mapping.get(text) == "v1"


def test_service_resource_id():
    resource_id = ResourceId.parse("scheme://address,host1:9999,127.0.0.1/path")
    service_uri = ServiceUri.parse(f"{resource_id}?key1=value1")
    assert service_uri.resource_id() == resource_id
    assert service_uri.query("key1") == "value1"
    assert service_uri.query("key2") is None


@pytest.mark.parametrize("uri", ["://localhost/path"])
def test_scheme_absent(uri):
    with pytest.raises(UriError, match="no scheme"):
        ServiceUri.parse(uri)


@pytest.mark.parametrize("uri", ["%://localhost/path"])
def test_scheme_invalid(uri):
    with pytest.raises(UriError, match="invalid scheme"):
        ServiceUri.parse(uri)


def test_service_uri_without_separator():
    with pytest.raises(UriError, match="invalid service uri"):
        ServiceUri.parse("localhost/path")


@pytest.mark.parametrize("uri", ["a://", "a:///path", "a://?", "a://?c=d"])
def test_address_absent(uri):
    with pytest.raises(UriError, match="no address"):
        ServiceUri.parse(uri)


@pytest.mark.parametrize("uri", ["a://server1%", "a://server1, server2:9090"])
def test_address_invalid(uri):
    with pytest.raises(UriError, match="invalid address"):
        ServiceUri.parse(uri)


def test_address_username_unsupported():
    with pytest.raises(UriError, match="unsupported username"):
        ServiceUri.parse("a://user@localhost/path")


@pytest.mark.parametrize("uri", ["a://host/%", "a://host/a/", "a://host/a//b"])
def test_path_invalid(uri):
    with pytest.raises(UriError, match="invalid path"):
        ServiceUri.parse(uri)


def test_params_empty():
    with pytest.raises(UriError, match="empty params"):
        ServiceUri.parse("scheme://host/path?")


@pytest.mark.parametrize(
    "uri",
    [
        "scheme://host/path0?=",
        "scheme://host/path1?a=",
        "scheme://host/path2?=b",
        "scheme://host/path3?&",
        "scheme://host/path4?a=&",
        "scheme://host/path5?a=%&",
        "scheme://host/path6?a=b&",
        "scheme://host/path7?a=b&c=",
        "scheme://host/path8?a=b&a=c",
    ],
)
def test_params_invalid(uri):
    with pytest.raises(UriError, match="invalid params"):
        ServiceUri.parse(uri)


def test_service_uri_equal():
    text = "scheme://server1,server2:9090/path/xyz?key1=value1&key2=value2"
    uri = ServiceUri.parse(text)
    copy = ServiceUri(uri.scheme, uri.address, uri.path, uri.params)
    assert uri == text
    assert copy == text
    assert copy == uri
    assert uri.endpoint() == "scheme://server1,server2:9090"
    assert uri.resource_id() == "scheme://server1,server2:9090/path/xyz"
    assert hash(uri) == hash(text)
    assert hash(copy) == hash(text)


def test_service_uri_parts():
    uri = ServiceUri.parse("scheme://host/path?key1=value1")
    resource_id, params = uri.parts()
    assert resource_id == "scheme://host/path"
    assert params.query("key1") == "value1"


def test_service_uri_hashmap():
    text = "scheme://server1,server2:9090/path/xyz?key1=value1&key2=value2"
    mapping = {ServiceUri.parse(text): "v1"}
    assert mapping.get(text) == "v1"


def test_service_uri_with_path():
    uri = ServiceUri.parse("scheme://host/path1").with_path("/path2")
    assert uri == "scheme://host/path2"


def test_service_uri_with_path_keeps_params():
    uri = ServiceUri.parse("scheme://host/path1?a=b").with_path("/path2")
    assert str(uri) == "scheme://host/path2?a=b"


def test_service_uri_with_path_invalid():
    with pytest.raises(UriError, match="invalid path"):
        ServiceUri.parse("scheme://host/path1").with_path("/path2/%")


def test_valid_uris():
    text = "scheme://server1,server2:9090/path/xyz?key1=value1&key2=value2"
    uri = ServiceUri.parse(text)
    assert (uri.scheme, uri.address, uri.path) == ("scheme", "server1,server2:9090", "/path/xyz")
    assert uri.params == Params([("key1", "value1"), ("key2", "value2")])
    assert str(uri) == text

    text = "scheme://address/path"
    uri = ServiceUri.parse(text)
    assert (uri.scheme, uri.address, uri.path) == ("scheme", "address", "/path")
    assert uri.params.is_empty()
    assert str(uri) == text

    text = "scheme+a://address"
    uri = ServiceUri.parse(text)
    assert (uri.scheme, uri.address, uri.path) == ("scheme+a", "address", "")
    assert uri.params.is_empty()
    assert str(uri) == text

    text = "scheme-b://address"
    uri = ServiceUri.parse(text)
    assert (uri.scheme, uri.address, uri.path) == ("scheme-b", "address", "")
    assert uri.params.is_empty()
    assert str(uri) == text