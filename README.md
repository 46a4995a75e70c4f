# seamdb

Building blocks for a distributed key-value database, with no dependencies
beyond the standard library.

## Modules

- `seamdb.clock`: `Timestamp` (seconds, nanoseconds and a logical counter)
  with ordering, `is_zero`, `next`, `forward`, `into_physical`, transaction
  sequence timestamps (`Timestamp.txn_sequence`, `get_txn_sequence`) and the
  constants `ZERO`, `EPSILON` and `MAX`. Adding or subtracting an `int`
  (nanoseconds) or a `timedelta` shifts the physical part; subtracting one
  timestamp from another gives the nanoseconds between them, never less than
  zero. `Clock` is a thread-safe clock whose `now()` readings always increase;
  `update(ts)` moves it forward to a timestamp seen elsewhere.
- `seamdb.keys`: the key space layout (`ROOT_KEY_PREFIX`, `RANGE_KEY_PREFIX`,
  `DATA_KEY_PREFIX`, `SYSTEM_KEY_PREFIX`, `USER_KEY_PREFIX`, `MAX_KEY`),
  `root_key`, `range_key`, `system_key`, `user_key`, `identify_key` returning
  a `KeyKind` and the key without its prefix, and the tablet descriptor and
  deployment keys and `KeyRange`s.
- `seamdb.uri`: `Params` (ordered, read-only query parameters),
  `parse_params`, `is_valid_path`, `validate_scheme`, `validate_authority`,
  `format_uri` and `UriError`, a `ValueError` subclass.
- `seamdb.endpoint`: `Endpoint` (`scheme://host1[:port1][,host2]`), with
  `split`, `split_once` and `split_with_scheme`; `ResourceId`
  (`scheme://address/path`); and `ServiceUri`
  (`scheme://address[path][?key=value&...]`) with `query`, `endpoint`,
  `resource_id`, `parts` and `with_path`. All three compare equal to, and
  hash like, their text form.
- `seamdb.node`: `NodeId` (a `str` with `NodeId.new_random()`) and
  `NodeStatistics` (`node_number()`, `offline()`, `new_offline()`).

## Example

```python
from datetime import timedelta

from seamdb.clock import Clock, Timestamp
from seamdb.endpoint import Endpoint, ServiceUri
from seamdb.keys import KeyKind, identify_key, user_key

clock = Clock()
first = clock.now()
assert clock.now() > first

ts = Timestamp.ZERO + timedelta(seconds=50)
print(ts)                        # 1970-01-01T00:00:50Z
assert (ts + 51) - 51 == ts      # ints count nanoseconds

uri = ServiceUri.parse("etcd://server1,server2:2379/cluster?key1=value1")
print(uri.endpoint())            # etcd://server1,server2:2379
print(uri.resource_id())         # etcd://server1,server2:2379/cluster
print(uri.query("key1"))         # value1

endpoint = Endpoint.parse("tcp://host1,host2:9999")
print([str(e) for e in endpoint.split()])  # ['tcp://host1', 'tcp://host2:9999']

kind, rest = identify_key(user_key(b"x"))
assert kind is KeyKind.USER and rest == b"x"
```

Invalid input raises `seamdb.uri.UriError` with a message naming the
offending part, for example `no address in service uri: a://`.
`identify_key` raises `ValueError` for keys outside the known key spaces.

## What this package does not do

It has no server, no storage engine, no network client and no cluster
membership registry: it provides the timestamps, key layout, URI parsing and
node identity values that such components are built from, and no command to
run.

## Tests

```
pip install -e .[test]
pytest
```