# commonkit

Building blocks for backend services. The package holds small utilities and
thin clients for Redis, MySQL and SeaweedFS.

## Installation

```
pip install commonkit
```

Install the test dependencies too with:

```
pip install "commonkit[test]"
```

## Utilities

- `commonkit.utils.geohash`: `geohash_encode(longitude, latitude, precision)`
  returns a geohash of 1 to 12 characters. `geohash_decode(encoded)` returns the
  `(longitude, latitude)` centre of the cell. Both raise `ValueError` on bad input.
- `commonkit.utils.json_comments`: `discard(content, matches)` strips comments,
  spaces, newlines and tabs from JSON-like text. By default it removes `//` and
  `/* */` comments. You can pass your own `CommentDelimiters(start, end)`.
- `commonkit.utils.feature`: `decode_feature(data)` decodes a base64 string of
  signed bytes into a float32 numpy vector. `l2_distance(a, b)` returns the sum
  of squared differences between two vectors.
- `commonkit.utils.rand`: `rand_string(length)` and `rand_bytes(length)` return
  random alphanumerics. `rand_count_for_diff(minimum, maximum, count)` returns
  distinct secure random integers. `rand_by_area(minimum, maximum)` returns one
  secure random integer.
- `commonkit.utils.dates`: current-time helpers such as `current_timestamp()` and
  `current_date_until_second()`. It also converts between date strings and Unix
  timestamps, for example `date_until_second_to_timestamp(value, time_zone)` and
  `timestamp_to_date_until_second(timestamp)`. An empty time zone means local time.
- `commonkit.utils.pool.WorkerPool(max_limit)`: `submit(fn)` runs callables in
  threads, at most `max_limit` at once. `wait()` blocks until every submitted
  callable has finished and then closes the pool.
- `commonkit.utils.semaphore.Semaphore(permits)`: provides `acquire`, `release`,
  `try_acquire`, `try_acquire_on_time(timeout)` and `available_permits`.

```python
from commonkit.utils.geohash import geohash_encode, geohash_decode

code = geohash_encode(104.05503, 30.562251, 6)
longitude, latitude = geohash_decode(code)
```

## Logging

Before it is configured, the module logger writes JSON lines to stderr at info
level.

`commonkit.logger.new_logger(LogConfig(...))` configures it. Log lines go to a
rotating file at `logs/<log_file_name>.log`. Records below error level also go
to stdout, and records at error level and above go to stderr. Rotation is set by
`RotationConfig`. A zero value takes the default: 100 MB size, 7 days, 10
backups.

The module-level functions are `debug`, `info`, `warn`, `error`, `fatal` and
`panic`. Each has an `f` variant that takes a format string and a `w` variant
that takes key/value pairs. `panic` raises `RuntimeError` and `fatal` raises
`SystemExit(1)`. `with_fields(...)` returns a logger that carries extra fields.

## Clients

- `commonkit.redisx.redis_client.Redis(RedisConfig(...))` is a pooled client. It
  can find the master through Sentinel when `is_cluster` is set. Its methods:
  - `set` takes options from `commonkit.redisx.options`.
  - `get`, `delete`, `exists`, `mget`, `keys` and the expiry commands.
  - `lpush`, `rpop` and `brpop` for lists.
  - `set_exp_with_mp` and `get_with_mp` store and load dataclass instances as
    msgpack.
  - `try_get_lock`, `wait_for_get_lock` and `release_lock_and_rpush` implement a
    simple lock.
- `commonkit.redisx.redis_hash.Hash` works on one hash stored under the key
  `HASH:<name>`.
- `commonkit.redisx.redis_queue.PriorityQueue` is a sorted set under
  `QUEUE:<name>`. Its reads return `ZSetData(value, score)`.
- `commonkit.mysql_client.MySQL(MySQLConfig(...))` opens and checks a pooled
  SQLAlchemy engine with query and slow-query logging. `build_dsn(cfg)` shows
  the connection URL. The engine uses the `mysql+pymysql` driver, so install
  `pymysql` alongside.
- `commonkit.seaweedfs.SeaweedFS(server_url, http_timeout)` provides
  `get_assign`, `put_object`, `get_object` and `remove_object`. Uploads and
  deletes use the timeout, which defaults to 30 seconds.
- `commonkit.rocketmq.message` holds the `Message` and `MessageExt` records.
- `commonkit.rocketmq.rocketmq_logger.LoggerWrap` routes log calls with fields
  into a standard `logging.Logger`.

## What the package does not do

- It has no MQTT client.
- It has no message-queue producer or consumer. `commonkit.rocketmq` offers only
  message records and a logging adapter. Connecting to a broker is left to you.

## Running the tests

```
pytest
```