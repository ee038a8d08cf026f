# snake

A toolkit of small parts for building web services, and a command-line
tool that starts new service projects from a git template.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `snake.cache.encoding`: `JSONEncoding`, `JSONGzipEncoding` and
  `MsgPackEncoding`, which all implement the `Encoding` interface
  (`marshal` / `unmarshal`). The module also has `gzip_encode` and
  `gzip_decode`.
- `snake.cache.key`: `build_cache_key(prefix, key)` joins the two with a
  colon. An empty key raises `ValueError`.
- `snake.cache.lru`: `LRU`, a fixed-capacity least-recently-used cache.
  `get` returns `-1` for a missing key.
- `snake.cache.driver`: the `Driver` interface and the errors `CacheError`
  and `PlaceholderError`. It also holds a process-wide default client, set
  with `configure()` and used by `set_value`, `get_value`, `multi_set`,
  `multi_get`, `delete`, `incr`, `decr` and `set_cache_with_not_found`.
- `snake.cache.memory`: `MemoryCache`, an in-process `Driver` with expiry
  for each entry. Expirations are given in seconds. An expiration of 0
  keeps the entry until it is removed, and a negative expiration stores
  nothing.
- `snake.cache.redis_cache`: `RedisCache`, a `Driver` built on any client
  with the `redis.Redis` interface. You supply the client; this package
  does not install one.
- `snake.cache.sync_store`: `SyncStore`, a snapshot that `sync(data_fn)`
  replaces in one step.
- `snake.cache.user_base`: `UserCache`, which stores `UserBaseModel`
  records as JSON in Redis under `snake:user:base:<id>`.
- `snake.container.group`: `Group`, a lazy container. It builds an object
  the first time its key is asked for and keeps it after that.
- `snake.auth`: `encrypt` and `compare` for bcrypt password hashes.
  `compare` raises `PasswordMismatchError` when the password does not
  match.
- `snake.app.jwt`: `sign`, `parse` and `parse_request` for HS256 tokens
  that carry a `user_id` claim, and the `Payload` class. An empty header
  raises `MissingHeaderError`.
- `snake.app.form`: `ValidError` and `ValidErrors` for collecting field
  validation errors.
- `snake.model.query`: `where_build` and `NullType` for building SQL
  `WHERE` fragments.
- `snake.model.user`: the record classes `UserBaseModel`, `UserInfo`,
  `UserFollow`, `Token`, `UserFansModel`, `UserFollowModel` and
  `UserStatModel`.
- `snake.service.trans`: `transfer_user`, which builds the client-facing
  `UserInfo`.
- `snake.service.vcode`: `VCodeService`, which creates and checks six-digit
  login codes stored in Redis for ten minutes.
- `snake.conf`: `load_config`, `parse_config` and `init` for reading the
  YAML configuration into `Config`. With no path given, `load_config`
  reads `config/config.yaml` (or `.yml`). Durations may be written as
  numbers of seconds or as text such as `"1h30m"`.
- `snake.email.smtp`: `SMTPClient`, a queued SMTP sender that runs on a
  background thread, plus the module-level `init` and `send`.
- `snake.email.template`: the ready-made mail bodies
  `new_activation_email` and `new_reset_password_email`.
- `snake.counter`: `Counter`, an event counter kept in Redis with expiry.

## Examples

An LRU cache with room for three entries:

```python
from snake.cache.lru import LRU

lru = LRU(3)
lru.set(1, 1)
lru.set(2, 2)
lru.set(3, 3)
lru.get(2)        # 2
lru.set(4, 4)     # evicts key 1, the least recently used
lru.get(1)        # -1
lru.queue()       # [3, 2, 4], keys from least to most recently used
```

An in-process cache:

```python
from snake.cache.memory import MemoryCache
from snake.cache.driver import PlaceholderError

cache = MemoryCache("demo")
cache.set("greeting", "hello", 60)
cache.get("greeting")              # "hello"
cache.set_cache_with_not_found("missing")
# cache.get("missing") now raises PlaceholderError
```

Lazy objects per key:

```python
from snake.container.group import Group

group = Group(dict)
first = group.get("users")
assert group.get("users") is first
group.clear()
```

Password hashing:

```python
from snake.auth import compare, encrypt

hashed = encrypt("password")
compare(hashed, "password")   # raises PasswordMismatchError on a mismatch
```

Tokens:

```python
from snake.app.jwt import parse, sign

token = sign({"user_id": 1}, "secret", 86400)
parse(token, "secret").user_id   # 1
```

Building a `WHERE` clause:

```python
from snake.model.query import NullType, where_build

sql, values = where_build({"age >": 18, "name": "alice", "deleted_at": NullType.IS_NULL})
# sql == "age>? AND name=? AND deleted_at IS NULL", values == [18, "alice"]
```

## Command-line tool

To create a new service project in the current directory, first point the
tool at a git layout repository. The URL must end in `.git`:

```
export SNAKE_LAYOUT_URL=https://git.example.com/layout.git
snake new helloworld
```

The tool clones the layout into `~/.snake/repo` and copies it to
`./helloworld`, skipping `.git` and `.github`. During the copy it replaces
the layout's module path with the project name. If the layout has a
`cmd/server` directory, the tool renames it to `cmd/helloworld`.

To upgrade the tool with `go get`, run the command below. It uses the
module named by `SNAKE_MODULE`, which defaults to `snake`:

```
snake upgrade
```

`snake --version` prints the version. The commands need `git` and `go`
to be on the `PATH`.

## What this package does not do

- It has no HTTP or gRPC server, routes, request handlers or middleware.
  The helpers above are building blocks for such a service.
- It has no database access layer. The `snake.model.user` classes are plain
  records, and `MySQLConfig.dsn()` only builds a connection string.
- It does not send SMS messages. `VCodeService` creates and checks codes
  but does not deliver them.
- It does not render e-mail from HTML template files. Only the two plain
  bodies in `snake.email.template` are provided.