# tulusapi

A small JSON web API built on Flask. It registers users, logs them in with a
signed JWT access token, and guards everything under `/api` behind that token.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
tulusapi
```

The command (`tulusapi.app:main`) loads the configuration, opens a MySQL
connection with the `database.mysql` settings, and serves the API with
Flask's built-in server on `0.0.0.0` at `app.port`. If the database cannot
be reached it prints `RECOVERED: <error>` and exits with status 1; an
interrupt exits with 1 and a server error with 2.

## Configuration

`tulusapi.configuration.load_config()` reads a JSON file named
`config.json`, looked up in the current directory, its parent and its
grandparent. When the `ENV` environment variable is set, `config-<ENV>.json`
is used instead (`ENV=stage` reads `config-stage.json`). A missing or
unreadable file leaves every setting at its default.

Keys match the fields of `Config` without regard to case or underscores, so
`secretKey` fills `app.secret_key`. A setting present in the file can be
overridden by an environment variable named after its dotted key in upper
case, for example `APP.SECRETKEY`.

A minimal file:

```json
{
  "app": {"port": 8080, "secretKey": "secret"},
  "database": {
    "psql": {"host": "localhost", "port": "5432", "user": "user", "password": "password"},
    "mysql": {"host": "localhost", "port": "3306", "user": "user", "password": "password"}
  },
  "redisClient": {"host": "localhost", "port": "6379"},
  "tulusTech": {"host": "http://localhost:9000"}
}
```

Empty PostgreSQL settings are filled from `DB_NAME`, `DB_HOST`,
`DB_PASSWORD` and `DB_PORT` (`apply_database_env`).

## Logging

`tulusapi.logger` writes JSON lines. With `ENV` unset or `prod` they go to
`logs/<YYYY-MM-DD><ENV>.log` under the working directory (stderr if that file
cannot be opened); with `ENV=stage` they go to standard output; any other
environment logs to stderr. `get_logger()` returns a logger that adds a
request id and the caller's file, function and line to every entry.

## Endpoints

| Method | Path        | Body                                               |
|--------|-------------|----------------------------------------------------|
| POST   | `/register` | `{"name": ..., "user_name": ..., "password": ...}` |
| POST   | `/login`    | `{"user_name": ..., "password": ...}`              |
| POST   | `/api/`     | any; requires `Authorization: Bearer <token>`      |

A body that is missing, not JSON, or lacks a required field is answered with
status 400 and a JSON string describing the problem. Otherwise every reply
has status 200 and carries `response_code` and `response_message`.

Registration stores the MD5 hex digest of the password. A successful login
returns the token in `data`:

```json
{
  "response_code": "200",
  "response_message": "Success",
  "data": {"access_token": "token", "expires_at": 1700000300, "token_type": ""}
}
```

A failed login has `response_code` `"401"`; a failed registration has
`"500"`. Tokens are signed with HS256 using `app.secretKey` and expire five
minutes after issue.

`/api/` answers `{}`. Requests to it without a valid token, or whose token
names an unknown user, get status 401 and a body with `response_code` `"401"`
and a message saying what was wrong (`tulusapi.auth.authenticate`).

Cross-origin requests are accepted only from `https://tulus.tech`; other
foreign origins get 403.

## Using it as a library

The application factory can be wired to any user store:

```python
from tulusapi.router import create_app
from tulusapi.user_usecase import UserUsecase

app = create_app(UserUsecase(store, secret_key="secret"), store, secret_key="secret")
app.run(port=8080)
```

`store` is any object providing `get_by_id`, `get_by_user_name` and
`create_user`, as described by `tulusapi.models.UserStore`.
`tulusapi.user_repository.UserRepository` implements it over any DB-API
connection against the `public.user` table; pass `placeholder="?"` and a
different `table` for sqlite3.

Other pieces:

- `tulusapi.databases`: `mysql_dsn`, `postgres_dsn`, `mongo_uri` build
  connection strings; `connect_mysql` opens a MySQL connection.
- `tulusapi.cache.new_cache(addr, username, password)`: connects to Redis at
  `host:port` and pings it.
- `tulusapi.host_client.HostClient`: sends one JSON request and returns the
  body and status code.
- `tulusapi.tulustech.TulusHost`: fetches a random typing exercise from
  `/api/typings/random`.
- `tulusapi.filecsv`: `ValidateCsv` and `ValidateFile` read and append
  reference numbers in CSV files and fixed-width plain files.
- `tulusapi.worker.pooled_work`: inserts projects into a `project` table on a
  pool of threads and returns the errors met.

## What it does not do

The server only uses MySQL for users. It has no health-check or video
endpoints, and no clients for message queues, spreadsheets, video services or
MongoDB beyond building a MongoDB URI. Redis and the typing-exercise client
are available as library functions but are not used by the server.