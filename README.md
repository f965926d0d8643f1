# myftp

A small FTP server that serves one directory to the `Anonymous` user.
It handles the control commands a simple client needs, with both passive
(`PASV`) and active (`PORT`) data connections. It has no dependencies
outside the standard library and runs on POSIX systems (directory listings
are produced by `/bin/ls -la`).

## Installation

```
pip install .
```

## Running the server

```
myftp PORT PATH
```

- `PORT` is the port number on which the server socket listens.
- `PATH` is the home directory for the Anonymous user. It must exist and be
  a directory; it is turned into a canonical absolute path.

`myftp -h` or `myftp --help` prints the usage and exits with status 84.
Wrong arguments, a missing directory or a port that cannot be bound print
the reason and also exit with status 84.

Example:

```
myftp 2121 /srv/ftp
```

Then connect with an FTP client and log in as `Anonymous` with an empty
password. New clients are greeted with `220`. The server logs connections
and disconnections with UTC timestamps; warnings and errors go to standard
error, the rest to standard output.

## Supported commands

| Command | Meaning                                                        |
|---------|----------------------------------------------------------------|
| `USER`  | Give the user name                                             |
| `PASS`  | Give the password (none for `Anonymous`)                       |
| `CWD`   | Change the working directory                                   |
| `CDUP`  | Move to the parent directory (always answers `200`)            |
| `PWD`   | Print the working directory                                    |
| `DELE`  | Delete a file, or a directory with everything in it            |
| `PASV`  | Enter passive mode                                             |
| `PORT`  | Enter active mode, `PORT h1,h2,h3,h4,p1,p2`                    |
| `LIST`  | List a directory over the data connection                      |
| `RETR`  | Download a file                                                |
| `STOR`  | Upload a file                                                  |
| `NOOP`  | Do nothing                                                     |
| `HELP`  | Answer with the help reply                                     |
| `QUIT`  | Close the session                                              |

Command names are case-insensitive; arguments are separated by single
spaces. Any other command, or an empty line, is answered with `500`.

`CWD`, `CDUP` and `DELE` refuse paths that resolve outside the served
directory. `PASS` accepts only `Anonymous` with no password; any other
user or a given password is answered with `530` and the user name is
forgotten.

## What it does not do

- There are no user accounts or real password checks; `USER` on its own
  already marks the session as logged in.
- Commands such as `TYPE`, `MKD`, `RMD`, `RNFR`/`RNTO`, `SIZE`, `NLST`,
  `EPSV` and `FEAT` are not supported.
- `PASV` always announces `127.0.0.1`, so passive transfers only work for
  clients on the same host.
- There is no TLS.

## Using it as a library

- `myftp.app.build_registry()` returns a `CommandRegistry` holding every
  supported command.
- `myftp.app.handle_request(request, session, registry)` parses one request
  line and runs the matching handler for a `myftp.session.SessionState`.
- `myftp.server.NetworkServer(port, logger, path, handler)` listens on a
  port (0 picks a free one, readable as `server.port`), greets clients and
  passes each request to `handler(request, session)`. `run()` serves until
  `close()` is called; the server is also a context manager.
- `myftp.app.main(argv=None)` runs the whole server and returns the exit
  status.

```python
import functools
from myftp.app import build_registry, handle_request
from myftp.logger import Logger, LogLevel
from myftp.server import NetworkServer

handler = functools.partial(handle_request, registry=build_registry())
with NetworkServer(2121, Logger(LogLevel.INFO), "/srv/ftp", handler) as server:
    server.run()
```

## Tests

```
pip install .[test]
pytest
```