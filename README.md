# cooperutil

Building blocks for network services, using only the standard library.

## Modules

- `cooperutil.msg_buffer.MsgBuffer`: a growable byte buffer with big-endian
  integer reads and writes (`append_int16`, `read_int32`, `peek_int64`, ...),
  cheap prepending (`add_in_front`), searching (`find`, `find_crlf`) and
  reading from a file descriptor (`read_fd`).
- `cooperutil.date.Date`: a time point held as microseconds since the epoch,
  with UTC and local formatting (`to_formatted_string`,
  `to_customed_formatted_string`, their `_local` forms), database strings
  (`to_db_string`, `from_db_string` and the local variants), rounding and
  comparison.
- `cooperutil.log_stream`: `LogStream`, a text stream written with `<<`,
  `FixedBuffer` and `Fmt` for printf-style values.
- `cooperutil.logger`: `Logger` and `RawLogger` messages, `LogLevel`, and the
  helpers `log`, `trace`, `debug`, `info`, `warn`, `error`, `fatal`, `syserr`
  and `raw`. Output and flush functions can be replaced with
  `Logger.set_output_function`, globally or per index; the default writes to
  standard output. `trace`, `debug` and `info` are dropped when below
  `Logger.log_level()` (default `DEBUG`).
- `cooperutil.tls_policy.TLSPolicy`: a dataclass describing TLS settings, with
  `default_server_policy(cert_path, key_path)` and
  `default_client_policy(hostname)`.
- `cooperutil.thread_pool.ThreadPool`: a fixed number of worker threads that
  run queued tasks; usable as a context manager that stops the pool on exit.
- `cooperutil.mpsc_queue.MpscQueue`: a FIFO queue with `enqueue`, `dequeue`
  (raises `IndexError` when empty), `empty` and `drain`.
- `cooperutil.utilities` and `cooperutil.funcs`: string splitting and trimming,
  certificate-name matching (`verify_ssl_name`), content-type lookup
  (`find_content_type`), path checks, `Content-Disposition` parameter parsing,
  hex rendering, secure random bytes and 64-bit byte-order conversion.

## Installation

```
pip install .
```

## Examples

```python
from cooperutil.msg_buffer import MsgBuffer

buf = MsgBuffer()
buf.append_int32(42)
buf.append(b"hello\r\n")
assert buf.read_int32() == 42
assert buf.find_crlf() == 5
```

```python
from cooperutil.date import Date

d = Date(1_000_000)
print(d.to_formatted_string(True))   # 19700101 00:00:01.000000
```

```python
import threading
from cooperutil.thread_pool import ThreadPool

done = threading.Event()
with ThreadPool(4, "worker") as pool:
    pool.add_task(done.set)
    done.wait()
```

Stopping a pool lets running tasks finish; tasks still waiting in the queue
are not run.

```python
from cooperutil import logger

logger.info("server started on port ", 8080)
```

```python
from cooperutil.utilities import find_content_type, verify_ssl_name

find_content_type("index.html")                         # "text/html"
verify_ssl_name("*.example.com", "www.example.com")     # True
```

## What it does not do

- Log messages are written on the caller's thread; there is no background
  writer thread.
- `TLSPolicy` only describes settings; the package opens no connections and
  performs no TLS handshakes.
- There is no command-line program.

## Running the tests

```
pip install .[test]
pytest
```