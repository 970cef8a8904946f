# meshkit

Building blocks for a mesh networking node:

- `meshkit.bytes`: `Bytes`, a mutable byte buffer with hex conversion,
  substring helpers (`left`, `right`, `mid`, `find`) and ordering, plus the
  helpers `bytes_from_string`, `string_from_bytes`, `hex_from_bytes` and
  `hex_from_byte`.
- `meshkit.filesystem`: `FileSystem`, which reads, writes, renames and removes
  files and directories on the local disk, and opens files as a `FileStream`
  in a `FileMode` (`READ`, `WRITE`, `APPEND`).
- `meshkit.udp_interface`: `UDPInterface`, which sends datagrams to one remote
  address and receives them on a bound local port.

There are no third-party dependencies.

## Install

```
pip install .
```

## Bytes

`Bytes` accepts another `Bytes`, `bytes`, `bytearray`, `memoryview`, a `str`
(encoded as UTF-8) or `None` (empty). Building a `Bytes` from another one
makes an independent copy.

```python
from meshkit.bytes import Bytes, bytes_from_string

greeting = Bytes("Hello") + Bytes(" World")
print(greeting.to_hex(upper=True))      # 48656C6C6F20576F726C64
print(greeting.mid(3, 5).to_string())   # lo Wo
print(greeting.left(5).to_string())     # Hello
print(greeting.right(5).to_string())    # World
print(greeting.find("ll"))              # 2

copy = Bytes(greeting)
copy.append("!")            # greeting is unchanged

buf = Bytes()
buf << Bytes("H") << 32 << "llo"   # `<<` appends in place; ints are single bytes
print(buf.to_string())             # H llo

decoded = Bytes.from_hex("48656c6c6f")
assert decoded == bytes_from_string("Hello")
```

Out-of-range slices are cut short rather than raising: `left` and `right`
with a length past the end return the whole buffer, and `mid` with a start
past the end returns an empty buffer. `find` returns `-1` when the needle is
absent or the start position is out of range. `compare` returns `-1`, `0` or
`1`, and the usual comparison operators work against `Bytes`, `bytes` and
`str`. A `Bytes` is hashable by its current content, so it can key a `dict`.

`Bytes(capacity=n)` reserves room without adding content; `writable(size)`
resizes to `size` bytes (zero-filled) and returns the underlying `bytearray`
for in-place writing, and `resize` truncates or grows the buffer.

## Files

```python
from meshkit.bytes import Bytes
from meshkit.filesystem import FileMode, FileSystem

fs = FileSystem()
fs.init()

fs.write_file("./greeting", Bytes("test"))      # returns 4
print(fs.read_file("./greeting").to_string())   # test
fs.remove_file("./greeting")

stream = fs.open_file("./stream", FileMode.WRITE)
if stream is not None:
    with stream:
        stream.write(Bytes("stream"))

with fs.open_file("./stream", FileMode.READ) as stream:
    print(stream.read_bytes(stream.size()).to_string())   # stream
```

Failures are reported through return values and the `meshkit.filesystem`
logger rather than exceptions: `read_file` returns an empty `Bytes`,
`write_file` returns `0`, `open_file` returns `None`, and the remove, rename
and directory methods return `False`. `open_file` raises `ValueError` only
when given something that is not a `FileMode`.

A `FileStream` reads one byte at a time with `read` and `peek` (both return
`-1` at the end), reads runs with `read_bytes`, writes a byte value or a run
of bytes with `write`, and closes on leaving a `with` block.

`list_directory` returns the sorted names of the plain files in a directory;
`FileSystem.list_dir` returns `DIR: name` / `FILE: name` lines for every
entry. `storage_size` and `storage_available` report the disk holding the
working directory.

## UDP

```python
from meshkit.udp_interface import UDPInterface

def on_incoming(data):
    print("received", data.to_hex())

udp = UDPInterface("udp", incoming_handler=on_incoming)
udp.start(port=4242, local_host="127.0.0.1", remote_host="127.0.0.1")
udp.send_outgoing(b"hello")   # returns the number of bytes sent
udp.loop()                    # call regularly; returns the Bytes received or None
udp.stop()
```

`start` binds the local socket with broadcast enabled and uses the same port
for sending and receiving. It raises `OSError` if a host cannot be resolved
or the socket cannot be bound. Defaults are local host `0.0.0.0`, remote host
`192.168.56.91` and port `4242`. `loop` never blocks: it takes at most one
waiting datagram and passes it to the handler. `send_outgoing` returns `0`
when the interface is offline or the send fails.

## What it does not do

meshkit moves raw bytes only. It has no packet format, routing, announces,
identities or encryption, and `UDPInterface` hands each datagram to the
handler exactly as it arrived. There is no command-line program; the pieces
are meant to be used from your own code.

## Tests

```
pip install .[test]
pytest
```