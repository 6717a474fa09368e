# netlabs

A collection of small command-line networking and systems tools. Each
tool can be run as a command or imported as a module.

The package needs only the standard library at runtime.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

### SHA-512 state inspector

```
netlabs-sha512
```

Prompts for a line of text, then for a round number from 0 to 79. It
prints up to that many of the eight 64-bit state words after hashing the
text, and then the same words joined as one hex string. A round number
outside 0 to 79, or input that is not a number, is rejected and the
command exits with status 1.

The block padding is the tool's own, so it differs from standard SHA-512
in some cases. A final partial block gets the `0x80` marker. It gets the
bit length only when it is shorter than 112 bytes. A message whose length
is a multiple of 128 bytes gets no padding block, and an empty message
leaves the initial state unchanged.

### Lexical analyser

```
netlabs-lexer
netlabs-lexer "int x = y + 42"
```

Tokenizes each expression given on the command line. With no arguments,
it tokenizes two built-in sample expressions. Each token is printed as
`Token: <kind>, Value: <text>`. The kind is one of Operator, Keyword,
Integer, Identifier or Unidentified.

### Static HTML server

```
netlabs-http [--port 8080] [--page index.html]
```

Listens on the given port, 8080 by default. It answers every connection
with the page file, by default `index.html` in the current directory,
sent after an `HTTP/1.1 200 OK` header with type `text/html`. It then
closes the connection. The request itself is not read.

### UDP greeting

```
netlabs-udp-server 9000
netlabs-udp-client 9000
```

The server binds to 127.0.0.1 on the given port, waits for one datagram,
prints it and exits. The client sends `Hello Server` to 127.0.0.1 on that
port in a 1024-byte datagram.

### Chat

```
netlabs-chat-server [--port 8888]
netlabs-chat-client [--host 127.0.0.1] [--port 8888]
```

The server accepts up to ten clients and relays every message from one
client to all the others. The client sends each line typed on standard
input and prints what the others send, prefixed with `Received:`. The
client stops at end of input.

### Networked tic-tac-toe

```
netlabs-ttt-server 5000
netlabs-ttt-client localhost 5000
```

The server pairs connecting players two at a time and runs each game in
its own thread. The first player plays O and the second plays X. On your
turn, enter a position from 0 to 8, counted row by row. Enter 9 to ask
how many players are active.

### Ping with ICMP flood monitoring

```
sudo netlabs-ping 192.0.2.1
```

Sends one ICMP echo request per second to an IPv4 address and reports
replies and timeouts. The receive timeout is five seconds. A background
monitor reads `/proc/net/snmp`. It warns on standard error when more than
100 incoming ICMP messages arrive in a five-second window. Press Ctrl+C,
or send SIGTERM, to stop and print a summary of packets sent, received
and lost.

The command needs a raw socket, so it must run as root or with
`CAP_NET_RAW`.

### TCP port forwarder

```
netlabs-forward 8080 example.com 80
```

Listens on the first port and forwards every connection, in both
directions, to the given host and port. If the forward port is left out,
the listen port is used.

## Library use

```python
from netlabs.sha512 import digest_state, format_report
from netlabs.lexer import tokenize, format_token
from netlabs.board import Board

state = digest_state("abc")
print(format_report(state, 8), end="")

for token in tokenize("int a = b + c"):
    print(format_token(token))

board = Board()
board.place(4, 1)
print(board.render(), end="")
```

The other modules expose their pieces in the same way:

- `netlabs.protocol`: the tic-tac-toe `Message` codes, plus
  `send_int`/`recv_int` and `send_message`/`recv_message`.
  `ConnectionClosed` is raised on a short read.
- `netlabs.tictactoe_server.GameServer` and
  `netlabs.tictactoe_client.play`: the game server and client loop.
- `netlabs.chat.ChatServer`: a chat server you can drive one event at a
  time with `step()`.
- `netlabs.udp`: `open_server`, `receive_message` and `send_greeting`.
- `netlabs.httpserver`: `open_server`, `serve` and `send_html`.
- `netlabs.ping`: `checksum`, `build_echo_request`, `parse_echo_reply`,
  `PingStats` and `FloodMonitor`.
- `netlabs.portforward`: `parse_arguments`, `pump` and the forwarding
  helpers.

## Limits

- `netlabs-ping` takes a dotted IPv4 address only. It does not resolve
  host names and does not support IPv6.
- The HTTP server always sends the same page, whatever path is requested.
- The UDP tools exchange a single datagram and then exit.