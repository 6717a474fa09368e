[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netlabs"
version = "0.1.0"
description = "Small networking and systems tools: a SHA-512 state inspector, a C-like lexer, HTTP, UDP, chat, tic-tac-toe, ping and a TCP port forwarder"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "networking",
    "sockets",
    "sha512",
    "lexer",
    "chat",
    "tic-tac-toe",
    "ping",
    "icmp",
    "port-forwarding",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Security :: Cryptography",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netlabs-sha512 = "netlabs.sha512:main"
netlabs-lexer = "netlabs.lexer:main"
netlabs-http = "netlabs.httpserver:main"
netlabs-udp-server = "netlabs.udp:server_main"
netlabs-udp-client = "netlabs.udp:client_main"
netlabs-chat-server = "netlabs.chat:server_main"
netlabs-chat-client = "netlabs.chat:client_main"
netlabs-ttt-server = "netlabs.tictactoe_server:main"
netlabs-ttt-client = "netlabs.tictactoe_client:main"
netlabs-ping = "netlabs.ping:main"
netlabs-forward = "netlabs.portforward:main"

[tool.hatch.build.targets.wheel]
packages = ["netlabs"]

[tool.pytest.ini_options]
addopts = "-ra"
