#!/usr/bin/env python3
import argparse
import socket
import sys
import os

# Add project root directory to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from netbuf.buffered_io import BufferedStream
from netbuf.channel import SocketChannel
from netbuf.log import setup_logging
from netbuf.selector_loop import StreamSelector
from netbuf.stream_config import StreamConfig

def server(address, config):
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    listener.bind(address)
    listener.listen(1)
    print(f"listening on {address}")

    conn, addr = listener.accept()
    listener.close()
    print(f"Connection established with {addr}")

    stream = BufferedStream(SocketChannel(conn), config)
    selector = StreamSelector()
    selector.register(stream)
    # echo everything back until the client goes away
    while selector.streams():
        for ready in selector.process(timeout=1.0):
            ready.enqueue(ready.read_available())
    stream.channel.close()
    print("client closed the connection")

def client(address, config, message):
    sock = socket.create_connection(address)
    stream = BufferedStream(SocketChannel(sock), config)
    stream.enqueue(message.encode())
    stream.wait_for_pending_sends()

    selector = StreamSelector()
    selector.register(stream)
    received = b''
    expected = len(message.encode())
    while len(received) < expected and selector.streams():
        for ready in selector.process(timeout=1.0):
            received += ready.read_available()
    print(f"echoed: {received.decode(errors='replace')}")
    stream.channel.close()

def main():
    parser = argparse.ArgumentParser(description="Echo bytes through buffered non-blocking streams.")
    parser.add_argument('role', choices=['server', 'client'], help="Role to play: server or client")
    parser.add_argument('--host', default="127.0.0.1")
    parser.add_argument('--port', type=int, default=8080)
    parser.add_argument('--message', default="Hello, world!")
    parser.add_argument('--debug', action='store_true', help="Log every fill and send")
    args = parser.parse_args()

    setup_logging(debug=args.debug)
    config = StreamConfig(debug=args.debug)
    address = (args.host, args.port)

    if args.role == 'server':
        print("Running as server")
        server(address, config)
    elif args.role == 'client':
        print("Running as client")
        client(address, config, args.message)

if __name__ == "__main__":
    main()
