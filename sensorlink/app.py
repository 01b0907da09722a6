"""Command that runs the collection server and reports periodic statistics."""

from __future__ import annotations

import select
import signal
import sys
import time
from collections.abc import Callable, MutableSequence, Sequence
from typing import TextIO

from sensorlink.records import unpack_readings
from sensorlink.server import DEFAULT_PORT, Server
from sensorlink.stats import CHANNEL_NAMES, collect_channels, format_stats_table, is_text

DEFAULT_INTERVAL = 60


def _ask(prompt: str, input_func: Callable[[], str], out: TextIO) -> str:
    out.write(prompt)
    out.flush()
    try:
        return input_func().strip()
    except EOFError:
        return ""


def resolve_settings(
    argv: Sequence[str],
    input_func: Callable[[], str] = input,
    out: TextIO = sys.stdout,
    err: TextIO = sys.stderr,
) -> tuple[int, int]:
    """Work out (port, interval seconds) from arguments, prompting for missing ones."""
    port = DEFAULT_PORT
    interval = DEFAULT_INTERVAL

    if len(argv) > 0:
        value = int(argv[0])
        if value > 0:
            port = value
        else:
            err.write(f"Puerto inválido. Usando {port}\n")
    if len(argv) > 1:
        value = int(argv[1])
        if value > 0:
            interval = value
        else:
            err.write(f"Intervalo inválido. Usando {interval}\n")

    if len(argv) <= 0:
        answer = _ask(f"Puerto UDP [Enter={port}]: ", input_func, out)
        if answer and (value := int(answer)) > 0:
            port = value
    if len(argv) <= 1:
        answer = _ask(f"Intervalo cálculo [s] [Enter={interval}]: ", input_func, out)
        if answer and (value := int(answer)) > 0:
            interval = value

    return port, interval


def handle_datagram(
    packet: bytes, period_columns: Sequence[MutableSequence[float]], out: TextIO
) -> str:
    """Process one datagram, add its samples to the period, and return the reply."""
    if packet and is_text(packet):
        out.write(f"[Server] Texto: {packet.decode('ascii')}\n")
        return "ACK: Text"

    tcs, mpu = unpack_readings(packet)
    columns = collect_channels(tcs, mpu)
    out.write("[Server] Estadísticas paquete entrante:\n")
    out.write(format_stats_table(CHANNEL_NAMES, columns))
    for period, values in zip(period_columns, columns):
        period.extend(values)
    return "ACK: OK"


def _report_period(
    interval: float, period_columns: list[list[float]], out: TextIO
) -> None:
    out.write(f"\n== Estadísticas período de {interval:g} s ==\n")
    if all(not column for column in period_columns):
        out.write("-       NO DATA RECEIVED       -\n\n")
    else:
        out.write(format_stats_table(CHANNEL_NAMES, period_columns))
    for column in period_columns:
        column.clear()
    out.flush()


def serve(server: Server, interval: float, out: TextIO = sys.stdout) -> None:
    """Answer datagrams and print statistics every ``interval`` seconds.

    Returns when waiting on the server socket fails, for instance once it is closed.
    """
    period_columns: list[list[float]] = [[] for _ in CHANNEL_NAMES]
    next_period = time.monotonic() + interval

    while True:
        now = time.monotonic()
        if now >= next_period:
            _report_period(interval, period_columns, out)
            next_period = time.monotonic() + interval
            continue

        try:
            ready, _, _ = select.select([server], [], [], max(next_period - now, 0.0))
        except (OSError, ValueError) as exc:
            print(f"select: {exc}", file=sys.stderr)
            break
        if not ready:
            continue

        try:
            packet = server.receive_binary_message()
        except OSError as exc:
            print(f"recvfrom bin: {exc}", file=sys.stderr)
            continue

        reply = handle_datagram(packet, period_columns, out)
        out.flush()
        try:
            server.send_reply(reply)
        except OSError as exc:
            print(f"sendto: {exc}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        port, interval = resolve_settings(argv, input, sys.stdout, sys.stderr)
    except ValueError as exc:
        print(f"Invalid number: {exc}", file=sys.stderr)
        return 2

    try:
        server = Server(port)
    except OSError as exc:
        print(f"bind failed: {exc}", file=sys.stderr)
        return 1

    with server:
        print(f"[Server] Arrancado en puerto {port}. Cálculo cada {interval} s.")
        try:
            serve(server, interval, sys.stdout)
        except KeyboardInterrupt:
            print(
                f"\n[Server] Caught signal {int(signal.SIGINT)}, "
                "closing socket and exiting."
            )
    return 0