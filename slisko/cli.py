"""Command line entry point: load a chassis, run patterns, API and output."""

from __future__ import annotations

import argparse
import contextlib
import logging
import queue
import signal
import socket
import struct
import threading
import time
from collections.abc import Sequence
from typing import Any

from slisko.api import run_api
from slisko.chassis import Chassis, cards_from_definition
from slisko.configuration import ChassisDefinition, load_from_file
from slisko.controller import Controller
from slisko.output import Device, NullDevice, Output, gen_empty
from slisko.wledapa import WledApa

log = logging.getLogger("slisko")


class _DdpSender:
    """Sends RGB frames as DDP packets over UDP."""

    PORT = 4048
    MAX_PAYLOAD = 1440

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._sequence = 0

    @classmethod
    def connect(cls, host: str) -> _DdpSender:
        if not host:
            raise ValueError("DDP output needs a host (--ddphost)")
        name, sep, port = host.rpartition(":")
        address = (name, int(port)) if sep and port.isdigit() else (host, cls.PORT)
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.connect(address)
        except OSError:
            sock.close()
            raise
        return cls(sock)

    def write(self, data: bytes) -> int:
        self._sequence = self._sequence % 15 + 1
        for offset in range(0, len(data), self.MAX_PAYLOAD):
            chunk = data[offset : offset + self.MAX_PAYLOAD]
            last = offset + self.MAX_PAYLOAD >= len(data)
            flags = 0x40 | (0x01 if last else 0x00)
            header = struct.pack(">BBBBIH", flags, self._sequence, 0x01, 0x01, offset, len(chunk))
            self._sock.send(header + chunk)
        return len(data)

    def close(self) -> None:
        self._sock.close()


class _DdpDevice(Device):
    def __init__(self, target: WledApa) -> None:
        self._target = target

    def write(self, pixels: bytes) -> int:
        return self._target.write(pixels)

    def close(self) -> None:
        self._target.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slisko", description="Drive chassis LED patterns.")
    parser.add_argument(
        "--config", default="configurations/9010.toml", help="configuration file"
    )
    parser.add_argument("--ddp", action="store_true", help="enables DDP output")
    parser.add_argument("--ddphost", default="", help="ddp host")
    parser.add_argument("--fps", type=int, default=60, help="override the FPS")
    parser.add_argument(
        "--leds", type=int, default=132, help="number of leds when the configuration gives none"
    )
    parser.add_argument("--listen", default="0.0.0.0:3000", help="API listen address")
    return parser


def _select_device(args: argparse.Namespace) -> Device:
    if args.ddp:
        return _DdpDevice(WledApa(_DdpSender.connect(args.ddphost)))
    return NullDevice()


def _build_output(
    definition: ChassisDefinition,
    chassis: Chassis,
    num_leds: int,
    device: Device,
    trigger: queue.Queue[Any],
) -> Output:
    output = Output(num_leds, device, trigger)
    for entry in definition.mapping:
        if entry.gen is not None:
            output.map(gen_empty(entry.gen))
        if entry.card is not None:
            if not 0 <= entry.card < len(chassis.line_cards):
                raise ValueError(
                    f"mapping refers to card {entry.card}, chassis has "
                    f"{len(chassis.line_cards)}"
                )
            output.map(chassis.line_cards[entry.card].leds)
    return output


def _interrupt(signum: int, frame: Any) -> None:
    raise KeyboardInterrupt


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not 1 <= args.fps <= 1000:
        parser.error("--fps must be between 1 and 1000")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    log.info("Started Slisko Controller")

    try:
        definition = load_from_file(args.config)
    except (OSError, ValueError) as exc:
        log.error("could not load configuration %s: %s", args.config, exc)
        return 1

    num_leds = definition.led_amount or args.leds
    chassis = Chassis(cards_from_definition(definition.linecards))
    log.info(
        "Created a new chassis: %s (%d cards)", chassis.card_order(), len(chassis.line_cards)
    )
    controller = Controller(chassis)
    trigger = controller.frame_broker.subscribe()

    try:
        device = _select_device(args)
    except (OSError, ValueError) as exc:
        log.error("could not open output device: %s", exc)
        return 1
    try:
        output = _build_output(definition, chassis, num_leds, device, trigger)
    except ValueError as exc:
        log.error("invalid mapping: %s", exc)
        device.close()
        return 1

    controller.start(args.fps)
    for name in definition.patterns:
        controller.enable_pattern(name)

    threading.Thread(
        target=run_api, args=(chassis, controller, args.listen), name="api", daemon=True
    ).start()
    output_thread = threading.Thread(target=output.run, name="output", daemon=True)
    output_thread.start()

    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = signal.signal(signal.SIGTERM, _interrupt)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        log.info("Shutting down")
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)

    controller.stop()
    controller.frame_broker.stop()
    controller.frame_broker.unsubscribe(trigger)
    with contextlib.suppress(queue.Full):
        trigger.put(None, timeout=1)
    output_thread.join(timeout=1)
    output.clear()
    output.close()
    return 0