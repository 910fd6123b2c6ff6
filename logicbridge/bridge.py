# Program: Logicbridge Device Bridge
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Own the serial connection and turn its output into published records."""

from __future__ import annotations

import codecs
import logging
import threading
from typing import Callable, Optional, Protocol

import serial

from .dispatch import RecordDispatcher
from .encoder import encode_command
from .errors import CaptureInProgressError, ConnectionLostError, DeviceNotReadyError
from .framing import LineFramer
from .models import Configuration, SampleRecord
from .protocol import ProtocolParser

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
DEFAULT_BOOT_GRACE_S = 3.0
READ_CHUNK = 256


class DeviceLink(Protocol):
    """Minimal byte stream of an open device connection (e.g., serial)."""

    def read(self, size: int = 1) -> bytes:  # pragma: no cover - transport specific
        ...

    def write(self, data: bytes) -> Optional[int]:  # pragma: no cover - transport specific
        ...

    def close(self) -> None:  # pragma: no cover - transport specific
        ...


def open_serial(url: str, baudrate: int = DEFAULT_BAUDRATE, timeout: float = 0.1) -> serial.SerialBase:
    """Open the device at ``url`` (a tty path, COM port or pyserial URL) as 8N1."""
    logger.info("Opening device %s at %d baud", url, baudrate)
    return serial.serial_for_url(
        url,
        baudrate=baudrate,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_NONE,
        stopbits=serial.STOPBITS_ONE,
        xonxoff=False,
        rtscts=False,
        timeout=timeout,
    )


class DeviceBridge:
    """Single bridge between one device link and the record dispatcher.

    Reads are processed strictly in arrival order on one thread. Commands are
    rejected, never queued, until the device is ready and the previous
    capture has been published.
    """

    def __init__(
        self,
        link: DeviceLink,
        dispatcher: RecordDispatcher,
        on_fatal: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        self.link = link
        self.dispatcher = dispatcher
        self.on_fatal = on_fatal
        self.framer = LineFramer()
        self.parser = ProtocolParser()
        self.failure: Optional[BaseException] = None
        self._decoder = codecs.getincrementaldecoder("ascii")(errors="replace")
        self._awaiting_record = False
        self._command_lock = threading.Lock()
        self._ready_event = threading.Event()
        self._stop = threading.Event()
        self._reader: Optional[threading.Thread] = None

    @property
    def ready(self) -> bool:
        return self.parser.ready

    @property
    def capturing(self) -> bool:
        return self.parser.capturing

    @property
    def busy(self) -> bool:
        return self._awaiting_record or self.parser.capturing

    def feed(self, data: bytes) -> None:
        """Consume raw bytes from the device."""
        text = self._decoder.decode(data)
        for line in self.framer.feed(text):
            record = self.parser.feed_line(line)
            if self.parser.ready:
                self._ready_event.set()
            if record is not None:
                self._dispatch(record)

    def _dispatch(self, record: SampleRecord) -> None:
        try:
            self.dispatcher.publish(record)
        finally:
            self._awaiting_record = False

    def send_command(self, command: str) -> None:
        """Write one command to the device, or refuse it without any I/O."""
        with self._command_lock:
            if self.failure is not None:
                raise ConnectionLostError(f"Device connection failed: {self.failure}")
            if not self.ready:
                raise DeviceNotReadyError('Device has not sent "initialized" yet')
            if self.busy:
                raise CaptureInProgressError("A capture is already in progress")
            self._awaiting_record = True
        logger.info("Command: %s", command)
        try:
            self.link.write(command.encode("ascii"))
        except (serial.SerialException, OSError) as exc:
            self._awaiting_record = False
            self._fail(exc)
            raise ConnectionLostError(f"Device connection failed: {exc}") from exc

    def start(self, cfg: Configuration) -> str:
        """Encode ``cfg`` and send it; return the command written."""
        command = encode_command(cfg)
        self.send_command(command)
        return command

    def wait_until_ready(self, grace_s: float = DEFAULT_BOOT_GRACE_S) -> bool:
        """Give the device up to ``grace_s`` seconds to boot; never fails."""
        logger.info("Waiting up to %.1fs for the device to initialize...", grace_s)
        if self._ready_event.wait(grace_s):
            return True
        logger.warning("Device did not report ready within %.1fs; commands stay refused until it does", grace_s)
        return False

    def run(self) -> None:
        """Reader loop: block on the link and feed every chunk in order."""
        while not self._stop.is_set():
            try:
                data = self.link.read(READ_CHUNK)
            except (serial.SerialException, OSError) as exc:
                if not self._stop.is_set():
                    self._fail(exc)
                return
            if data:
                self.feed(data)

    def start_reader(self) -> threading.Thread:
        if self._reader is None:
            self._reader = threading.Thread(target=self.run, name="device-reader", daemon=True)
            self._reader.start()
        return self._reader

    def _fail(self, exc: BaseException) -> None:
        self.failure = exc
        self._stop.set()
        logger.critical("Device connection failed: %s", exc)
        try:
            self.link.close()
        finally:
            if self.on_fatal is not None:
                self.on_fatal(exc)

    def close(self) -> None:
        self._stop.set()
        self.link.close()
        if self._reader is not None and self._reader is not threading.current_thread():
            self._reader.join(timeout=1.0)


# Created by Dr. Z. Bakhtiyorov
