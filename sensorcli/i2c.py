"""I2C device access with a simulated register-map backend."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, TypeVar, Union

T = TypeVar("T")

MIN_ADDRESS = 0x03
MAX_ADDRESS = 0x77


class I2CError(Exception):
    """Raised when an I2C operation fails."""


@dataclass
class DeviceConfig:
    """Settings used to open a device. Timeout is in seconds."""

    bus: int = 1
    address: int = 0
    timeout: float = 1.0
    retries: int = 3
    mock_mode: bool = True


def default_device_config() -> DeviceConfig:
    """Return the default device settings."""
    return DeviceConfig()


def _check_byte(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be an integer in 0..255, got {value!r}")
    return value


class Device(ABC):
    """An open I2C device addressed by register."""

    @abstractmethod
    def read_register(self, reg: int) -> int:
        """Read one register."""

    @abstractmethod
    def write_register(self, reg: int, value: int) -> None:
        """Write one register."""

    @abstractmethod
    def read_bytes(self, reg: int, count: int) -> bytes:
        """Read ``count`` consecutive registers starting at ``reg``."""

    @abstractmethod
    def write_bytes(self, reg: int, data: Union[bytes, Iterable[int]]) -> None:
        """Write consecutive registers starting at ``reg``."""

    @abstractmethod
    def close(self) -> None:
        """Release the device."""

    @property
    @abstractmethod
    def address(self) -> int:
        """The device's bus address."""

    @property
    @abstractmethod
    def bus(self) -> int:
        """The bus number."""

    def __enter__(self) -> "Device":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MockDevice(Device):
    """An in-memory device whose unset registers read as zero."""

    def __init__(self, config: DeviceConfig) -> None:
        self._config = config
        self._registers: dict[int, int] = {}
        self._lock = threading.RLock()
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise I2CError("device is closed")

    def read_register(self, reg: int) -> int:
        self._ensure_open()
        _check_byte("register", reg)
        with self._lock:
            return self._registers.get(reg, 0)

    def write_register(self, reg: int, value: int) -> None:
        self._ensure_open()
        _check_byte("register", reg)
        _check_byte("value", value)
        with self._lock:
            self._registers[reg] = value

    def read_bytes(self, reg: int, count: int) -> bytes:
        self._ensure_open()
        _check_byte("register", reg)
        if count <= 0:
            raise I2CError(f"invalid byte count: {count}")
        with self._lock:
            return bytes(
                self._registers.get((reg + offset) & 0xFF, 0) for offset in range(count)
            )

    def write_bytes(self, reg: int, data: Union[bytes, Iterable[int]]) -> None:
        self._ensure_open()
        _check_byte("register", reg)
        payload = bytes(data)
        if not payload:
            raise I2CError("no data to write")
        with self._lock:
            for offset, value in enumerate(payload):
                self._registers[(reg + offset) & 0xFF] = value

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._registers = {}

    @property
    def address(self) -> int:
        return self._config.address

    @property
    def bus(self) -> int:
        return self._config.bus

    @property
    def registers(self) -> dict[int, int]:
        """A snapshot of every register that has been written."""
        with self._lock:
            return dict(self._registers)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed


def open_device(bus: int, addr: int) -> Device:
    """Open the device at ``addr`` on ``bus`` using default settings."""
    return open_with_config(replace(default_device_config(), bus=bus, address=addr))


def open_with_config(config: Optional[DeviceConfig]) -> Device:
    """Validate the settings and open a device with them."""
    if config is None:
        config = default_device_config()

    if not MIN_ADDRESS <= config.address <= MAX_ADDRESS:
        raise I2CError(
            f"invalid I2C address: 0x{config.address:02X} "
            f"(valid range: 0x{MIN_ADDRESS:02X}-0x{MAX_ADDRESS:02X})"
        )
    if config.bus < 0:
        raise I2CError(f"invalid bus number: {config.bus}")

    return MockDevice(config)


def with_timeout(timeout: float, fn: Callable[[], T]) -> T:
    """Run ``fn`` and return its result, failing if it takes longer than ``timeout`` seconds."""
    if timeout <= 0:
        timeout = 1.0

    outcome: dict[str, object] = {}
    done = threading.Event()

    def runner() -> None:
        try:
            outcome["value"] = fn()
        except BaseException as exc:  # handed back to the caller below
            outcome["error"] = exc
        finally:
            done.set()

    threading.Thread(target=runner, daemon=True).start()
    if not done.wait(timeout):
        raise I2CError(f"operation timed out after {timeout}s")
    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["value"]  # type: ignore[return-value]


def with_retry(max_retries: int, fn: Callable[[], T]) -> T:
    """Call ``fn`` up to ``max_retries + 1`` times with exponential backoff."""
    last_error: Optional[Exception] = None
    for attempt in range(max_retries + 1):
        try:
            return fn()
        except Exception as exc:
            last_error = exc
            if attempt < max_retries:
                time.sleep((1 << attempt) * 0.010)
    raise I2CError(
        f"operation failed after {max_retries} retries: {last_error}"
    ) from last_error