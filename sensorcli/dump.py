"""Export of a device's register contents as JSON, CSV or a hex listing."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

from sensorcli.i2c import I2CError, open_device

PathLike = Union[str, Path]


@dataclass
class RegisterData:
    """Register values read from one device, keyed by register name."""

    device_addr: int
    start_register: int
    timestamp: str
    data: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping with the registers in sorted order."""
        return {
            "device_addr": self.device_addr,
            "start_register": self.start_register,
            "timestamp": self.timestamp,
            "data": dict(sorted(self.data.items())),
        }


def _register_name(reg: int) -> str:
    return f"0x{reg & 0xFF:02X}"


def _now_rfc3339() -> str:
    stamp = datetime.now().astimezone().replace(microsecond=0).isoformat()
    if stamp.endswith("+00:00"):
        stamp = stamp[: -len("+00:00")] + "Z"
    return stamp


def build_register_data(
    addr: int,
    start_reg: int,
    values: Iterable[int],
    timestamp: Optional[str] = None,
) -> RegisterData:
    """Collect ``values`` read from consecutive registers starting at ``start_reg``.

    Register numbers wrap around at 0xFF, so later values replace earlier
    ones under the same name.
    """
    record = RegisterData(
        device_addr=addr,
        start_register=start_reg,
        timestamp=timestamp if timestamp is not None else _now_rfc3339(),
    )
    for offset, value in enumerate(values):
        record.data[_register_name(start_reg + offset)] = value
    return record


def format_json(data: RegisterData) -> str:
    """Render the record as indented JSON."""
    return json.dumps(data.to_dict(), indent=2, ensure_ascii=False)


def format_csv(data: RegisterData) -> str:
    """Render the record as CSV with one row per register."""
    rows = ["Register,Value,Decimal"]
    rows.extend(f"{reg},0x{value:02X},{value}" for reg, value in data.data.items())
    return "\n".join(rows) + "\n"


def format_hex(data: RegisterData) -> str:
    """Render the record as a readable hex listing."""
    lines = [
        f"Device address: 0x{data.device_addr:02X}",
        f"Start register: 0x{data.start_register:02X}",
        f"Timestamp: {data.timestamp}",
        "Data:",
    ]
    lines.extend(f"  {reg}: 0x{value:02X} ({value})" for reg, value in data.data.items())
    return "\n".join(lines) + "\n"


_FORMATTERS: dict[str, Callable[[RegisterData], str]] = {
    "json": format_json,
    "csv": format_csv,
    "hex": format_hex,
}


def dump_registers(
    bus: int,
    addr: int,
    reg: int,
    count: int = 16,
    fmt: str = "json",
    output: Optional[PathLike] = None,
) -> str:
    """Read ``count`` registers and write them to ``output`` or stdout.

    Returns the rendered text.
    """
    try:
        device = open_device(bus, addr)
    except I2CError as exc:
        raise I2CError(f"failed to open I2C device: {exc}") from exc

    with device:
        try:
            values = device.read_bytes(reg, count)
        except I2CError as exc:
            raise I2CError(f"failed to read data: {exc}") from exc

    record = build_register_data(addr, reg, values)

    formatter = _FORMATTERS.get(fmt)
    if formatter is None:
        raise ValueError(f"unsupported output format: {fmt}")
    text = formatter(record)

    if output:
        Path(output).write_text(text, encoding="utf-8")
    else:
        print(text, end="" if text.endswith("\n") else "\n")
    return text