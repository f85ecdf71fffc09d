"""Command-line interface for debugging I2C sensors."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence

from sensorcli import dump as dump_module
from sensorcli.config import (
    ConfigError,
    default_config,
    default_config_path,
    load_config,
    save_config,
)
from sensorcli.i2c import MAX_ADDRESS, MIN_ADDRESS, Device, I2CError, open_device

VERSION = "1.0.0"

_DESCRIPTION = """\
SensorCLI is a cross-platform I2C sensor debugging tool.

Features:
  - I2C device scanning
  - register read and write
  - data export (JSON/CSV/HEX)

Examples:
  sensorcli scan --bus 1
  sensorcli read --addr 0x48 --reg 0x01 --bus 1
  sensorcli write --addr 0x48 --reg 0x02 --value 0x55 --bus 1
  sensorcli dump --addr 0x48 --reg 0x00 --count 16 --format json"""


def parse_byte(text: str) -> int:
    """Parse an unsigned 8-bit number written in decimal, hex, octal or binary."""
    cleaned = text.strip()
    try:
        value = int(cleaned, 0)
    except ValueError:
        if cleaned.startswith("0") and cleaned.isdigit():
            try:
                value = int(cleaned, 8)
            except ValueError:
                raise argparse.ArgumentTypeError(f"invalid byte value: {text!r}") from None
        else:
            raise argparse.ArgumentTypeError(f"invalid byte value: {text!r}") from None
    if not 0 <= value <= 0xFF:
        raise argparse.ArgumentTypeError(f"value out of range 0-255: {text!r}")
    return value


def _parse_hex_byte(text: str) -> int:
    cleaned = text.strip()
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    try:
        value = int(cleaned, 16)
    except ValueError:
        raise ValueError(f"failed to parse data {text}: not a hex number") from None
    if not 0 <= value <= 0xFF:
        raise ValueError(f"failed to parse data {text}: integer overflow")
    return value


def _open(bus: int, addr: int) -> Device:
    try:
        return open_device(bus, addr)
    except I2CError as exc:
        raise I2CError(f"failed to open I2C device: {exc}") from exc


def read_register(bus: int, addr: int, reg: int, count: int = 1) -> bytes:
    """Read and print one or more registers; return the bytes read."""
    with _open(bus, addr) as device:
        if count == 1:
            try:
                value = device.read_register(reg)
            except I2CError as exc:
                raise I2CError(f"failed to read register: {exc}") from exc
            print(f"Device 0x{addr:02X} register 0x{reg:02X} value: 0x{value:02X} ({value})")
            return bytes([value])

        try:
            values = device.read_bytes(reg, count)
        except I2CError as exc:
            raise I2CError(f"failed to read data: {exc}") from exc

    print(f"Device 0x{addr:02X} register 0x{reg:02X}, {count} bytes:")
    for offset, value in enumerate(values):
        print(f"  0x{(reg + offset) & 0xFF:02X}: 0x{value:02X} ({value})")
    return values


def write_register(
    bus: int,
    addr: int,
    reg: int,
    value: int = 0,
    data: Optional[Iterable[str]] = None,
) -> bytes:
    """Write one value, or a list of hex strings, and print what was written."""
    items = list(data) if data else []
    with _open(bus, addr) as device:
        if not items:
            try:
                device.write_register(reg, value)
            except I2CError as exc:
                raise I2CError(f"failed to write register: {exc}") from exc
            print(f"Wrote device 0x{addr:02X} register 0x{reg:02X}: 0x{value:02X} ({value})")
            return bytes([value])

        payload = bytes(_parse_hex_byte(item) for item in items)
        try:
            device.write_bytes(reg, payload)
        except I2CError as exc:
            raise I2CError(f"failed to write data: {exc}") from exc

    print(f"Wrote device 0x{addr:02X} register 0x{reg:02X}, {len(payload)} bytes:")
    for offset, byte in enumerate(payload):
        print(f"  0x{(reg + offset) & 0xFF:02X}: 0x{byte:02X} ({byte})")
    return payload


def scan_devices(bus: int = 1) -> list[int]:
    """Probe every usable address on ``bus`` and return those that respond."""
    print(f"Scanning I2C bus {bus}...")
    found: list[int] = []
    for addr in range(MIN_ADDRESS, MAX_ADDRESS + 1):
        try:
            device = open_device(bus, addr)
        except I2CError:
            continue
        with device:
            try:
                device.read_register(0x00)
            except I2CError:
                continue
        print(f"Found device: 0x{addr:02X}")
        found.append(addr)

    if found:
        print(f"Found {len(found)} I2C device(s)")
    else:
        print("No I2C devices found")
    return found


def _load(config_path: Optional[str]):
    try:
        return load_config(config_path)
    except ConfigError as exc:
        raise ConfigError(f"failed to load config: {exc}") from exc


def show_config(config_path: Optional[str] = None) -> None:
    """Print the current configuration and where it is stored."""
    cfg = _load(config_path)
    print("Current configuration:")
    print(f"  default bus: {cfg.default_bus}")
    print(f"  default timeout: {cfg.default_timeout} ms")
    print(f"  log level: {cfg.log_level}")
    print(f"  output format: {cfg.output_format}")
    print(f"  mock mode: {str(cfg.mock_mode).lower()}")
    path = config_path if config_path else str(default_config_path())
    print(f"\nConfig file: {path}")


def set_config(
    config_path: Optional[str] = None,
    default_bus: Optional[int] = None,
    default_timeout: Optional[int] = None,
    log_level: Optional[str] = None,
    output_format: Optional[str] = None,
    mock_mode: bool = False,
) -> None:
    """Update the given settings, save them and print the result."""
    cfg = _load(config_path)
    if default_bus and default_bus > 0:
        cfg.default_bus = default_bus
    if default_timeout and default_timeout > 0:
        cfg.default_timeout = default_timeout
    if log_level:
        cfg.log_level = log_level
    if output_format:
        cfg.output_format = output_format
    if mock_mode:
        cfg.mock_mode = True

    try:
        save_config(cfg, config_path or default_config_path())
    except ConfigError as exc:
        raise ConfigError(f"failed to save config: {exc}") from exc

    print("Configuration updated")
    show_config(config_path)


def reset_config(config_path: Optional[str] = None) -> None:
    """Restore the default settings and print them."""
    try:
        save_config(default_config(), config_path or default_config_path())
    except ConfigError as exc:
        raise ConfigError(f"failed to reset config: {exc}") from exc
    print("Configuration reset to defaults")
    show_config(config_path)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every command."""
    parser = argparse.ArgumentParser(
        prog="sensorcli",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--version", action="version", version=f"sensorcli {VERSION}")
    commands = parser.add_subparsers(dest="command")

    read = commands.add_parser("read", help="read I2C device registers")
    read.add_argument("-a", "--addr", type=parse_byte, required=True, help="device address")
    read.add_argument("-r", "--reg", type=parse_byte, required=True, help="register address")
    read.add_argument("-b", "--bus", type=int, default=1, help="I2C bus number")
    read.add_argument("-c", "--count", type=int, default=1, help="number of bytes to read")

    write = commands.add_parser("write", help="write I2C device registers")
    write.add_argument("-a", "--addr", type=parse_byte, required=True, help="device address")
    write.add_argument("-r", "--reg", type=parse_byte, required=True, help="register address")
    write.add_argument("-v", "--value", type=parse_byte, default=0, help="value to write")
    write.add_argument("-b", "--bus", type=int, default=1, help="I2C bus number")
    write.add_argument(
        "-d", "--data", action="append", default=None,
        help="bytes to write (comma-separated hex values)",
    )

    scan = commands.add_parser("scan", help="scan an I2C bus for devices")
    scan.add_argument("-b", "--bus", type=int, default=1, help="I2C bus number")

    dump = commands.add_parser("dump", help="export register data")
    dump.add_argument("-a", "--addr", type=parse_byte, required=True, help="device address")
    dump.add_argument("-r", "--reg", type=parse_byte, required=True, help="start register")
    dump.add_argument("-b", "--bus", type=int, default=1, help="I2C bus number")
    dump.add_argument("-c", "--count", type=int, default=16, help="number of bytes to read")
    dump.add_argument("-f", "--format", default="json", help="output format (json, csv, hex)")
    dump.add_argument("-o", "--output", default=None, help="output file path")

    path_option = argparse.ArgumentParser(add_help=False)
    path_option.add_argument(
        "-c", "--config", dest="config_path", default=argparse.SUPPRESS,
        help="config file path",
    )

    config = commands.add_parser("config", help="manage the configuration file")
    config.add_argument("-c", "--config", dest="config_path", default=None,
                        help="config file path")
    config_commands = config.add_subparsers(dest="config_command")
    config_commands.add_parser("show", parents=[path_option], help="show configuration")
    config_set = config_commands.add_parser("set", parents=[path_option], help="set values")
    config_set.add_argument("-b", "--default-bus", type=int, default=0)
    config_set.add_argument("-t", "--default-timeout", type=int, default=0)
    config_set.add_argument("-l", "--log-level", default="")
    config_set.add_argument("-f", "--output-format", default="")
    config_set.add_argument("-m", "--mock-mode", action="store_true")
    config_commands.add_parser("reset", parents=[path_option], help="restore defaults")
    config.set_defaults(config_parser=config)

    return parser


def _run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if args.command == "read":
        read_register(args.bus, args.addr, args.reg, args.count)
    elif args.command == "write":
        data = [item for chunk in (args.data or []) for item in chunk.split(",") if item]
        write_register(args.bus, args.addr, args.reg, args.value, data)
    elif args.command == "scan":
        scan_devices(args.bus)
    elif args.command == "dump":
        dump_module.dump_registers(
            args.bus, args.addr, args.reg, args.count, args.format, args.output
        )
    elif args.command == "config":
        if args.config_command == "show":
            show_config(args.config_path)
        elif args.config_command == "set":
            set_config(
                args.config_path, args.default_bus, args.default_timeout,
                args.log_level, args.output_format, args.mock_mode,
            )
        elif args.config_command == "reset":
            reset_config(args.config_path)
        else:
            args.config_parser.print_help()
    else:
        parser.print_help()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        _run(args, parser)
    except (I2CError, ConfigError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())