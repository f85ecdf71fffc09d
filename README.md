# sensorcli

A command-line tool for debugging I2C sensors. It scans a bus for devices,
reads and writes registers, and dumps a range of registers as JSON, CSV or a
readable hex listing.

Every device is served by an in-memory mock (`sensorcli.i2c.MockDevice`):
unset registers read as zero, and values written live only as long as the
device handle that received them. Each command opens a fresh handle, so a
value written by one `sensorcli write` run is not seen by a later
`sensorcli read`.

## Installation

```
pip install .
```

Python 3.10 or later; no third-party dependencies. Install the `test` extra
to run the test suite with pytest.

## Usage

```
sensorcli --help
sensorcli --version
```

Scan a bus. Every address from 0x03 to 0x77 is probed by reading register
0x00; on the mock bus every one of them answers.

```
sensorcli scan --bus 1
```

Read one register, or several consecutive ones (register numbers wrap at
0xFF):

```
sensorcli read --addr 0x48 --reg 0x01 --bus 1
sensorcli read --addr 0x48 --reg 0x01 --count 4 --bus 1
```

Write a single value, or a list of hex bytes. `--data` may be given more
than once and each value may be comma-separated; the `0x` prefix is optional.

```
sensorcli write --addr 0x48 --reg 0x02 --value 0x55 --bus 1
sensorcli write --addr 0x48 --reg 0x02 --data 0x55,0x66,0x77 --bus 1
```

Dump registers to the terminal or to a file (`--count` defaults to 16,
`--format` to `json`):

```
sensorcli dump --addr 0x48 --reg 0x00 --count 16 --format json --output data.json
sensorcli dump --addr 0x48 --reg 0x00 --count 16 --format csv --output data.csv
sensorcli dump --addr 0x48 --reg 0x00 --count 16 --format hex
```

`--addr` and `--reg` are required by `read`, `write` and `dump`, and accept
decimal, `0x` hex, octal or binary numbers in 0-255. Device addresses must
lie in 0x03 to 0x77 and the bus number must not be negative. `--bus`
defaults to 1.

On failure a command prints `error: <message>` to stderr and exits with
status 1; argument errors exit with status 2.

## Configuration

Settings are kept as JSON in `~/.sensorcli/config.json`, or in the file given
with `--config`/`-c`. A missing file is created with default values.

```
sensorcli config show
sensorcli config set --default-bus 2 --log-level debug
sensorcli config reset
```

`config set` accepts `--default-bus`, `--default-timeout` (milliseconds),
`--log-level`, `--output-format` and `--mock-mode`. Zero or empty values
leave a setting unchanged, and `--mock-mode` can only switch mock mode on.

Defaults: bus 1, timeout 1000 ms, log level `info`, output format `json`,
mock mode on.

## Library use

```python
from sensorcli.i2c import open_device

with open_device(1, 0x48) as device:
    device.write_bytes(0x10, bytes([0x55, 0x66]))
    print(device.read_bytes(0x10, 2))   # b'Uf'
```

- `sensorcli.i2c`: `open_device`, `open_with_config` with `DeviceConfig`,
  the `Device` interface, `MockDevice` (with `registers` and `closed`),
  `I2CError`, and the helpers `with_timeout(timeout, fn)` and
  `with_retry(max_retries, fn)` (exponential backoff from 10 ms).
- `sensorcli.dump`: `build_register_data`, `format_json`, `format_csv`,
  `format_hex` and `dump_registers`.
- `sensorcli.config`: `Config`, `load_config`, `save_config`,
  `default_config`, `default_config_path` and `ConfigError`.
- `sensorcli.logger`: levelled logging (`init`, `set_level`, `debug`,
  `info`, `warn`, `error`) to stdout or an appended file, and
  `DeviceLogger` for register reads, writes and scan results.

## What it does not do

- There is no access to real I2C hardware; only the in-memory mock bus
  exists, whatever `mock_mode` is set to.
- The commands do not read the configuration file: `--bus`, `--count` and
  `--format` keep their own defaults, and the stored log level, timeout and
  output format are kept but not applied.
- The commands do not log; `sensorcli.logger` is available for library use
  only.