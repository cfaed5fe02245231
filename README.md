# workbook_rpc

Building blocks for talking to a small USB board that speaks a compact RPC
protocol: variable-length message keys and headers, COBS framing with a frame
accumulator, the board's message definitions, LED frame helpers and a parser
for a simple interactive command language.

The package has no dependencies beyond the standard library and needs
Python 3.10 or later.

## Modules

### `workbook_rpc.keys`

- `VarKeyKind`: key length, `KEY1`, `KEY2`, `KEY4` or `KEY8`.
- `fold_key(data, length)`: folds key bytes to a shorter length by XOR-ing
  neighbouring bytes (8 → 4 → 2 → 1). Raises `ValueError` for an invalid
  length or an attempt to grow a key.
- `VarKey(data)`: an immutable 1, 2, 4 or 8 byte key. `kind()` gives its
  length, `shrink_to(kind)` returns a folded copy (never a longer one), and
  keys of different lengths compare equal when the longer one, folded to the
  length of the shorter, matches it.

### `workbook_rpc.header`

- `VarSeqKind`: sequence number length, `SEQ1`, `SEQ2` or `SEQ4`.
- `VarSeq(kind, value)`: a sequence number. `resize(kind)` zero-extends or
  truncates; `int()` gives the value; two numbers are equal when their values
  are equal, whatever their lengths.
- `VarHeader(key, seq_no)`: the message header. `write_to_bytes()` encodes the
  discriminant byte, the key and the little-endian sequence number;
  `VarHeader.take_from_bytes(buf)` returns the header and the bytes that
  follow it. Malformed input (unknown version, invalid sequence length, too
  few bytes) raises `HeaderError`.

### `workbook_rpc.accumulator`

- `cobs_encode(data)` / `cobs_decode(data)`: COBS encoding without and up to
  the terminating zero byte. Invalid input raises `CobsDecodeError`.
- `CobsAccumulator(capacity)`: fed chunks of raw bytes with `feed(data)`, it
  returns `Consumed()`, `OverFull(remaining)`, `DeserError(remaining)` or
  `Success(data, remaining)`. `remaining` holds the input after the end of
  the frame, to be fed back in.

### `workbook_rpc.icd`

- Message types with `to_bytes()` and `from_bytes()` in the postcard wire
  format: `Rgb8`, `SingleLed`, `Acceleration`, `StartAccel`; the
  `AccelRange` enum; `BadPositionError`. Bad bytes raise `WireFormatError`;
  out-of-range field values raise `ValueError`.
- `Endpoint`, `Topic` and `TopicDirection`, with `ENDPOINT_LIST`,
  `TOPICS_IN_LIST` and `TOPICS_OUT_LIST`. `find_endpoint(path)` and
  `find_topic(path)` raise `KeyError` for an unknown path.
- `NUM_LEDS` is 24.

### `workbook_rpc.leds`

- `LedStrip(size)`: the colours on a strip. `set_one(led)` raises
  `BadPositionError` for a position off the strip; `set_all(colors)` needs
  exactly `size` colours; `words()` packs the state.
- `pack_word(color)` packs a colour as `0xGGRRBB00`; `pack_frame(colors)`
  packs a whole frame.
- `dim(color, divisor)`, `chase_frame(index, color, lit)`,
  `chase_frames(color, lit)` (an endless generator), `fade_levels(peak)` and
  `pot_changed(now, last, threshold)`.
- Colour constants `BLACK`, `GREEN`, `BLUE`, `WHITE`.

### `workbook_rpc.commands`

`parse_command(line)` turns a console line into one of `Ping`, `SetRgb`,
`SetRgbAll`, `AccelListen`, `AccelStart`, `AccelStop` or `ShowSchema`, and
raises `CommandError` with a user-facing message on bad input. Accepted lines:

```
ping
ping <u32>
rgb <pos> <r> <g> <b>
rgball <r> <g> <b>
accel listen <ms> <range> <dur>
accel start <ms> <range>
accel stop
schema
```

`parse_accel_range(text)` accepts `2`, `4`, `8` or `16`.

## Example

```python
from workbook_rpc.accumulator import CobsAccumulator, Success, cobs_encode
from workbook_rpc.header import VarHeader, VarSeq, VarSeqKind
from workbook_rpc.icd import Rgb8, SingleLed, find_endpoint
from workbook_rpc.keys import VarKey

header = VarHeader(key=VarKey(bytes([0x42, 0xAF])), seq_no=VarSeq(VarSeqKind.SEQ1, 2))
body = SingleLed(position=3, rgb=Rgb8(r=10, g=0, b=0)).to_bytes()
frame = cobs_encode(header.write_to_bytes() + body) + b"\x00"

acc = CobsAccumulator(1024)
result = acc.feed(frame)
if isinstance(result, Success):
    decoded, rest = VarHeader.take_from_bytes(result.data)
    print(decoded == header, SingleLed.from_bytes(rest))

print(find_endpoint("led/set_one"))
```

## What this package does not do

It does not open USB devices or any other transport, and it has no RPC
client, server or request dispatcher: it only encodes and decodes headers,
frames and messages. It computes no endpoint or topic keys from paths and
schemas. `parse_command` parses console lines but the package installs no
command-line program that runs them against a board.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.