# slisko

slisko drives the LEDs fitted behind the faceplates of network router
chassis. It models each line card with its status, link and labelled
lights, and runs a set of patterns over them. Some patterns imitate traffic
on link ports. Others light status LEDs, cycle colours, strobe or run a
"snake". Each rendered frame is packed into an RGB byte stream and handed
to an output device. The device is either a WLED-style controller reached
over DDP (UDP) or a null device that discards the frames. The library also
has a class that sends frames to a WebSocket server.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running the controller

```
slisko --config configurations/9010.toml
```

The command does the following, in order:

1. It loads the chassis definition from the configuration file.
2. It builds the line cards that the file lists.
3. It lays the cards' LEDs out on the strip as the file's mapping describes.
4. It starts rendering frames.
5. It enables the patterns that the file names.
6. It serves the HTTP API.

Options:

| Option              | Default                    | Meaning                                                     |
|---------------------|----------------------------|-------------------------------------------------------------|
| `--config PATH`     | `configurations/9010.toml` | configuration file                                          |
| `--fps N`           | `60`                       | frames per second, 1 to 1000                                |
| `--leds N`          | `132`                      | strip length, used when the configuration does not set one  |
| `--ddp`             | off                        | send frames over DDP instead of discarding them             |
| `--ddphost HOST`    | empty                      | DDP target, `host` or `host:port` (port 4048 if omitted)    |
| `--listen HOST:PORT`| `0.0.0.0:3000`             | address of the HTTP API                                     |

If `--ddp` is not given, frames go to a null device.

The command exits with status 1 in these cases:

* the configuration cannot be read;
* the DDP target cannot be opened;
* the mapping refers to a card that does not exist;
* the mapping places more LEDs than the strip holds.

Ctrl-C or SIGTERM stops rendering, writes one all-black frame and closes
the device.

### HTTP API

| Route                         | Purpose                                                    |
|-------------------------------|------------------------------------------------------------|
| `GET /chassi`                 | card names in slot order                                   |
| `GET /patterns`               | every known pattern as `{"Name", "Category"}`              |
| `GET /pattern/enable/<name>`  | turn a pattern on (202; 404 if it does not exist)          |
| `GET /pattern/disable/<name>` | turn a pattern off (202; 404 if it does not exist)         |
| `GET /ws`                     | WebSocket: pattern state per category, on connect and on every change |

Responses carry `Access-Control-Allow-Origin: *`. If a `ui/dist` directory
exists in the working directory, its files are served from `/`.

## Configuration

The configuration file is TOML. Key names are matched case-insensitively.

```toml
LEDAmount = 132
Linecards = ["sup720", "6704", "6478", "blank"]
Patterns = ["greenstatus", "sup720", "x6704", "blink48ports"]

[[mapping]]
card = 0

[[mapping]]
gen = 3

[[mapping]]
card = 1
```

The keys are:

* `LEDAmount`: the number of LEDs on the strip. If it is 0 or missing,
  `--leds` is used instead.
* `Linecards`: the cards in slot order. Known names are `a9k-8t-l`,
  `a9k-40ge-l`, `a9k-rsp400-se`, `6478`, `6704`, `sup720` and `blank`.
  Unknown names are skipped.
* `Patterns`: the patterns to enable at start-up.
* `[[mapping]]`: entries that lay out the strip in order. An entry with
  `gen = N` inserts N unused LEDs. An entry with `card = N` places every
  LED of the N-th line card.

## Patterns

| Name           | Category | Effect                                            |
|----------------|----------|---------------------------------------------------|
| `blink48ports` | link     | traffic-like blinking on 6478 cards               |
| `greenstatus`  | status   | all status lights green                           |
| `redstatus`    | status   | all status lights red                             |
| `strobe`       | global   | whole chassis strobes white                       |
| `colorcycler`  | global   | whole chassis cycles through hues                 |
| `snake`        | global   | one light travels back and forth                  |
| `static`       | global   | whole chassis in a fixed pink                     |
| `mapper`       | global   | lights selected status LEDs green for wiring checks |
| `sup720`       | misc     | supervisor card activity lights                   |
| `x6704`        | misc     | traffic-like blinking on 6704 cards               |
| `a9k-8t-l`     | misc     | traffic-like blinking on A9K-8T-L cards           |
| `a9k-40ge-l`   | misc     | traffic-like blinking on A9K-40GE-L cards         |

Only one pattern per category can be active at a time, and enabling a
second one replaces the first. The exception is `misc`, where any number
of patterns can run together. Disabling a pattern blanks every LED.

`mapper` expects a chassis with two 6478 cards, four 6704 cards and one
sup720 card, and raises an error on any other layout.

## Using it as a library

* `slisko.pixel`: `Pixel`, `Position`, `clamp01`, `clamp255`
* `slisko.cards`: `LineCard`, `slice_map` and the card generators
  `gen_6478`, `gen_6704`, `gen_sup720`, `gen_blank`, `gen_a9k_rsp440_se`,
  `gen_a9k_8t` and `gen_a9k_40ge`
* `slisko.chassis`: `Chassis` (`cards_of_type`, `card_order`,
  `leds_with_label`) and `cards_from_definition(names)`
* `slisko.configuration`: `load_from_file(path)`, `ChassisDefinition` and
  `MappingEntry`
* `slisko.patterns`: the `Pattern` base class, `PatternInfo`, `RenderInfo`
  and every built-in pattern
* `slisko.faker`: blink generators (`Blinker`, `Interval`, `RandomBlinker`,
  `RandomInterval`, `SteppedBlinker`) used to imitate traffic
* `slisko.shaping` and `slisko.waves`: value-shaping helpers and
  time-driven waveforms
* `slisko.broker`: `Broker`, which fans frame signals out to subscriber
  queues
* `slisko.controller`: `Controller`, which owns the active patterns and
  renders frames (`render_frame()` renders a single frame without
  starting the background thread)
* `slisko.output`: `Output`, `Device`, `NullDevice` and `gen_empty`
* `slisko.wledapa`: `WledApa`, which rasterises RGB frames into APA102
  words (kept in `frame`) and passes the RGB frame on to its device, plus
  `to_rgb_fast` and `ramp`
* `slisko.socketapa`: `SocketApa`, which sends each frame as a binary
  message to `ws://<addr>/`
* `slisko.api`: `create_app(chassis, controller)` builds the aiohttp
  application, and `run_api(chassis, controller, listen)` serves it
* `slisko.cli`: `main(argv=None)` and `build_parser()`

## What it does not do

* There is no on-screen preview of the chassis, and no terminal view of
  the LEDs.
* There is no direct SPI output to an LED strip, and no global brightness
  option. Output goes over DDP or to the null device; `SocketApa` is
  available only through the library.
* No web UI is included. The API serves `ui/dist` only if you provide one.