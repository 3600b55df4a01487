import queue

import pytest

from slisko.output import Device, NullDevice, Output, gen_empty


class RecordingDevice(Device):
    def __init__(self):
        self.writes = []
        self.closed = False

    def write(self, pixels):
        self.writes.append(bytes(pixels))
        return len(pixels)

    def close(self):
        self.closed = True


def make_output(num=4):
    device = RecordingDevice()
    return Output(num, device, queue.Queue()), device


def test_null_device_discards():
    device = NullDevice()
    assert device.write(b"\x01\x02\x03") == 0
    assert device.close() is None


def test_gen_empty_gives_distinct_dark_pixels():
    pixels = gen_empty(3)
    assert len(pixels) == 3
    assert len({id(p) for p in pixels}) == 3
    assert all(p.rgb == (0.0, 0.0, 0.0) for p in pixels)


def test_render_writes_rgb_bytes():
    out, device = make_output(2)
    pixels = gen_empty(2)
    out.map(pixels)
    pixels[0].set_color(1.0, 0.5, 0.0)
    assert out.render() is True
    assert device.writes == [bytes([255, 127, 0, 0, 0, 0])]


def test_render_clamps_out_of_range():
    out, device = make_output(1)
    pixels = gen_empty(1)
    out.map(pixels)
    pixels[0].set_color(2.0, -1.0, 0.0)
    out.render()
    assert device.writes[-1] == bytes([255, 0, 0])


def test_unchanged_frame_is_not_written():
    out, device = make_output(1)
    pixels = gen_empty(1)
    out.map(pixels)
    pixels[0].set_color(1.0, 1.0, 1.0)
    assert out.render() is True
    assert out.render() is False
    assert len(device.writes) == 1


def test_all_dark_first_frame_is_not_written():
    out, device = make_output(3)
    out.map(gen_empty(3))
    assert out.render() is False
    assert device.writes == []


def test_map_appends_in_order():
    out, _ = make_output(4)
    first, second = gen_empty(1), gen_empty(2)
    out.map(first)
    out.map(second)
    assert out.mapping == first + second


def test_map_beyond_strip_raises():
    out, _ = make_output(2)
    with pytest.raises(ValueError):
        out.map(gen_empty(3))


def test_unmapped_tail_stays_dark():
    out, device = make_output(3)
    pixels = gen_empty(1)
    out.map(pixels)
    pixels[0].set_color(1.0, 1.0, 1.0)
    out.render()
    assert device.writes[-1][3:] == bytes(6)
    assert len(device.writes[-1]) == 9


def test_run_renders_until_sentinel():
    device = RecordingDevice()
    trigger = queue.Queue()
    out = Output(1, device, trigger)
    pixels = gen_empty(1)
    out.map(pixels)
    pixels[0].set_color(1.0, 1.0, 1.0)
    for message in (True, True, None):
        trigger.put(message)
    out.run()
    assert len(device.writes) == 1
    assert trigger.empty()


def test_clear_writes_zeros():
    out, device = make_output(2)
    pixels = gen_empty(2)
    out.map(pixels)
    pixels[1].set_color(1.0, 1.0, 1.0)
    out.render()
    out.clear()
    assert device.writes[-1] == bytes(6)


def test_close_closes_device():
    out, device = make_output()
    out.close()
    assert device.closed is True


def test_negative_size_raises():
    with pytest.raises(ValueError):
        Output(-1, NullDevice(), queue.Queue())