# test_serial_reader.py
import time

import pytest
import serial

from weight_reader.serial_reader import (DeviceReadError, FrameNotFoundError, SerialReader,
                                         read_weight)

LINES = [b"  Date:   09.07.06\r\n", b"  Time:   01:13:39\r\n", b"  Gross       24kg\r\n"]


def test_reads_weight_after_third_line(fake_serial):
    src = fake_serial(LINES + [b"  Net 20kg\r\n"])
    assert read_weight(src, "/dev/ttyUSB0", timeout=1.0) == 24
    assert src.reads == 3
    assert src.timeout == 1.0


def test_leading_noise_and_str_lines(fake_serial):
    src = fake_serial(["", "garbage\n", "  Date:   09.07.13\n", "  Time:   07:54:36\n",
                       "  Gross        0kg\n"])
    # 빈 str 은 타임아웃으로 취급되므로 첫 줄에서 끝난다
    with pytest.raises(FrameNotFoundError):
        read_weight(src, "COM4")

    src = fake_serial(["garbage\n", "  Date:   09.07.13\n", "  Time:   07:54:36\n",
                       "  Gross        0kg\n"])
    assert read_weight(src, "COM4") == 0


def test_blank_lines_between_frame_lines(fake_serial):
    src = fake_serial([LINES[0], b"\n", LINES[1], LINES[2]])
    assert read_weight(src, "COM4") == 24


def test_stream_closed_before_gross_line(fake_serial):
    src = fake_serial(LINES[:2])
    with pytest.raises(DeviceReadError) as excinfo:
        read_weight(src, "/dev/ttyUSB0")
    assert isinstance(excinfo.value, FrameNotFoundError)
    assert excinfo.value.device == "/dev/ttyUSB0"
    assert "/dev/ttyUSB0" in str(excinfo.value)


def test_partial_line_ends_session(fake_serial):
    # 줄 중간에서 타임아웃된 readline: 다음 줄이 있어도 더 읽지 않는다
    src = fake_serial([LINES[0], LINES[1], b"  Gro", LINES[2]])
    with pytest.raises(FrameNotFoundError):
        read_weight(src, "COM4")
    assert src.reads == 3


def test_unterminated_final_gross_line_still_parses(fake_serial):
    src = fake_serial([LINES[0], LINES[1], b"  Gross       24kg"])
    assert read_weight(src, "COM4") == 24


def test_io_error_is_wrapped(fake_serial):
    src = fake_serial(LINES[:1], error=serial.SerialException("device disconnected"))
    with pytest.raises(DeviceReadError) as excinfo:
        read_weight(src, "COM4")
    assert not isinstance(excinfo.value, FrameNotFoundError)
    assert "COM4" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, serial.SerialException)


def test_loopback_port_end_to_end():
    port = serial.serial_for_url("loop://", timeout=1.0)
    try:
        for line in LINES:
            port.write(line)
        start = time.monotonic()
        assert read_weight(port, "loop://", timeout=1.0) == 24
        assert time.monotonic() - start < 1.0
    finally:
        port.close()


def test_loopback_port_times_out_without_gross():
    port = serial.serial_for_url("loop://")
    try:
        port.write(LINES[0] + LINES[1])
        with pytest.raises(FrameNotFoundError):
            read_weight(port, "loop://", timeout=0.1)
    finally:
        port.close()


def test_serial_reader_open_failure():
    with pytest.raises(DeviceReadError) as excinfo:
        SerialReader("/dev/does-not-exist-scale0")
    assert excinfo.value.device == "/dev/does-not-exist-scale0"


def test_serial_reader_port_settings(monkeypatch):
    opened = {}

    class _Port:
        is_open = True
        timeout = None

        def __init__(self, **kwargs):
            opened.update(kwargs)
            self.timeout = kwargs["timeout"]
            self._lines = LINES + [b"  Net 20kg\r\n"]

        def readline(self):
            return self._lines.pop(0) if self._lines else b""

        def close(self):
            self.is_open = False

    monkeypatch.setattr(serial, "Serial", _Port)
    with SerialReader("COM4") as reader:
        assert opened["baudrate"] == 9600
        assert opened["bytesize"] == serial.EIGHTBITS
        assert opened["parity"] == serial.PARITY_NONE
        assert opened["stopbits"] == serial.STOPBITS_ONE
        assert not (opened["xonxoff"] or opened["rtscts"] or opened["dsrdtr"])
        assert read_weight(reader, "COM4", timeout=1.0) == 24
        assert reader.read_line() == "  Net 20kg"
        assert reader.timeout == 1.0
    assert reader.ser.is_open is False
