import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest


class FakeSerial:
    """readline() 으로 미리 정해진 줄을 돌려주는 시리얼 대역. 줄이 다 떨어지면 b"" (타임아웃)."""

    def __init__(self, lines, error=None):
        self._lines = list(lines)
        self._error = error
        self.timeout = None
        self.reads = 0

    def readline(self):
        self.reads += 1
        if self._lines:
            return self._lines.pop(0)
        if self._error is not None:
            raise self._error
        return b""


@pytest.fixture
def fake_serial():
    return FakeSerial
