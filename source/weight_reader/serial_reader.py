# serial_reader.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Optional, Union

import serial

from weight_reader.config import BAUD_RATE, TIMEOUT
from weight_reader.frame_parser import parse_scale_data

logger = logging.getLogger(__name__)


class DeviceReadError(Exception):
    def __init__(self, message: str, device: Optional[str] = None) -> None:
        super().__init__(message)
        self.device = device

class FrameNotFoundError(DeviceReadError): pass


def _decode_line(raw: Union[bytes, str]) -> str:
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8', errors='ignore')
    # 줄 끝만 제거 (앞쪽 공백은 프레임 문법의 일부)
    return raw.rstrip('\r\n')


def _is_terminated(raw: Union[bytes, str]) -> bool:
    return raw.endswith(b"\n" if isinstance(raw, bytes) else "\n")


class SerialReader:
    """
    저울 시리얼 포트로부터 라인 단위 메시지를 읽어오는 클래스
    9600 baud, 8N1, 흐름 제어 없음.
    """
    def __init__(self, port: str, baud: int = BAUD_RATE, timeout: float = TIMEOUT):
        self.port = port
        try:
            self.ser = serial.Serial(
                port=port,
                baudrate=baud,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
                timeout=timeout,
            )
        except serial.SerialException as e:
            raise DeviceReadError(f"Unable to open device {port}: {e}", device=port) from e
        logger.info(f"시리얼 포트 {port} 열기 성공. (baud={baud}, timeout={timeout}s)")

    @property
    def timeout(self) -> Optional[float]:
        return self.ser.timeout

    @timeout.setter
    def timeout(self, value: Optional[float]) -> None:
        self.ser.timeout = value

    def readline(self) -> bytes:
        return self.ser.readline()

    def read_line(self) -> str:
        return _decode_line(self.readline())

    def close(self):
        if self.ser.is_open:
            self.ser.close()
            logger.info(f"시리얼 포트 {self.port} 닫힘")

    def __enter__(self) -> "SerialReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def read_weight(source, device_name: str, timeout: float = TIMEOUT) -> int:
    """
    source 에서 한 줄씩 읽어 버퍼에 누적하고, 줄마다 프레임 파서를 호출합니다.
    첫 번째 완전한 프레임의 무게를 반환합니다.

    source: readline() 과 timeout 속성을 가진 객체 (serial.Serial, SerialReader 등)
    readline() 이 빈 값 또는 줄 끝 없는 일부 줄을 돌려주면 (타임아웃 또는 스트림 종료)
    FrameNotFoundError.
    """
    source.timeout = timeout
    buffer = ""

    while True:
        try:
            raw = source.readline()
        except (serial.SerialException, OSError) as e:
            logger.error(f"장치 {device_name} 읽기 오류: {e}")
            raise DeviceReadError(f"Unable to read from device {device_name}: {e}",
                                  device=device_name) from e

        if not raw:
            logger.warning(f"장치 {device_name}: 읽기 시간 초과 또는 스트림 종료 (timeout={timeout}s)")
            break

        line = _decode_line(raw)
        logger.debug(f"수신: {line!r}")
        buffer += line + "\n"

        weight = parse_scale_data(buffer)
        if weight is not None:
            logger.info(f"Found the weight: {weight}")
            return weight

        # 줄 끝 없이 돌아온 경우: readline 이 줄 중간에서 타임아웃됨
        if not _is_terminated(raw):
            logger.warning(f"장치 {device_name}: 줄 수신 중 시간 초과 (timeout={timeout}s), 수신된 일부: {line!r}")
            break

    raise FrameNotFoundError(f"Unable to read from device {device_name}", device=device_name)
