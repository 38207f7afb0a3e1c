# frame_parser.py
# -*- coding: utf-8 -*-
"""
저울 펌웨어가 출력하는 텍스트 프레임에서 총중량(Gross)을 추출합니다.

프레임 형식 (각 줄 앞에 공백이 1개 이상 있음):

      Date:   09.07.06
      Time:   01:13:39
      Gross       24kg

Date/Time 값은 자릿수 모양만 확인하고 사용하지 않습니다.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from weight_reader.config import MAX_WEIGHT

logger = logging.getLogger(__name__)

# 모듈 로드 시 한 번만 컴파일 (이후 읽기 전용)
FRAME_PATTERN = re.compile(r"""
    \s+Date:\s+\d\d[.]\d\d[.]\d\d\n
    \s+Time:\s+\d\d[:]\d\d[:]\d\d\n
    \s+Gross\s+(?P<weight>\d+)kg
""", re.VERBOSE | re.ASCII)

_MAX_WEIGHT_DIGITS = len(str(MAX_WEIGHT))


class WeightOverflowError(ValueError):
    """Gross 자릿수가 MAX_WEIGHT 범위를 넘는 경우 (문법은 자릿수를 제한하지 않음)"""
    pass


def _read_weight_digits(digits: str) -> int:
    # int() 변환 전에 자릿수부터 제한 (긴 숫자열은 int() 자체가 ValueError)
    significant = digits.lstrip("0") or "0"
    if len(significant) > _MAX_WEIGHT_DIGITS or int(significant) > MAX_WEIGHT:
        shown = significant if len(significant) <= 20 else f"{significant[:20]}...({len(significant)} digits)"
        raise WeightOverflowError(
            f"Gross 값 {shown}kg 가 허용 범위(0..{MAX_WEIGHT})를 벗어났습니다.")
    return int(significant)


def parse_scale_data(data: str) -> Optional[int]:
    """
    지금까지 누적된 버퍼에서 완전한 Date/Time/Gross 프레임을 찾습니다.
    프레임이 없거나 일부만 도착했으면 None, 찾으면 정수 무게를 반환합니다.
    """
    m = FRAME_PATTERN.search(data)
    if m is None:
        return None
    return _read_weight_digits(m.group("weight"))
