# weight_writer.py
"""
측정된 무게를 CSV 파일로 기록합니다.

파일 형식 (쉼표 + 공백 구분):
    Date, Time, Weight
    19-10-2026, 08:30:12, 24

날짜/시간은 측정 시점이 아니라 파일을 쓰는 시점(UTC)입니다.
대상 파일은 항상 새로 만들어지며 (기존 파일 덮어씀) 디렉토리는 만들지 않습니다.
"""
import logging
import os
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

HEADER = "Date, Time, Weight"


def build_output_path(directory: str, name: str, ext: str) -> str:
    return f"{directory}/{name}.{ext}"


def format_record(weight: int, now: datetime) -> str:
    return f"{HEADER}\n{now.strftime('%d-%m-%Y, %H:%M:%S')}, {weight}\n"


def write_weight_to_file(filepath: str, weight: int, now: Optional[datetime] = None) -> str:
    if weight < 0:
        raise ValueError(f"무게는 음수일 수 없습니다: {weight}")
    if now is None:
        now = datetime.now(timezone.utc)

    contents = format_record(weight, now)
    # 헤더와 데이터 줄을 한 번에 기록
    with open(filepath, "w", encoding="utf-8", newline="") as f:
        f.write(contents)

    logger.info(f"Written: {os.path.normpath(filepath)}")
    return filepath
