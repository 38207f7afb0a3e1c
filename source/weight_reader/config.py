# config.py
import os
# 설정 상수 모듈

# 저울 시리얼 포트 (명령행 -s 로 덮어쓸 수 있음)
SERIAL_PORT = os.getenv("SCALE_PORT")
BAUD_RATE   = 9600
TIMEOUT     = 1.0   # readline 1회당 대기 시간 (초)

DEFAULT_DIR       = "."
DEFAULT_FILE_NAME = "read_weight"
DEFAULT_EXTENSION = "csv"

TEST_WEIGHT = 423          # --test 모드에서 사용하는 고정 무게
MAX_WEIGHT  = 0xFFFFFFFF   # Gross 값 상한 (unsigned 32-bit)
