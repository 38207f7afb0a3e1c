# main.py
#!/usr/bin/env python3
import argparse
import logging
import os
import signal
import sys
from typing import List, Optional

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from weight_reader.config import (SERIAL_PORT, TIMEOUT, DEFAULT_DIR, DEFAULT_FILE_NAME,
                                  DEFAULT_EXTENSION, TEST_WEIGHT)
from weight_reader.frame_parser import WeightOverflowError
from weight_reader.serial_reader import SerialReader, DeviceReadError, read_weight
from weight_reader.weight_writer import build_output_path, write_weight_to_file

logger = logging.getLogger("weight_reader")


# Ctrl-C 안전 종료 핸들러 (세션 중단은 실패로 처리)
def signal_handler(sig, frame):
    print("\n[WeightReader] 중단 요청, 종료합니다.", file=sys.stderr)
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weight-reader", description="Weight Reader")
    parser.add_argument("-s", "--scale", metavar="DEVICE", default=SERIAL_PORT,
                        help="The weight scale device to use, e.g. COM4 or /dev/ttyUSB0")
    parser.add_argument("-d", "--dir", metavar="DIR", default=DEFAULT_DIR,
                        help="The output directory for written files")
    parser.add_argument("-f", "--file-name", metavar="NAME", default=DEFAULT_FILE_NAME,
                        help="The name of the output file")
    parser.add_argument("-e", "--ext", metavar="EXT", default=DEFAULT_EXTENSION,
                        help="The extension of the output file, without preceding dot")
    parser.add_argument("-t", "--test", action="store_true",
                        help="Use test data instead of reading from scale device")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every raw line received from the scale")
    return parser


def setup_logging(verbose: bool = False):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                        datefmt="%Y-%m-%d %H:%M:%S")


def read_from_scale(device: str) -> int:
    with SerialReader(device, timeout=TIMEOUT) as reader:
        return read_weight(reader, device, timeout=TIMEOUT)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.test and not args.scale:
        print("If not using test data you must specify a scale device\n"
              f"{parser.format_usage()}\nUse -h to get help.", file=sys.stderr)
        return 1

    setup_logging(args.verbose)
    signal.signal(signal.SIGINT, signal_handler)

    device = args.scale if not args.test else "unused"
    logger.info(f"Args: s: {device} d: {args.dir} f: {args.file_name} e: {args.ext} t: {args.test}")

    try:
        if args.test:
            logger.info("Using test data, not reading from device")
            weight = TEST_WEIGHT
        else:
            weight = read_from_scale(device)
    except DeviceReadError as e:
        logger.error(f"장치 읽기 실패: {e}")
        return 1
    except WeightOverflowError as e:
        logger.error(f"프레임 무게 값 오류: {e}")
        return 1

    path = build_output_path(args.dir, args.file_name, args.ext)
    try:
        write_weight_to_file(path, weight)
    except OSError as e:
        logger.error(f"파일 기록 실패 ({path}): {e}")
        return 1

    print(f"Written: {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
