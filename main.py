"""
Campus Portal 백엔드 실행
"""
import argparse
import sys
from pathlib import Path

from loguru import logger

from app.config import get_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", log_dir: str = "logs") -> None:
    """로깅 설정 (stderr + 일별 파일)"""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger.add(
        f"{log_dir}/portal_{{time:YYYY-MM-DD}}.log",
        rotation="1 day",
        retention="30 days",
        level="DEBUG"
    )


def main():
    parser = argparse.ArgumentParser(description="Campus Portal API 서버")
    parser.add_argument("--host", default="0.0.0.0", help="바인딩 주소")
    parser.add_argument("--port", type=int, default=8000, help="포트")
    parser.add_argument("--reload", action="store_true", help="코드 변경 시 자동 재시작")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_dir)

    import uvicorn

    logger.info(f"서버 시작: http://{args.host}:{args.port}")
    uvicorn.run(
        "app.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
