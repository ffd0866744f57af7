import uvicorn

from string_analyzer.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "string_analyzer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
