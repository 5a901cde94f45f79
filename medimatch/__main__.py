"""Run the API: python -m medimatch"""
import uvicorn

from medimatch.core.config import get_settings
from medimatch.core.logging import setup_logging
from medimatch.main import create_app


def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
