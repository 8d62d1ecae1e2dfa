"""Run the relay with uvicorn: ``python -m ytrelay``."""

import uvicorn

from ytrelay.config import settings


def main():
    uvicorn.run("ytrelay.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
