"""Run the API with uvicorn: `python -m churchdb`."""

import uvicorn

from churchdb.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("churchdb.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
