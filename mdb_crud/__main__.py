"""
Run the API with uvicorn: ``python -m mdb_crud``.
"""

import logging

import uvicorn
from dotenv import load_dotenv

from .api.app import create_app
from .config import Settings


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    settings = Settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
