"""Run the API with ``python -m pousada``."""

import uvicorn

from pousada.config import settings

if __name__ == "__main__":
    uvicorn.run("pousada.main:app", host=settings.host, port=settings.port, reload=settings.debug)
