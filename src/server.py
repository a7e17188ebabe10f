import logging

import uvicorn
from tutorhub_backend.server import startup_logic
from tutorhub_backend.settings import settings

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG_MODE != "production" else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if settings.DEBUG_MODE != "production":
        startup_logic()

    uvicorn.run("tutorhub_backend.server:app", host="0.0.0.0", port=8000, log_level="debug", reload=True, workers=1)
