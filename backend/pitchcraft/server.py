"""Run the API with uvicorn (``pitchcraft-server`` console script)."""

import uvicorn

from pitchcraft.core.config import ModeEnum, settings


def run() -> None:
    uvicorn.run(
        "pitchcraft.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.MODE == ModeEnum.development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
