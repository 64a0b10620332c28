import uvicorn

from app.config import settings
from app.utils.logging import logger

def main() -> None:
    logger.info("Receipt processor is running on port %s", settings.PORT)
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    main()
