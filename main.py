from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

import logging

from app.core.config import settings
from app.main import app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
