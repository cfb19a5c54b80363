# main.py
import logging

import uvicorn

from vidshare.config import get_settings
from vidshare.main import create_app

logger = logging.getLogger(__name__)

app = create_app()

# You can run this file using: uvicorn main:app --reload
if __name__ == "__main__":
    port = get_settings().port
    logger.info("API running on port %s", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
