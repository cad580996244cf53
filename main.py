import os

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env before the settings are imported
load_dotenv()

from app.main import app  # noqa: E402

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") != "production",
    )
