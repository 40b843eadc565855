"""
Start the VibeMaster API with uvicorn:
    python -m server

Bind address comes from SERVER_HOST / SERVER_PORT (a .env file is honoured).
"""
import os

import uvicorn
from dotenv import load_dotenv


def main() -> None:
    load_dotenv()
    uvicorn.run(
        "server.app:app",
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8000")),
        reload=os.getenv("SERVER_RELOAD", "false").lower() == "true",
        log_level="info",
    )


if __name__ == "__main__":
    main()
