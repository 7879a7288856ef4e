import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskflow.db")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Client side
TASKFLOW_API_URL = os.getenv("TASKFLOW_API_URL", "http://127.0.0.1:8000")
TASKFLOW_API_TIMEOUT = int(os.getenv("TASKFLOW_API_TIMEOUT", "10"))
