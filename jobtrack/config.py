import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the project root, falling back to the working directory
current_dir = Path(__file__).resolve().parent   # jobtrack/
project_dir = current_dir.parent                # project root
env_path = project_dir / ".env"

if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

# ===========================
# DATABASE
# ===========================
MONGO_URI = os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "jobtrack")

# ===========================
# HTTP
# ===========================
raw_origins = os.getenv("ALLOWED_ORIGINS", "")
ALLOWED_ORIGINS = [o.strip() for o in raw_origins.split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ===========================
# THIRD-PARTY APIS
# ===========================
APOLLO_BASE_URL = os.getenv("APOLLO_BASE_URL", "https://api.apollo.io/v1")
DATAMUSE_URL = "https://api.datamuse.com/words"
ONET_SEARCH_URL = "https://services.onetcenter.org/ws/online/search"


# Keys are read on every call so a rotated key takes effect without a restart
def get_openai_api_key():
    return os.getenv("OPENAI_API_KEY")


def get_openai_model():
    return os.getenv("OPENAI_MODEL", "gpt-4")


def get_apollo_api_key():
    return os.getenv("APOLLO_API_KEY")
