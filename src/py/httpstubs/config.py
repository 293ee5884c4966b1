from os import getenv

# Default number of bytes per scheduled chunk
CHUNK_SIZE: int = int(getenv("HTTPSTUBS_CHUNK_SIZE", 64_000))

# Directory where named `.response` dumps are looked up
STUBS_PATH: str = getenv("HTTPSTUBS_PATH", ".")

LOG_DELIVERIES: bool = getenv("HTTPSTUBS_LOG_DELIVERIES", "0") == "1"

LOG_LEVEL: str = getenv("HTTPSTUBS_LOG_LEVEL", "Info")

# EOF
