import logging
import sys

from ..config.settings import settings

# ---------------------------------------------------
# Create a custom logger
# ---------------------------------------------------
log = logging.getLogger("TokenAdvisor")
log.setLevel(logging.DEBUG)

# ---------------------------------------------------
# Formatting
# ---------------------------------------------------
console_format = logging.Formatter(
    "[%(asctime)s] [%(levelname)s] %(message)s",
    "%Y-%m-%d %H:%M:%S"
)

# ---------------------------------------------------
# Console Handler
# ---------------------------------------------------
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
console_handler.setFormatter(console_format)
log.addHandler(console_handler)

# ---------------------------------------------------
# Disable logging propagation
# ---------------------------------------------------
log.propagate = False

