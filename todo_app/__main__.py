import logging
import os
import sys

from todo_app.main import main

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
sys.exit(main() or 0)
