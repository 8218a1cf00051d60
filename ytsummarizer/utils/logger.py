import sys
import logging

from ytsummarizer.config import config

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
logging_dir = config.LOG_DIR
logging_path = logging_dir / "ytsummarizer.log"
logging_dir.mkdir(parents=True, exist_ok=True)

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format=logging_str,
    handlers=[
        logging.FileHandler(logging_path, encoding="utf-8"),
        logging.StreamHandler(sys.stdout)
    ]
)

logging = logging.getLogger('ytsummarizer')
