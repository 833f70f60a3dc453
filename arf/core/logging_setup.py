import logging
import os
import sys

from arf.core.config import settings

os.makedirs(settings.log_dir, exist_ok=True)

# Configuração básica de logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(os.path.join(settings.log_dir, 'server.log'), encoding='utf-8')
    ]
)

logger = logging.getLogger('arf')
