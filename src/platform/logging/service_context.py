"""
Service context extraction for logging.

Identifies the running server process in every log line so that output from
several local instances (e.g. one per port) can be told apart.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinema-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    return f'{service_name}@{deploy_env}:{socket.gethostname()}:{os.getpid()}'
