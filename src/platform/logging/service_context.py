"""
Service context for log lines.

Every log record carries `service@env:instance` so lines from several
booking-service replicas can be told apart once they are aggregated.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'restaurant-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers get a unique hostname, local runs fall back to the pid
    instance = os.getenv('HOSTNAME') or socket.gethostname() or ''
    if deploy_env == 'local_dev' or not instance:
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance[:12]}'
