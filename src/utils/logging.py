"""Shared logging configuration."""
import os
import sys
import json
import traceback
from aws_lambda_powertools import Logger

def format_exception(exc_info):
    """Format exception info into a single line."""
    if exc_info is True:  # When exc_info=True is passed to logger.exception
        exc_info = sys.exc_info()
    elif isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)

    if exc_info and isinstance(exc_info, tuple) and len(exc_info) == 3 and exc_info[0] is not None:
        trace = ''.join(traceback.format_exception(*exc_info))
        return trace.replace('\n', ' | ').strip()
    return None

class SingleLineLogger(Logger):
    """Logger that formats exceptions in a single line."""

    def exception(self, message, *args, **kwargs):
        exc_info = kwargs.pop('exc_info', True)
        extra = kwargs.pop('extra', {})
        extra['exception'] = format_exception(exc_info)
        kwargs['exc_info'] = False
        kwargs['extra'] = extra
        super().exception(message, *args, **kwargs)

logger = SingleLineLogger(
    service=os.environ.get('POWERTOOLS_SERVICE_NAME', 'cycle_engine'),
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(stage=os.environ.get('STAGE', 'dev'))
