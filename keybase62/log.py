# Copyright 2013 craigslist
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

'''keybase62 log module.

This modules provides a few helper functions around the standard Python
logging module to setup console and syslog logging. The command line tool
and HTTP service call setup() with the parsed log config. Modules that need
to log use get_log() to get a logging object with the appropriate level
set. If syslog is not enabled, console logging is used.

Nothing in this package logs secret keys or shuffled alphabets, and
handlers added here should not be configured to do so either.'''

import logging.handlers

DEFAULT_CONFIG = {
    'keybase62': {
        'log': {
            'console': False,
            'format': ' %(process)d %(levelname)s %(name)s %(message)s',
            'level': 'WARNING',
            'syslog_address': '/dev/log',
            'syslog_ident': None}}}


def setup(config, secrets=None):
    '''Enable console and/or syslog logging. Any of the given secrets that
    show up in a log message are masked before the message is written.'''
    config = config['keybase62']['log']
    level = _get_level(config['level'])
    logger = logging.getLogger()
    logger.setLevel(level)
    redact = Redact(secrets or [])

    if config['syslog_ident'] is not None:
        handler = logging.handlers.SysLogHandler(
            address=config['syslog_address'])
        format_string = str(config['syslog_ident'] + config['format'])
        handler.setFormatter(logging.Formatter(format_string))
        handler.setLevel(level)
        handler.addFilter(redact)
        logger.addHandler(handler)

    if config['console'] or config['syslog_ident'] is None:
        handler = logging.StreamHandler()
        format_string = '%(asctime)s' + str(config['format'])
        handler.setFormatter(logging.Formatter(format_string))
        handler.setLevel(level)
        handler.addFilter(redact)
        logger.addHandler(handler)


def _get_level(level):
    '''Get level, converting from string if needed.'''
    if isinstance(level, str):
        return logging.getLevelName(level)
    return level


def get_log(name, level='NOTSET'):
    '''Get a logger and set the appropriate level.'''
    logger = logging.getLogger(name)
    logger.setLevel(_get_level(level))
    return logger


class Redact(logging.Filter):
    '''Filter that masks secrets in log records. The record is formatted
    once here so secrets passed as arguments are masked too.'''

    mask = '********'

    def __init__(self, secrets):
        super(Redact, self).__init__()
        self.secrets = [secret for secret in secrets if secret]

    def filter(self, record):
        if not self.secrets:
            return True
        message = record.getMessage()
        for secret in self.secrets:
            message = message.replace(secret, self.mask)
        record.msg = message
        record.args = None
        return True
