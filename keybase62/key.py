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

'''keybase62 key module.

This module finds the secret key for a codec and can generate new ones.
The key is taken from the first of these that is set:

1. The keybase62.key.key config option.
2. The contents of the file named by keybase62.key.key_file.
3. The environment variable named by keybase62.key.env.

Keys given on the command line go through the usual config value parsing,
so a key that is a valid JSON number, list or quoted string is read as
JSON. Quote it to keep it as is, as in --keybase62.key.key='"123"'. Key
files and the environment are read as is, apart from trailing newlines
in files.

Applications that want one codec for the whole process should create a
Shared object once and pass it around. It builds the codec the first time
it is asked for one::

    shared = keybase62.key.Shared(config)
    token = shared.get().encode_int64(user_id)
'''

import os
import secrets
import string
import threading

import keybase62.codec
import keybase62.log

DEFAULT_CONFIG = {
    'keybase62': {
        'key': {
            'env': 'KEYBASE62_SECRET_KEY',
            'key': None,
            'key_file': None,
            'log_level': 'NOTSET'}}}

KEY_CHARACTERS = string.ascii_letters + string.digits + '!@#$%^&*()-_=+'


def load(config):
    '''Load the secret key from config, a key file, or the environment.'''
    config = config['keybase62']['key']
    log = keybase62.log.get_log('keybase62_key', config['log_level'])
    key = config['key']
    if key is not None and not isinstance(key, str):
        raise keybase62.codec.InvalidKey(
            _('Key option must be a string, quote it as JSON'))
    if key:
        log.debug(_('Using key from config'))
        return key
    if config['key_file']:
        key = _read_key_file(config['key_file'])
        if key:
            log.debug(_('Using key from %s'), config['key_file'])
            return key
    if config['env']:
        key = os.environ.get(config['env'])
        if key:
            log.debug(_('Using key from environment variable %s'),
                config['env'])
            return key
    raise keybase62.codec.InvalidKey(
        _('No secret key found, set the keybase62.key.key or '
        'keybase62.key.key_file option, or the %s environment variable') %
        config['env'])


def _read_key_file(key_file):
    '''Read a key from a file, ignoring the trailing newline.'''
    try:
        with open(os.path.expanduser(key_file)) as key_fd:
            return key_fd.read().rstrip('\r\n')
    except OSError as exception:
        raise keybase62.codec.InvalidKey(
            _('Could not read key file: %s (%s)') % (key_file, exception))


def is_configured(config):
    '''Check if a secret key can be found for the given config.'''
    try:
        load(config)
    except keybase62.codec.InvalidKey:
        return False
    return True


def generate(length=32):
    '''Generate a random key of the given length.'''
    if isinstance(length, bool) or not isinstance(length, int) or \
            length <= 0:
        raise keybase62.codec.InvalidArgument(
            _('Key length must be greater than zero'))
    return ''.join(secrets.choice(KEY_CHARACTERS) for _count in range(length))


class Shared(object):
    '''Build a codec from config on first use and share it after that.
    Only one codec is ever built between resets, even if many threads ask
    for it at the same time.'''

    def __init__(self, config):
        self.config = config
        self._lock = threading.Lock()
        self._codec = None

    def get(self):
        '''Get the codec, building it if needed.'''
        codec = self._codec
        if codec is not None:
            return codec
        with self._lock:
            if self._codec is None:
                self._codec = keybase62.codec.Codec(load(self.config))
            return self._codec

    def reset(self):
        '''Drop the codec so the next get() loads the key again.'''
        with self._lock:
            self._codec = None
