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

'''keybase62 service module.

This module provides an HTTP service so applications that don't run
Python can encode and decode tokens with a shared key. Requests look
like::

    GET /encode/int64?value=12345
    GET /decode/int64?value=3Fz
    GET /encode/text?value=hello+world

The kind of value is one of text, int, int32, or int64, and the response
body is the plain text result. Codec errors give a 400 response with the
error message as the body. The service is started with::

    keybase62 --keybase62.key.key_file=/etc/keybase62.key serve
'''

import keybase62.codec
import keybase62.config
import keybase62.http
import keybase62.key
import keybase62.log

DEFAULT_CONFIG = keybase62.config.update(keybase62.http.DEFAULT_CONFIG,
    keybase62.key.DEFAULT_CONFIG, keybase62.log.DEFAULT_CONFIG)

OPERATIONS = {
    ('encode', 'text'): 'encode_text',
    ('decode', 'text'): 'decode_text',
    ('encode', 'int'): 'encode_int',
    ('decode', 'int'): 'decode_int',
    ('encode', 'int32'): 'encode_int32',
    ('decode', 'int32'): 'decode_int32',
    ('encode', 'int64'): 'encode_int64',
    ('decode', 'int64'): 'decode_int64'}


class CodecRequest(keybase62.http.Request):
    '''Request handler that runs one codec operation. The server needs a
    codec attribute holding a keybase62.key.Shared object.'''

    def run(self):
        if self.method != 'GET':
            raise keybase62.http.MethodNotAllowed(
                headers=[('Allow', 'GET')])
        parts = tuple(self.path.strip('/').split('/'))
        if parts not in OPERATIONS:
            raise keybase62.http.NotFound()
        value = self.params.get('value')
        if value is None:
            raise keybase62.http.BadRequest(_('Missing value parameter'))
        direction, kind = parts
        if direction == 'encode' and kind != 'text':
            value = self._parse_int(value)
        operation = getattr(self.server.codec.get(), OPERATIONS[parts])
        result = keybase62.codec.outcome(operation, value)
        if result.error is not None:
            self.log.info(_('Could not %s %s: %s'), direction, kind,
                result.error)
            raise keybase62.http.BadRequest(str(result.error))
        self.headers.append(('Content-Type', 'text/plain; charset=utf-8'))
        return self.ok(str(result.value))

    @staticmethod
    def _parse_int(value):
        '''Parse an integer parameter.'''
        try:
            return int(value)
        except ValueError:
            raise keybase62.http.BadRequest(_('Invalid integer: %s') % value)


def server(config):
    '''Create a codec server for the given config.'''
    http_server = keybase62.http.Server(config, CodecRequest)
    http_server.codec = keybase62.key.Shared(config)
    return http_server


def run(config):
    '''Run the codec service until it is stopped. The key is loaded before
    the server starts so a missing key fails right away.'''
    http_server = server(config)
    http_server.codec.get()
    try:
        http_server.run()
    except KeyboardInterrupt:
        pass
    finally:
        http_server.stop()
