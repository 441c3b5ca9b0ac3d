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

'''Tests for keybase62 service module.'''

import unittest
import urllib.parse
import wsgiref.util

import gevent.socket

import keybase62.codec
import keybase62.config
import keybase62.service

KEY = 'test-key-123'
CONFIG = keybase62.config.update(keybase62.service.DEFAULT_CONFIG, {
    'keybase62': {
        'http': {
            'host': '127.0.0.1',
            'port': 0},
        'key': {
            'env': 'KEYBASE62_TEST_UNSET_KEY',
            'key': KEY}}})


def call(app, path, value=None, method='GET'):
    '''Call a WSGI app and return the status code and body text.'''
    query = ''
    if value is not None:
        query = urllib.parse.urlencode({'value': value})
    env = {'REQUEST_METHOD': method, 'PATH_INFO': path, 'QUERY_STRING': query}
    wsgiref.util.setup_testing_defaults(env)
    response = {}

    def start(status, headers):
        '''Save the response status.'''
        response['status'] = status

    body = b''.join(app(env, start))
    return int(response['status'].split()[0]), body.decode('utf-8')


class TestService(unittest.TestCase):

    def setUp(self):
        self.server = keybase62.service.server(CONFIG)
        self.codec = keybase62.codec.Codec(KEY)

    def tearDown(self):
        self.server.stop()

    def test_int64(self):
        status, body = call(self.server, '/encode/int64', '12345')
        self.assertEqual(200, status)
        self.assertEqual(self.codec.encode_int64(12345), body)
        status, body = call(self.server, '/decode/int64', body)
        self.assertEqual(200, status)
        self.assertEqual('12345', body)
        status, body = call(self.server, '/encode/int64', '-9223372036854775808')
        self.assertEqual(200, status)
        self.assertEqual('-9223372036854775808',
            call(self.server, '/decode/int64', body)[1])

    def test_int32(self):
        status, body = call(self.server, '/encode/int32', '-42')
        self.assertEqual(200, status)
        self.assertEqual(-42, self.codec.decode_int32(body))
        status, body = call(self.server, '/encode/int32', '2147483648')
        self.assertEqual(400, status)
        self.assertIn('out of range', body)

    def test_int(self):
        number = str(10 ** 50)
        status, body = call(self.server, '/encode/int', number)
        self.assertEqual(200, status)
        self.assertEqual((200, number), call(self.server, '/decode/int', body))

    def test_text(self):
        status, body = call(self.server, '/encode/text', 'hello world é')
        self.assertEqual(200, status)
        self.assertEqual(self.codec.encode_text('hello world é'), body)
        self.assertEqual((200, 'hello world é'),
            call(self.server, '/decode/text', body))

    def test_errors(self):
        self.assertEqual(400, call(self.server, '/decode/int64', 'ab!')[0])
        self.assertEqual(400, call(self.server, '/decode/int64', '')[0])
        self.assertEqual(400, call(self.server, '/decode/text', '***')[0])
        self.assertEqual(400, call(self.server, '/encode/int64', 'abc')[0])
        self.assertEqual(400, call(self.server, '/encode/int64')[0])
        overflow = self.codec.encode_int64(2 ** 40)
        self.assertEqual(400, call(self.server, '/decode/int32', overflow)[0])

    def test_not_found(self):
        self.assertEqual(404, call(self.server, '/', '1')[0])
        self.assertEqual(404, call(self.server, '/encode/float', '1')[0])
        self.assertEqual(404, call(self.server, '/encode/int64/x', '1')[0])

    def test_method(self):
        self.assertEqual(405,
            call(self.server, '/encode/int64', '1', method='POST')[0])

    def test_missing_key(self):
        config = keybase62.config.update(CONFIG,
            {'keybase62': {'key': {'key': None}}})
        server = keybase62.service.server(config)
        try:
            self.assertEqual(500, call(server, '/encode/int64', '1')[0])
        finally:
            server.stop()

    def test_socket(self):
        self.server.start()
        connection = gevent.socket.create_connection(
            ('127.0.0.1', self.server.port))
        try:
            connection.sendall(b'GET /encode/int64?value=12345 HTTP/1.0\r\n'
                b'Host: localhost\r\n\r\n')
            data = b''
            while True:
                chunk = connection.recv(4096)
                if not chunk:
                    break
                data += chunk
        finally:
            connection.close()
        headers, body = data.split(b'\r\n\r\n', 1)
        self.assertTrue(headers.startswith(b'HTTP/1.1 200') or
            headers.startswith(b'HTTP/1.0 200'))
        self.assertEqual(self.codec.encode_int64(12345).encode('utf-8'), body)
