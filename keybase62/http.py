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

'''keybase62 HTTP module.

This module runs a gevent WSGI server for a request handler class, and
has the exceptions handlers raise to send error responses. A handler
subclasses Request and returns the response body from run()::

    class Hello(keybase62.http.Request):

        def run(self):
            return self.ok('hello %s' % self.params.get('name'))

    keybase62.http.Server(config, Hello).run()

The server object is the WSGI application, so tests can call it with a
WSGI environment and never open a connection. The listening socket is
bound when the server is created, which lets a port of 0 pick a free
port before start() is called.'''

import socket
import traceback
import urllib.parse

import gevent.pywsgi
import gevent.socket

import keybase62
import keybase62.log

DEFAULT_CONFIG = {
    'keybase62': {
        'http': {
            'backlog': 64,
            'host': '',
            'log_level': 'NOTSET',
            'port': 8062,
            'server_name': 'keybase62/%s' % keybase62.__version__}}}


class Server(object):
    '''Serve one request handler class over HTTP.'''

    def __init__(self, config, request):
        self.config = config
        self._request = request
        config = config['keybase62']['http']
        self.log = keybase62.log.get_log('keybase62_http',
            config['log_level'])
        self.server_name = str(config['server_name'])
        self._socket = gevent.socket.socket(socket.AF_INET,
            socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._socket.bind((config['host'], config['port']))
        self._socket.listen(config['backlog'])
        self._server = None

    @property
    def port(self):
        '''Port the listening socket is bound to.'''
        return self._socket.getsockname()[1]

    def start(self):
        '''Start accepting connections without blocking.'''
        if self._server is None:
            self._server = gevent.pywsgi.WSGIServer(self._socket, self,
                log=self.log, error_log=self.log,
                environ={'SERVER_SOFTWARE': self.server_name})
        self._server.start()
        self.log.info(_('Listening on port %d'), self.port)

    def run(self):
        '''Start the server and block until it is stopped.'''
        self.start()
        self._server.serve_forever()

    def stop(self, timeout=None):
        '''Stop the server and close the listening socket.'''
        if self._server is not None:
            self._server.stop(timeout)
        self._socket.close()

    def __call__(self, env, start):
        '''WSGI entry point. Status exceptions become their responses, and
        anything else becomes a 500.'''
        env.setdefault('SERVER_SOFTWARE', self.server_name)
        try:
            return self._request(self, env, start).run()
        except StatusCode as exception:
            response = exception
        except Exception as exception:
            self.log.error(_('Request failed: %s (%s)'), exception,
                traceback.format_exc().replace('\n', ' '))
            response = InternalServerError()
        if not header_exists('Server', response.headers):
            response.headers.insert(0, ('Server', env['SERVER_SOFTWARE']))
        start(response.status, response.headers)
        return [response.body]


class Request(object):
    '''One incoming request. Subclasses implement run(), which returns the
    body from ok() or raises a StatusCode exception.'''

    def __init__(self, server, env, start):
        self.server = server
        self.log = server.log
        self.env = env
        self._start = start
        self.method = env['REQUEST_METHOD'].upper()
        self.path = env.get('PATH_INFO') or '/'
        self.headers = [('Server', env['SERVER_SOFTWARE'])]
        self._params = None

    def run(self):
        '''Handle the request.'''
        raise NotImplementedError()

    @property
    def params(self):
        '''Query string parameters as a dict. The last value wins when a
        name is repeated, and a name with no value maps to an empty
        string.'''
        if self._params is None:
            self._params = dict(urllib.parse.parse_qsl(
                self.env.get('QUERY_STRING') or '', keep_blank_values=True))
        return self._params

    def ok(self, body=''):
        '''Send a 200 response with the given text or bytes body.'''
        if isinstance(body, str):
            body = body.encode('utf-8')
        self._start(_('200 Ok'), self.headers)
        return [body]


class StatusCode(Exception):
    '''Base exception for HTTP error responses. The body defaults to the
    status line.'''

    status = '000 Undefined'

    def __init__(self, body=None, headers=None):
        self.headers = list(headers or [])
        body = self.status if body is None else body
        self.body = body.encode('utf-8') if isinstance(body, str) else body
        if not header_exists('Content-Type', self.headers):
            self.headers.append(('Content-Type', 'text/plain; charset=utf-8'))
        super(StatusCode, self).__init__(self.status)


class BadRequest(StatusCode):
    '''Exception for a 400 response.'''

    status = _('400 Bad Request')


class NotFound(StatusCode):
    '''Exception for a 404 response.'''

    status = _('404 Not Found')


class MethodNotAllowed(StatusCode):
    '''Exception for a 405 response.'''

    status = _('405 Method Not Allowed')


class InternalServerError(StatusCode):
    '''Exception for a 500 response.'''

    status = _('500 Internal Server Error')


def header_exists(name, headers):
    '''Check for a header by name, ignoring case.'''
    name = name.lower()
    return any(header[0].lower() == name for header in headers)
