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

'''Tests for keybase62 command line tool.'''

import io
import unittest

import keybase62.codec
import keybase62.config
import keybase62.service
import keybase62.tool

KEY = 'test-key-123'
CONFIG = keybase62.config.update(keybase62.service.DEFAULT_CONFIG, {
    'keybase62': {
        'key': {
            'env': 'KEYBASE62_TEST_UNSET_KEY',
            'key': KEY}}})


def run(args, stdin='', config=None):
    '''Run the tool and return the exit status, output lines, and error
    lines.'''
    stdout = io.StringIO()
    stderr = io.StringIO()
    status = keybase62.tool.run(config or CONFIG, list(args),
        io.StringIO(stdin), stdout, stderr)
    return status, stdout.getvalue().splitlines(), \
        stderr.getvalue().splitlines()


class TestTool(unittest.TestCase):

    def setUp(self):
        self.codec = keybase62.codec.Codec(KEY)

    def test_int64(self):
        status, lines, errors = run(['encode-int64', '1', '-5', '12345'])
        self.assertEqual(0, status)
        self.assertEqual([self.codec.encode_int64(number)
            for number in [1, -5, 12345]], lines)
        self.assertEqual([], errors)
        status, lines, _errors = run(['decode-int64'] + lines)
        self.assertEqual(0, status)
        self.assertEqual(['1', '-5', '12345'], lines)

    def test_int32(self):
        status, lines, _errors = run(['encode-int32', '2147483647'])
        self.assertEqual(0, status)
        self.assertEqual(['2147483647'], run(['decode-int32'] + lines)[1])
        status, lines, errors = run(['encode-int32', '2147483648'])
        self.assertEqual(1, status)
        self.assertEqual([], lines)
        self.assertTrue(errors[0].startswith('Error:'))

    def test_int(self):
        status, lines, _errors = run(['encode-int', str(10 ** 30)])
        self.assertEqual(0, status)
        self.assertEqual([str(10 ** 30)], run(['decode-int'] + lines)[1])

    def test_stdin(self):
        status, lines, _errors = run(['encode-text'], 'hello\nworld é\n')
        self.assertEqual(0, status)
        self.assertEqual([self.codec.encode_text('hello'),
            self.codec.encode_text('world é')], lines)
        status, lines, _errors = run(['decode-text'],
            '\n'.join(lines) + '\n')
        self.assertEqual(['hello', 'world é'], lines)

    def test_alphabet(self):
        self.assertEqual((0, [self.codec.shuffled_alphabet], []),
            run(['alphabet']))

    def test_generate_key(self):
        status, lines, _errors = run(['generate-key'])
        self.assertEqual(0, status)
        self.assertEqual(32, len(lines[0]))
        status, lines, _errors = run(['generate-key', '10'])
        self.assertEqual(10, len(lines[0]))
        self.assertEqual(1, run(['generate-key', '0'])[0])
        self.assertEqual(1, run(['generate-key', 'x'])[0])

    def test_errors(self):
        status, lines, errors = run([])
        self.assertEqual(1, status)
        self.assertEqual([], lines)
        self.assertIn('encode-int64', errors[0])
        status, lines, errors = run(['unknown'])
        self.assertEqual(1, status)
        self.assertEqual(['Unknown command: unknown'], errors)
        self.assertEqual(1, run(['encode-int64', 'abc'])[0])

    def test_errors_after_output(self):
        token = self.codec.encode_int64(7)
        status, lines, errors = run(['decode-int64', token, '!'])
        self.assertEqual(1, status)
        self.assertEqual(['7'], lines)
        self.assertEqual(1, len(errors))
        self.assertTrue(errors[0].startswith('Error:'))

    def test_missing_key(self):
        config = keybase62.config.update(CONFIG,
            {'keybase62': {'key': {'key': None}}})
        status, lines, errors = run(['encode-int64', '1'], config=config)
        self.assertEqual(1, status)
        self.assertEqual([], lines)
        self.assertIn('KEYBASE62_TEST_UNSET_KEY', errors[0])
        self.assertEqual(0, run(['generate-key'], config=config)[0])
