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

'''keybase62 command line tool.

Usage::

    keybase62 [options] <command> [value ...]

Commands that encode or decode take values as arguments, or read one value
per line from standard input if none are given, and print one result per
line. For example::

    $ export KEYBASE62_SECRET_KEY=my-secret-key
    $ keybase62 encode-int64 1 2 3
    $ seq 100 | keybase62 encode-int
    $ keybase62 generate-key 40
    $ keybase62 serve

Run with -h to see all options, including every config option.'''

import sys

import keybase62.codec
import keybase62.config
import keybase62.key
import keybase62.log
import keybase62.service

COMMANDS = {
    'encode-text': ('encode_text', str),
    'decode-text': ('decode_text', str),
    'encode-int': ('encode_int', int),
    'decode-int': ('decode_int', str),
    'encode-int32': ('encode_int32', int),
    'decode-int32': ('decode_int32', str),
    'encode-int64': ('encode_int64', int),
    'decode-int64': ('decode_int64', str)}


def run(config, args, stdin=None, stdout=None, stderr=None):
    '''Run a tool command, returning the exit status. Results go to stdout
    and errors to stderr.'''
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    if len(args) == 0:
        print(_('Missing command, one of: %s') %
            ', '.join(sorted(list(COMMANDS) +
                ['alphabet', 'generate-key', 'serve'])), file=stderr)
        return 1
    command = args.pop(0)
    try:
        if command == 'generate-key':
            length = int(args[0]) if args else 32
            print(keybase62.key.generate(length), file=stdout)
            return 0
        if command == 'serve':
            keybase62.service.run(config)
            return 0
        if command == 'alphabet':
            codec = keybase62.codec.Codec(keybase62.key.load(config))
            print(codec.shuffled_alphabet, file=stdout)
            return 0
        if command not in COMMANDS:
            print(_('Unknown command: %s') % command, file=stderr)
            return 1
        codec = keybase62.codec.Codec(keybase62.key.load(config))
        method, value_type = COMMANDS[command]
        operation = getattr(codec, method)
        if not args:
            args = (line.rstrip('\r\n') for line in stdin)
        for value in args:
            print(operation(value_type(value)), file=stdout)
    except (keybase62.codec.Error, ValueError) as exception:
        print(_('Error: %s') % exception, file=stderr)
        return 1
    return 0


def _main():
    '''Load config and run the command given on the command line.'''
    config, args = keybase62.config.load(keybase62.service.DEFAULT_CONFIG)
    secrets = []
    if keybase62.key.is_configured(config):
        secrets.append(keybase62.key.load(config))
    keybase62.log.setup(config, secrets)
    sys.exit(run(config, args))


if __name__ == '__main__':
    _main()
