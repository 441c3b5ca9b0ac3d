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

'''keybase62 config module.

This module loads configuration for the command line tool and the HTTP
service. Configuration objects are nested dictionaries, and every module
that needs configuration defines a DEFAULT_CONFIG dict with its options.
The key module, for example, has::

    DEFAULT_CONFIG = {
        'keybase62': {
            'key': {
                'env': 'KEYBASE62_SECRET_KEY',
                'key': None,
                'key_file': None,
                'log_level': 'NOTSET'}}}

Defaults are composed with update() and passed to load()::

    config, args = keybase62.config.load(DEFAULT_CONFIG)

This returns a config dictionary updated from config files and command
line options, along with any remaining arguments. Every option in the
config is also a command line option using dot notation, so the key can
be given with --keybase62.key.key=VALUE. Multiple config files and
directories can be loaded with the last one overriding previous options,
and command line options override values in config files.

Config files are JSON. Any lines that begin with whitespace and then a
'#' are removed during parsing to allow for comments.'''

import json
import optparse
import os.path
import sys

import keybase62

VALID_JSON_BYTES = dict((str(byte), None)
    for byte in list(range(10)) + ['-', '[', '{', '"'])
VALID_JSON_WORDS = dict((word, None) for word in ['true', 'false', 'null'])


def load(config, config_files=None, config_dirs=None, expect_args=True,
        args=None):
    '''Load config from files, directories, and command line options. This
    function exits with success (0) if the version, help, or print config
    options are given, and exits with failure (1) on any errors.'''
    parser = _parser(config)
    (options, args) = parser.parse_args(args)

    try:
        config = _load_files(config, options, config_files, config_dirs)
    except (ConfigError, OSError) as exception:
        print(str(exception))
        sys.exit(1)

    for option in get_options(config):
        value = getattr(options, option, None)
        if value is not None:
            try:
                config = update_option(config, option, value)
            except ValueError as exception:
                print(_('Error parsing option: %s (%s)') % (option, exception))
                sys.exit(1)
    if options.debug:
        config = update(config,
            dict(keybase62=dict(log=dict(console=True, level='DEBUG'))))
    elif options.verbose:
        config = update(config,
            dict(keybase62=dict(log=dict(console=True, level='INFO'))))
    if options.version:
        print(keybase62.__version__)
        sys.exit(0)
    if options.help:
        parser.print_help()
        print(_('\nCurrent config:'))
    if options.help or options.print_config:
        print(json.dumps(config, indent=4, sort_keys=True))
        sys.exit(0)
    if not expect_args and len(args) > 0:
        print(_('Unexpected args: %s') % args)
        sys.exit(1)

    return config, args


def _parser(config):
    '''Build the option parser for the standard flags plus one option for
    every value in the config.'''
    parser = optparse.OptionParser(add_help_option=False,
        usage=_('%prog [options] [args]'))
    parser.add_option('-c', '--config', action='append', default=[],
        help=_('Config file to use, can use this option more than once'))
    parser.add_option('-C', '--config_dir', action='append', default=[],
        help=_('Config directory to use, can use this option more than once'))
    parser.add_option('-d', '--debug', action='store_true',
        help=_('Show debugging output'))
    parser.add_option('-h', '--help', action='store_true',
        help=_('Show this help message and exit'))
    parser.add_option('-n', '--no_config', action='store_true',
        help=_('Do not load any default config files'))
    parser.add_option('-p', '--print_config', action='store_true',
        help=_('Print parsed config and exit'))
    parser.add_option('-v', '--verbose', action='store_true',
        help=_('Show more verbose output'))
    parser.add_option('-V', '--version', action='store_true',
        help=_('Print version and exit'))
    for option in get_options(config):
        parser.add_option('', '--%s' % option, metavar='VALUE')
    return parser


def _load_files(config, options, config_files, config_dirs):
    '''Load all config files from default and user given locations.'''
    if not options.no_config:
        for config_dir in config_dirs or []:
            if os.path.exists(config_dir):
                config = load_dir(config, config_dir)
        for config_file in config_files or []:
            if os.path.exists(config_file):
                config = load_file(config, config_file)
    for config_dir in options.config_dir:
        config = load_dir(config, config_dir)
    for config_file in options.config:
        config = load_file(config, config_file)
    return config


def parse_value(value):
    '''Convert a string value to a native type. We don't use raw JSON so
    we can pass unquoted strings and read from standard input. Values that
    look like JSON but don't parse as JSON are kept as strings.'''
    if not isinstance(value, str):
        return value
    if value == '-':
        value = sys.stdin.read()
    if value == '':
        return value
    if value[0] in VALID_JSON_BYTES or value in VALID_JSON_WORDS:
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def load_file(config, config_file):
    '''Load a JSON file into the given config, stripping out comments.'''
    lines = []
    with open(os.path.expanduser(config_file)) as config_fd:
        for line in config_fd:
            if line.lstrip()[:1] == '#':
                line = '\n'
            lines.append(line)
    try:
        return update(config, json.loads(''.join(lines)))
    except (ValueError, AttributeError) as exception:
        raise ConfigError(_('Could not parse config file: %s (%s)') %
            (config_file, exception))


def load_dir(config, config_dir):
    '''Load a directory of JSON files in sorted order into the given config.'''
    for config_file in sorted(os.listdir(os.path.expanduser(config_dir))):
        config = load_file(config, os.path.join(config_dir, config_file))
    return config


def update(config, *new_configs):
    '''Update the given config with a new one, copying if needed to ensure
    the original config dict passed in is not modified.'''
    copied = False
    for new_config in new_configs:
        for key, value in new_config.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                value = update(config[key], value)
            if not copied:
                config = config.copy()
                copied = True
            config[key] = value
    return config


def get_options(config, prefix=None):
    '''Get a flat list of options in the given config using dot notation
    (a.b.c) to separate nested dict keys.'''
    prefix = prefix or []
    for key in sorted(config):
        parts = prefix + [key]
        if isinstance(config[key], dict) and config[key] != {}:
            for option in get_options(config[key], parts):
                yield option
        else:
            yield '.'.join(parts)


def update_option(config, name, value):
    '''Update a single value in the given config using dot notation (a.b.c)
    for the name, where each part in the name becomes a nested dict key.'''
    option = parse_value(value)
    for part in reversed(name.split('.')):
        option = {part: option}
    return update(config, option)


class ConfigError(Exception):
    '''Exception raised when an error is encountered while checking config.'''

    pass
