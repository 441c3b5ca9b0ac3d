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

'''keybase62 anybase module.

This module provides functions to encode and decode signed numbers using
any character set given to it, with the base being the length of the
character set. By default it uses the 62 character set of digits,
uppercase, and lowercase letters to make URL-safe encodings. For example::

    >>> keybase62.anybase.encode(1234567890)
    '1LY7VK'
    >>> keybase62.anybase.decode('1LY7VK')
    1234567890

Negative numbers are prefixed with the last character of the set, the sign
marker::

    >>> keybase62.anybase.encode(-62)
    'z10'

Since the sign marker is also the highest digit, a positive number whose
leading digit is the highest digit gets one leading zero digit so it can
never be read back as negative::

    >>> keybase62.anybase.encode(61)
    '0z'

Other encoders of this format leave that zero digit off, so their tokens
for these numbers differ from ours ('z' where we give '0z') and decode as
negative. Tokens from this module decode the same everywhere, and tokens
for all other numbers match byte for byte.

Pass signed=False to treat values as plain magnitudes with no sign marker
at all. To use a custom character set, pass it as the encoding, and
optionally a prebuilt decoding dict to save rebuilding it on every call::

    >>> encoding = 'abcdefghij'
    >>> decoding = keybase62.anybase.get_decoding(encoding)
    >>> keybase62.anybase.encode(1234567890, encoding, signed=False)
    'bcdefghija'
    >>> keybase62.anybase.decode('bcdefghija', encoding, decoding, False)
    1234567890
'''

ENCODING = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz'


def get_decoding(encoding):
    '''Build the character to digit value dict for an encoding.'''
    return dict((char, index) for index, char in enumerate(encoding))


DECODING = get_decoding(ENCODING)


def encode(number, encoding=None, signed=True):
    '''Encode a number using the optional encoding.'''
    encoding = encoding or ENCODING
    base = len(encoding)
    if number == 0:
        return encoding[0]
    negative = number < 0
    if negative and not signed:
        raise ValueError(_('Cannot encode negative number unsigned: %d') %
            number)
    number = abs(number)
    encoded = []
    while number > 0:
        number, digit = divmod(number, base)
        encoded.append(encoding[digit])
    if signed:
        if negative:
            encoded.append(encoding[-1])
        elif encoded[-1] == encoding[-1]:
            encoded.append(encoding[0])
    return ''.join(reversed(encoded))


def decode(string, encoding=None, decoding=None, signed=True):
    '''Decode a string using the optional encoding.'''
    encoding = encoding or ENCODING
    if decoding is None:
        decoding = DECODING if encoding == ENCODING else get_decoding(encoding)
    base = len(encoding)
    negative = signed and string[:1] == encoding[-1]
    if negative:
        string = string[1:]
    number = 0
    for char in string:
        try:
            number = number * base + decoding[char]
        except KeyError:
            raise InvalidCharacter(char)
    if negative:
        return -number
    return number


class Error(Exception):
    '''Base exception for all encoding and decoding errors.'''

    pass


class InvalidCharacter(Error, ValueError):
    '''Exception raised when a string being decoded has a character that
    is not in the encoding, or decodes to something that is not valid.'''

    def __init__(self, char, message=None):
        self.char = char
        super(InvalidCharacter, self).__init__(
            message or _('Invalid character: %r') % char)
