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

'''keybase62 codec module.

This module provides the Codec class, which binds a secret key to a
shuffled alphabet and encodes text and numbers with it. The alphabet is
shuffled once when the codec is created and never changes after that, so
a codec can be shared between threads freely. For example::

    >>> codec = keybase62.codec.Codec('my secret key')
    >>> codec.decode_int64(codec.encode_int64(-42))
    -42
    >>> codec.decode_text(codec.encode_text('hello'))
    'hello'

Text is encoded by reading its UTF-8 bytes as one big-endian number, so
leading NUL characters are lost on the way back.

Text tokens match other implementations of this format byte for byte.
Signed number tokens do too, except for non-negative numbers whose
leading digit is the last alphabet symbol. Those get one extra leading
digit, the first alphabet symbol, so they are not read back as negative.
Older tokens for those numbers decode as negative values here, as they
did before. See keybase62.anybase for details.

Errors are raised as exceptions from the Error hierarchy. Callers that
would rather inspect a result than catch exceptions can use outcome()::

    >>> result = keybase62.codec.outcome(codec.decode_int32, '!')
    >>> result.value, type(result.error).__name__
    (None, 'InvalidCharacter')
'''

import collections

import keybase62.anybase
import keybase62.log
import keybase62.shuffle

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

Error = keybase62.anybase.Error
InvalidCharacter = keybase62.anybase.InvalidCharacter

Outcome = collections.namedtuple('Outcome', ['value', 'error'])


class Codec(object):
    '''Encode and decode values using an alphabet shuffled by a secret
    key.'''

    def __init__(self, key, alphabet=None):
        if not isinstance(key, (str, bytes)) or not key:
            raise InvalidKey(_('Secret key cannot be empty'))
        alphabet = alphabet or keybase62.anybase.ENCODING
        if len(alphabet) < 2 or len(set(alphabet)) != len(alphabet):
            raise InvalidArgument(
                _('Alphabet needs at least two distinct characters'))
        self.log = keybase62.log.get_log('keybase62_codec')
        self._encoding = keybase62.shuffle.shuffle(alphabet, key)
        self._decoding = keybase62.anybase.get_decoding(self._encoding)
        self.log.debug(_('Shuffled alphabet of %d characters'),
            len(self._encoding))

    @property
    def shuffled_alphabet(self):
        '''The alphabet after shuffling it with the key.'''
        return self._encoding

    def encode_text(self, text):
        '''Encode text as the number formed by its UTF-8 bytes.'''
        if not text:
            return ''
        if not isinstance(text, str):
            raise InvalidArgument(_('Not text: %r') % (text,))
        number = int.from_bytes(text.encode('utf-8'), 'big')
        return keybase62.anybase.encode(number, self._encoding, signed=False)

    def decode_text(self, encoded):
        '''Decode text encoded with encode_text.'''
        if not encoded:
            return ''
        if not isinstance(encoded, str):
            raise InvalidArgument(_('Not text: %r') % (encoded,))
        number = keybase62.anybase.decode(encoded, self._encoding,
            self._decoding, False)
        data = number.to_bytes((number.bit_length() + 7) // 8, 'big')
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as exception:
            raise InvalidCharacter(None,
                _('Decoded bytes are not valid UTF-8: %s') % exception)

    def encode_int(self, number):
        '''Encode an integer of any size.'''
        _check_int(number)
        return keybase62.anybase.encode(number, self._encoding)

    def encode_int32(self, number):
        '''Encode a signed 32 bit integer.'''
        return self.encode_int(_check_range(number, INT32_MIN, INT32_MAX))

    def encode_int64(self, number):
        '''Encode a signed 64 bit integer.'''
        return self.encode_int(_check_range(number, INT64_MIN, INT64_MAX))

    def decode_int(self, encoded):
        '''Decode an integer of any size.'''
        if not isinstance(encoded, str) or encoded == '':
            raise InvalidArgument(_('Encoded value cannot be empty'))
        return keybase62.anybase.decode(encoded, self._encoding,
            self._decoding)

    def decode_int32(self, encoded):
        '''Decode a signed 32 bit integer.'''
        return _check_range(self.decode_int(encoded), INT32_MIN, INT32_MAX)

    def decode_int64(self, encoded):
        '''Decode a signed 64 bit integer.'''
        return _check_range(self.decode_int(encoded), INT64_MIN, INT64_MAX)


def _check_int(number):
    '''Make sure a value given as an integer really is one.'''
    if number is None:
        raise InvalidArgument(_('Number cannot be empty'))
    if isinstance(number, bool) or not isinstance(number, int):
        raise InvalidArgument(_('Not an integer: %r') % (number,))


def _check_range(number, minimum, maximum):
    '''Return the number if it fits between minimum and maximum.'''
    _check_int(number)
    if number < minimum or number > maximum:
        raise RangeOverflow(number, minimum, maximum)
    return number


def outcome(function, *args, **kwargs):
    '''Run a codec operation and return an Outcome instead of raising. The
    error is None on success, otherwise it is the Error that was raised
    and the value is None.'''
    try:
        return Outcome(function(*args, **kwargs), None)
    except Error as exception:
        return Outcome(None, exception)


class InvalidKey(Error, ValueError):
    '''Exception raised when a codec is created without a usable key.'''

    pass


class InvalidArgument(Error, ValueError):
    '''Exception raised when a required value is missing or has the
    wrong type.'''

    pass


class RangeOverflow(Error, OverflowError):
    '''Exception raised when a number does not fit the requested integer
    width.'''

    def __init__(self, number, minimum, maximum):
        self.number = number
        super(RangeOverflow, self).__init__(
            _('Value %d out of range [%d, %d]') % (number, minimum, maximum))
