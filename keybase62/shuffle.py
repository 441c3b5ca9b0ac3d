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

'''keybase62 shuffle module.

This module provides a function to shuffle an alphabet using a secret key.
The shuffle is a Fisher-Yates walk from the last symbol down to the second,
where each swap position comes from a byte of the SHA-256 digest of the
key. There is no other source of randomness, so the same key always gives
the same alphabet::

    >>> keybase62.shuffle.shuffle('abcd', 'secret') == \\
    ...     keybase62.shuffle.shuffle('abcd', 'secret')
    True

Digest bytes are read as signed 8-bit values and their absolute value is
used, so 0x80 counts as 128. Alphabets shuffled by other implementations
of this scheme with the same key come out identical.'''

import hashlib


def shuffle(alphabet, key):
    '''Shuffle the alphabet using the given key. Text keys are hashed as
    UTF-8 bytes.'''
    if isinstance(key, str):
        key = key.encode('utf-8')
    if not key:
        raise ValueError(_('Cannot shuffle with an empty key'))
    digest = hashlib.sha256(key).digest()
    symbols = list(alphabet)
    for index in range(len(symbols) - 1, 0, -1):
        seed = digest[index % len(digest)]
        if seed > 127:
            seed -= 256
        swap = abs(seed) % (index + 1)
        symbols[index], symbols[swap] = symbols[swap], symbols[index]
    return ''.join(symbols)
