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

'''keybase62 package.

Keyed base 62 encoding: a secret key shuffles the base 62 alphabet and
the shuffled alphabet is used to turn numbers and text into short URL-safe
tokens and back again. Tokens made with one key can only be read back with
the same key. This hides the mapping, it does not encrypt anything.

See keybase62.codec for the main entry point, and the documentation for
each module for specifics on how it should be used.'''

# Install the _(...) function as a built-in so all other modules don't need to.
import gettext
gettext.install('keybase62')

__version__ = '0.1.0'
