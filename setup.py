#!/usr/bin/env python3
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

'''keybase62 package setuptools script.'''

import setuptools

import keybase62

setuptools.setup(
    name='keybase62',
    version=keybase62.__version__,
    description='Keyed base 62 encoding of numbers and text',
    long_description=open('README.rst').read(),
    packages=setuptools.find_packages(exclude=['test*']),
    scripts=['bin/keybase62'],
    python_requires='>=3.8',
    install_requires=['gevent'],
    extras_require={'test': ['pytest']},
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Environment :: No Input/Output (Daemon)',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules'])
