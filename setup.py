#!/usr/bin/env python
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import setuptools

project = 'bladepower'

setuptools.setup(
    name=project,
    version='0.1.0',
    description='Power management of OneView server hardware',
    classifiers=[
        'Environment :: OpenStack',
        'Intended Audience :: Information Technology',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        ],
    packages=setuptools.find_packages(include=['bladepower', 'bladepower.*']),
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'futurist>=1.2.0',
        'oslo.config>=6.8.0',
        'oslo.i18n>=3.15.3',
        'oslo.log>=4.3.0',
        'oslo.serialization>=2.25.0',
        'oslo.utils>=4.5.0',
        'requests>=2.18.0',
    ],
    extras_require={
        'test': [
            'fixtures>=3.0.0',
            'oslotest>=3.2.0',
            'stestr>=2.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'bladepower-power = bladepower.cmd.power:main',
        ],
        'oslo.config.opts': [
            'bladepower = bladepower.conf.opts:list_opts',
        ],
        'oslo.config.opts.defaults': [
            'bladepower = bladepower.conf.opts:update_opt_defaults',
        ],
    },
)
