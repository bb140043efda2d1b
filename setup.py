# Copyright 2012 Hewlett-Packard Development Company, L.P.
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.

import os

import setuptools

from jenkins_scm.version import version_string


def parse_requirements(filename):
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), filename)
    with open(path) as f:
        return [line.strip() for line in f
                if line.strip() and not line.startswith('#')]


setuptools.setup(
    name='jenkins-scm-builder',
    version=version_string,
    author='Hewlett-Packard Development Company, L.P.',
    author_email='openstack@lists.launchpad.net',
    description='Generate Jenkins SCM plugin configuration from YAML',
    license='Apache License, Version 2.0',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    install_requires=parse_requirements('requirements.txt'),
    extras_require={
        'test': parse_requirements('test-requirements.txt'),
    },
    python_requires='>=3.8',
    zip_safe=False,
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
    entry_points={
        'console_scripts': [
            'jenkins-scm=jenkins_scm.cli.entry:main',
        ],
        'jenkins_scm.cli.subcommands': [
            'test=jenkins_scm.cli.subcommand.test:TestSubCommand',
        ],
    }
)
