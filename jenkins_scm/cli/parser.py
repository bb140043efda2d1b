#!/usr/bin/env python
# Copyright (C) 2015 Wayne Warren
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.

import argparse
import os

from stevedore import extension

from jenkins_scm import version

SUBCOMMAND_NAMESPACE = 'jenkins_scm.cli.subcommands'


def __version__():
    return "Jenkins SCM Builder version: %s" % version.version_string


def create_parser():
    """ Create an ArgumentParser object usable by JenkinsScm.
    """
    parser = argparse.ArgumentParser()
    parser.add_argument(
        '--conf',
        dest='conf',
        default=os.environ.get('JSB_CONF', None),
        help="configuration file [JSB_CONF]")
    parser.add_argument(
        '-l',
        '--log_level',
        dest='log_level',
        default=os.environ.get('JSB_LOG_LEVEL', 'info'),
        help="log level (default: %(default)s) [JSB_LOG_LEVEL]")
    parser.add_argument(
        '--version',
        dest='version',
        action='version',
        version=__version__(),
        help="show version")

    subparser = parser.add_subparsers(
        dest='command',
        help="test")

    extension_manager = extension.ExtensionManager(
        namespace=SUBCOMMAND_NAMESPACE,
        invoke_on_load=True,
    )

    def parse_subcommand_args(ext, subparser):
        ext.obj.parse_args(subparser)

    extension_manager.map(parse_subcommand_args, subparser)

    return parser
